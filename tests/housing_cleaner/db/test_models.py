"""
Tests for the raw housing sales table model
"""
import pytest
from sqlalchemy import select

from src.housing_cleaner.db.models import RawHousingSale
from src.housing_cleaner.db.session import create_all_tables, create_db_engine, get_db_session
from src.housing_cleaner.etl.loaders import read_raw_table


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'housing.db'}")
    create_all_tables(engine)
    yield engine
    engine.dispose()


class TestRawHousingSale:
    """Tests for RawHousingSale model"""

    def test_table_columns_match_source(self):
        table = RawHousingSale.__table__

        assert table.name == "housingdata"
        assert table.c.UniqueID.primary_key
        assert table.c.PropertyAddress.type.length == 150
        assert table.c.SoldAsVacant.type.length == 5

    def test_insert_and_read_back(self, engine, record_factory):
        with get_db_session(engine) as session:
            session.add(RawHousingSale(**record_factory("2045", PropertyAddress=None)))

        with get_db_session(engine) as session:
            sale = session.scalars(select(RawHousingSale)).one()
            assert sale.UniqueID == "2045"
            assert sale.PropertyAddress is None

        df = read_raw_table(engine, "housingdata")
        assert df.iloc[0]["SaleDate"] == "9-Apr-13"

    def test_session_rolls_back_on_error(self, engine, record_factory):
        with pytest.raises(RuntimeError):
            with get_db_session(engine) as session:
                session.add(RawHousingSale(**record_factory("1")))
                session.flush()
                raise RuntimeError("boom")

        with get_db_session(engine) as session:
            assert session.scalars(select(RawHousingSale)).all() == []
