"""
Unit tests for the natural-key deduplicator
"""
import pandas as pd
import pytest

from src.housing_cleaner.models.schema import RAW_COLUMNS
from src.housing_cleaner.pipelines.deduplication import SaleDeduplicator


class TestSaleDeduplicator:
    """Tests for SaleDeduplicator class"""

    def test_rank_duplicates_orders_by_unique_id(self, record_factory, frame_factory):
        """Records sharing a natural key are ranked by identifier, not scan order"""
        df = frame_factory([
            record_factory("300"),
            record_factory("100"),
            record_factory("200"),
        ])

        ranks = SaleDeduplicator().rank_duplicates(df)

        assert ranks.tolist() == [3, 1, 2]

    def test_numeric_identifiers_compare_as_numbers(self, record_factory, frame_factory):
        """'9' sorts before '10'"""
        df = frame_factory([record_factory("10"), record_factory("9")])

        SaleDeduplicator().remove_duplicates(df)

        assert df["UniqueID"].tolist() == ["9"]

    def test_remove_duplicates_keeps_first(self, sample_raw_frame):
        """The lower identifier of a duplicate pair survives"""
        deduplicator = SaleDeduplicator()

        report = deduplicator.remove_duplicates(sample_raw_frame)

        assert report.records_before == 5
        assert report.records_removed == 1
        assert report.duplicate_groups == 1
        assert report.records_after == 4
        assert "54582" not in sample_raw_frame["UniqueID"].tolist()
        assert "16918" in sample_raw_frame["UniqueID"].tolist()
        assert deduplicator.records_mutated == 1

    def test_non_key_columns_do_not_distinguish(self, record_factory, frame_factory):
        """SoldAsVacant and counts are outside the natural key"""
        df = frame_factory([
            record_factory("1", SoldAsVacant="Y", Bedrooms="3"),
            record_factory("2", SoldAsVacant="No", Bedrooms="4"),
        ])

        report = SaleDeduplicator().remove_duplicates(df)

        assert report.records_removed == 1
        assert df["UniqueID"].tolist() == ["1"]

    def test_key_column_difference_keeps_both(self, record_factory, frame_factory):
        """Records differing in any key column are distinct"""
        df = frame_factory([
            record_factory("1", SalePrice="240000"),
            record_factory("2", SalePrice="240001"),
        ])

        report = SaleDeduplicator().remove_duplicates(df)

        assert report.records_removed == 0
        assert len(df) == 2

    def test_nulls_in_same_positions_group_together(self, record_factory, frame_factory):
        """Null key values match other nulls in the same column"""
        df = frame_factory([
            record_factory("1", PropertyAddress=None, Acreage=None),
            record_factory("2", PropertyAddress=None, Acreage=None),
            record_factory("3", PropertyAddress=None),
        ])

        report = SaleDeduplicator().remove_duplicates(df)

        assert report.records_removed == 1
        assert sorted(df["UniqueID"].tolist()) == ["1", "3"]

    def test_null_does_not_match_empty_string(self, record_factory, frame_factory):
        df = frame_factory([
            record_factory("1", OwnerAddress=None),
            record_factory("2", OwnerAddress=""),
        ])

        assert SaleDeduplicator().count_duplicates(df) == 0

    def test_count_duplicates_does_not_mutate(self, sample_raw_frame):
        before = sample_raw_frame.copy()

        count = SaleDeduplicator().count_duplicates(sample_raw_frame)

        assert count == 1
        pd.testing.assert_frame_equal(sample_raw_frame, before)

    def test_remove_duplicates_is_idempotent(self, sample_raw_frame):
        deduplicator = SaleDeduplicator()

        deduplicator.remove_duplicates(sample_raw_frame)
        second = deduplicator.remove_duplicates(sample_raw_frame)

        assert second.records_removed == 0
        assert len(sample_raw_frame) == 4

    def test_empty_relation(self):
        df = pd.DataFrame(columns=RAW_COLUMNS, dtype=object)

        report = SaleDeduplicator().remove_duplicates(df)

        assert report.records_removed == 0
        assert report.duplicate_groups == 0

    def test_surviving_set_is_deterministic(self, record_factory, frame_factory):
        """Row order of the input does not change which records survive"""
        records = [
            record_factory("5"),
            record_factory("3", SalePrice="1"),
            record_factory("4", SalePrice="1"),
            record_factory("2"),
        ]
        forward = frame_factory(records)
        backward = frame_factory(list(reversed(records)))

        SaleDeduplicator().remove_duplicates(forward)
        SaleDeduplicator().remove_duplicates(backward)

        assert sorted(forward["UniqueID"]) == sorted(backward["UniqueID"]) == ["2", "3"]


class TestLargeScaleDeduplication:
    """End-to-end duplicate counts on a dataset the size of the source table"""

    @pytest.fixture
    def large_frame(self, record_factory, frame_factory):
        base_count = 56_000 - 104
        records = []
        for i in range(base_count):
            records.append(record_factory(
                str(i + 1),
                ParcelID=f"{i // 3:05d} 00 0 001.00",
                LegalReference=f"2013{i:08d}",
                PropertyAddress=None if i % 500 == 0 else f"{i} MAIN ST, NASHVILLE",
            ))
        # 104 exact natural-key copies, half of them with a null address
        for n, source in enumerate(range(0, 104 * 250, 250)):
            copy = dict(records[source])
            copy["UniqueID"] = str(base_count + n + 1)
            records.append(copy)
        return frame_factory(records)

    def test_removes_exactly_104_records(self, large_frame):
        deduplicator = SaleDeduplicator()

        first = deduplicator.remove_duplicates(large_frame)
        second = deduplicator.remove_duplicates(large_frame)

        assert first.records_before == 56_000
        assert first.records_removed == 104
        assert first.duplicate_groups == 104
        assert len(large_frame) == 56_000 - 104
        assert second.records_removed == 0
