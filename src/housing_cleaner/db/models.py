"""
SQLAlchemy ORM Models

Raw housing sales table, every column stored as text exactly as loaded.
"""
from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.housing_cleaner.db.base import Base
from src.housing_cleaner.models.schema import RAW_COLUMN_LENGTHS as L


class RawHousingSale(Base):
    """
    One raw property sale record.

    Attribute names are the source column names so the table can be read
    straight into the pipeline's raw relation.
    """
    __tablename__ = "housingdata"

    UniqueID: Mapped[str] = mapped_column(String(L["UniqueID"]), primary_key=True)
    ParcelID: Mapped[Optional[str]] = mapped_column(String(L["ParcelID"]))
    LandUse: Mapped[Optional[str]] = mapped_column(String(L["LandUse"]))
    PropertyAddress: Mapped[Optional[str]] = mapped_column(String(L["PropertyAddress"]))
    SaleDate: Mapped[Optional[str]] = mapped_column(String(L["SaleDate"]))
    SalePrice: Mapped[Optional[str]] = mapped_column(String(L["SalePrice"]))
    LegalReference: Mapped[Optional[str]] = mapped_column(String(L["LegalReference"]))
    SoldAsVacant: Mapped[Optional[str]] = mapped_column(String(L["SoldAsVacant"]))
    OwnerName: Mapped[Optional[str]] = mapped_column(String(L["OwnerName"]))
    OwnerAddress: Mapped[Optional[str]] = mapped_column(String(L["OwnerAddress"]))
    Acreage: Mapped[Optional[str]] = mapped_column(String(L["Acreage"]))
    TaxDistrict: Mapped[Optional[str]] = mapped_column(String(L["TaxDistrict"]))
    LandValue: Mapped[Optional[str]] = mapped_column(String(L["LandValue"]))
    BuildingValue: Mapped[Optional[str]] = mapped_column(String(L["BuildingValue"]))
    TotalValue: Mapped[Optional[str]] = mapped_column(String(L["TotalValue"]))
    YearBuilt: Mapped[Optional[str]] = mapped_column(String(L["YearBuilt"]))
    Bedrooms: Mapped[Optional[str]] = mapped_column(String(L["Bedrooms"]))
    FullBath: Mapped[Optional[str]] = mapped_column(String(L["FullBath"]))
    HalfBath: Mapped[Optional[str]] = mapped_column(String(L["HalfBath"]))

    def __repr__(self) -> str:
        return f"<RawHousingSale(UniqueID={self.UniqueID}, ParcelID={self.ParcelID})>"
