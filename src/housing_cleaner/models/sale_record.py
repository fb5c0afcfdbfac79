"""
Cleaned Sale Record Model

Pydantic model describing one row of the cleaned housing sales relation.
"""
from datetime import date
from typing import Any, Mapping, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.housing_cleaner.models.schema import CLEANED_COLUMNS


class CleanedSaleRecord(BaseModel):
    """
    Property sale transaction after cleaning.

    Field aliases are the column names of the cleaned relation.

    Attributes:
        unique_id: Record identifier
        parcel_id: Parcel identifier shared by sales of the same parcel
        sale_date: Date of sale
        sale_price: Sale price in whole dollars
        sold_as_vacant: "Yes", "No" or an unrecognized source value
        acreage: Parcel acreage
        property_split_address: Street part of the property address
        owner_split_state: State part of the owner address
    """

    model_config = ConfigDict(populate_by_name=True)

    unique_id: str = Field(..., alias="UniqueID", min_length=1)
    parcel_id: Optional[str] = Field(None, alias="ParcelID")
    land_use: Optional[str] = Field(None, alias="LandUse")
    sale_date: Optional[date] = Field(None, alias="SaleDate")
    sale_price: Optional[int] = Field(None, alias="SalePrice", ge=0)
    legal_reference: Optional[str] = Field(None, alias="LegalReference")
    sold_as_vacant: Optional[str] = Field(None, alias="SoldAsVacant")
    owner_name: Optional[str] = Field(None, alias="OwnerName")
    acreage: Optional[float] = Field(None, alias="Acreage", ge=0)
    tax_district: Optional[str] = Field(None, alias="TaxDistrict")
    land_value: Optional[int] = Field(None, alias="LandValue", ge=0)
    building_value: Optional[int] = Field(None, alias="BuildingValue", ge=0)
    total_value: Optional[int] = Field(None, alias="TotalValue", ge=0)
    year_built: Optional[int] = Field(None, alias="YearBuilt", ge=0)
    bedrooms: Optional[int] = Field(None, alias="Bedrooms", ge=0)
    full_bath: Optional[int] = Field(None, alias="FullBath", ge=0)
    half_bath: Optional[int] = Field(None, alias="HalfBath", ge=0)
    property_split_address: Optional[str] = Field(None, alias="PropertySplitAddress")
    property_split_city: Optional[str] = Field(None, alias="PropertySplitCity")
    owner_split_address: Optional[str] = Field(None, alias="OwnerSplitAddress")
    owner_split_city: Optional[str] = Field(None, alias="OwnerSplitCity")
    owner_split_state: Optional[str] = Field(None, alias="OwnerSplitState")

    @field_validator("sold_as_vacant")
    @classmethod
    def check_sold_as_vacant(cls, v: Optional[str]) -> Optional[str]:
        """Short flags must have been canonicalized."""
        if v in ("Y", "N"):
            raise ValueError(f"SoldAsVacant not canonicalized: {v!r}")
        return v

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CleanedSaleRecord":
        """
        Build a record from a cleaned DataFrame row.

        Null cells (None, NaN, NaT, pd.NA) become None.
        """
        values = {}
        for column in CLEANED_COLUMNS:
            value = row.get(column)
            if value is not None and pd.isna(value):
                value = None
            elif hasattr(value, "item"):
                # numpy scalar
                value = value.item()
            values[column] = value
        return cls.model_validate(values)
