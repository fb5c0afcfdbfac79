"""
Housing Sale Schema

Column names for the raw, derived and cleaned housing sale relations.
"""
from typing import Tuple, Union

UNIQUE_ID = "UniqueID"
PARCEL_ID = "ParcelID"
PROPERTY_ADDRESS = "PropertyAddress"
SALE_DATE = "SaleDate"
SALE_PRICE = "SalePrice"
SOLD_AS_VACANT = "SoldAsVacant"
OWNER_ADDRESS = "OwnerAddress"
ACREAGE = "Acreage"

RAW_COLUMNS = [
    UNIQUE_ID,
    PARCEL_ID,
    "LandUse",
    PROPERTY_ADDRESS,
    SALE_DATE,
    SALE_PRICE,
    "LegalReference",
    SOLD_AS_VACANT,
    "OwnerName",
    OWNER_ADDRESS,
    ACREAGE,
    "TaxDistrict",
    "LandValue",
    "BuildingValue",
    "TotalValue",
    "YearBuilt",
    "Bedrooms",
    "FullBath",
    "HalfBath",
]

# Column widths of the source table definition
RAW_COLUMN_LENGTHS = {
    UNIQUE_ID: 20,
    PARCEL_ID: 50,
    "LandUse": 25,
    PROPERTY_ADDRESS: 150,
    SALE_DATE: 60,
    SALE_PRICE: 20,
    "LegalReference": 50,
    SOLD_AS_VACANT: 5,
    "OwnerName": 255,
    OWNER_ADDRESS: 255,
    ACREAGE: 10,
    "TaxDistrict": 100,
    "LandValue": 10,
    "BuildingValue": 10,
    "TotalValue": 10,
    "YearBuilt": 10,
    "Bedrooms": 10,
    "FullBath": 10,
    "HalfBath": 10,
}

NATURAL_KEY = [
    PARCEL_ID,
    PROPERTY_ADDRESS,
    SALE_DATE,
    SALE_PRICE,
    "LegalReference",
    "OwnerName",
    OWNER_ADDRESS,
    ACREAGE,
    "TaxDistrict",
    "LandValue",
    "BuildingValue",
    "TotalValue",
]

VALUE_COLUMNS = ["LandValue", "BuildingValue", "TotalValue"]
COUNT_COLUMNS = ["YearBuilt", "Bedrooms", "FullBath", "HalfBath"]

PROPERTY_SPLIT_ADDRESS = "PropertySplitAddress"
PROPERTY_SPLIT_CITY = "PropertySplitCity"
OWNER_SPLIT_ADDRESS = "OwnerSplitAddress"
OWNER_SPLIT_CITY = "OwnerSplitCity"
OWNER_SPLIT_STATE = "OwnerSplitState"

DERIVED_COLUMNS = [
    PROPERTY_SPLIT_ADDRESS,
    PROPERTY_SPLIT_CITY,
    OWNER_SPLIT_ADDRESS,
    OWNER_SPLIT_CITY,
    OWNER_SPLIT_STATE,
]

CLEANED_COLUMNS = [
    c for c in RAW_COLUMNS if c not in (PROPERTY_ADDRESS, OWNER_ADDRESS)
] + DERIVED_COLUMNS


def identifier_sort_key(unique_id: str) -> Tuple[int, Union[int, str]]:
    """
    Total order over record identifiers.

    All-digit identifiers compare numerically and sort before any other
    identifier, which compare as text.
    """
    text = str(unique_id).strip()
    if text.isdigit():
        return (0, int(text))
    return (1, text)
