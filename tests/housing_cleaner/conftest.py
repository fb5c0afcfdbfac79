"""
Shared fixtures for housing cleaner tests.
"""
import pandas as pd
import pytest

from src.housing_cleaner.models.schema import RAW_COLUMNS


BASE_RECORD = {
    "UniqueID": "2045",
    "ParcelID": "007 00 0 125.00",
    "LandUse": "SINGLE FAMILY",
    "PropertyAddress": "1808  FOX CHASE DR, GOODLETTSVILLE",
    "SaleDate": "9-Apr-13",
    "SalePrice": "240000",
    "LegalReference": "20130412-0036474",
    "SoldAsVacant": "N",
    "OwnerName": "FRAZIER, CYRENTHA LYNETTE",
    "OwnerAddress": "1808  FOX CHASE DR, GOODLETTSVILLE, TN",
    "Acreage": "2.3",
    "TaxDistrict": "GENERAL SERVICES DISTRICT",
    "LandValue": "50000",
    "BuildingValue": "168200",
    "TotalValue": "235700",
    "YearBuilt": "1986",
    "Bedrooms": "3",
    "FullBath": "3",
    "HalfBath": "0",
}


def make_record(unique_id, **overrides):
    """Raw record with sensible defaults; overrides replace single columns."""
    record = dict(BASE_RECORD)
    record["UniqueID"] = str(unique_id)
    record.update(overrides)
    return record


def make_frame(records):
    """Raw relation with every column stored as text (object dtype)."""
    return pd.DataFrame(records, columns=RAW_COLUMNS, dtype=object)


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def frame_factory():
    return make_frame


@pytest.fixture
def sample_raw_frame():
    """Small raw relation with one duplicate pair and one missing address."""
    return make_frame([
        make_record(
            "2045",
            PropertyAddress="1808  FOX CHASE DR, GOODLETTSVILLE",
            SalePrice="$240,000",
            SoldAsVacant="N",
        ),
        make_record(
            "16918",
            ParcelID="007 00 0 377.00",
            PropertyAddress="1832  FOX CHASE DR, GOODLETTSVILLE",
            SaleDate="10-Jun-14",
            SalePrice="366000",
            LegalReference="20140619-0053768",
            SoldAsVacant="Yes",
            OwnerName="BONER, CHARLES & LESLIE",
            OwnerAddress="1832  FOX CHASE DR, GOODLETTSVILLE, TN",
        ),
        # exact natural-key copy of 16918 with a higher identifier
        make_record(
            "54582",
            ParcelID="007 00 0 377.00",
            PropertyAddress="1832  FOX CHASE DR, GOODLETTSVILLE",
            SaleDate="10-Jun-14",
            SalePrice="366000",
            LegalReference="20140619-0053768",
            SoldAsVacant="Y",
            OwnerName="BONER, CHARLES & LESLIE",
            OwnerAddress="1832  FOX CHASE DR, GOODLETTSVILLE, TN",
        ),
        make_record(
            "43076",
            ParcelID="025 07 0 031.00",
            PropertyAddress="410  ROSEHILL CT, GOODLETTSVILLE",
            SaleDate="4-Dec-13",
            SalePrice="1,200,000",
            LegalReference="20131210-0126048",
            SoldAsVacant="Y",
            OwnerAddress="410  ROSEHILL CT, GOODLETTSVILLE, TN",
        ),
        make_record(
            "39432",
            ParcelID="025 07 0 031.00",
            PropertyAddress=None,
            SaleDate="15-Feb-16",
            SalePrice="150000",
            LegalReference="20160219-0015995",
            SoldAsVacant="No",
            OwnerAddress=None,
            Acreage=None,
            LandValue=None,
            BuildingValue=None,
            TotalValue=None,
            YearBuilt=None,
            Bedrooms=None,
            FullBath=None,
            HalfBath=None,
        ),
    ])
