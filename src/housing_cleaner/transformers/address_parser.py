"""
Address Parsing Transformer

Splits the free-text property and owner addresses into structured subfields.
"""
from dataclasses import dataclass
from typing import Any, Optional, Set

import pandas as pd

from src.housing_cleaner.models.schema import (
    OWNER_ADDRESS,
    OWNER_SPLIT_ADDRESS,
    OWNER_SPLIT_CITY,
    OWNER_SPLIT_STATE,
    PROPERTY_ADDRESS,
    PROPERTY_SPLIT_ADDRESS,
    PROPERTY_SPLIT_CITY,
)
from src.housing_cleaner.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class PropertyAddressParts:
    """
    Components of a "<street>, <city>" property address.

    Attributes:
        street: Street address
        city: City name
    """
    street: Optional[str] = None
    city: Optional[str] = None


@dataclass
class OwnerAddressParts:
    """
    Components of a "<street>, <city>, <state>" owner address.

    Attributes:
        street: Street address
        city: City name
        state: State abbreviation
    """
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


@dataclass
class AddressParseReport:
    """Outcome of an address parsing pass."""
    property_addresses_split: int = 0
    property_addresses_unsplit: int = 0
    owner_addresses_complete: int = 0
    owner_addresses_partial: int = 0


def _clean(part: str) -> Optional[str]:
    part = part.strip()
    return part or None


def _text(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    return str(value)


def split_property_address(address: Any) -> PropertyAddressParts:
    """
    Split a property address on its first comma.

    "123 Main St, Nashville" -> street "123 Main St", city "Nashville".
    A null address or one without a comma yields null street and city.
    """
    text = _text(address)
    if text is None or "," not in text:
        return PropertyAddressParts()

    street, city = text.split(",", 1)
    return PropertyAddressParts(street=_clean(street), city=_clean(city))


def split_owner_address(address: Any) -> OwnerAddressParts:
    """
    Split an owner address from the right.

    The last comma-delimited segment is the state, the one before it the
    city, and everything before those is the street, re-joined with commas.
    With a single comma the state is null; with no comma only the street is
    set.
    """
    text = _text(address)
    if text is None:
        return OwnerAddressParts()

    segments = text.split(",")
    if len(segments) == 1:
        return OwnerAddressParts(street=_clean(segments[0]))
    if len(segments) == 2:
        return OwnerAddressParts(street=_clean(segments[0]), city=_clean(segments[1]))

    return OwnerAddressParts(
        street=_clean(",".join(segments[:-2])),
        city=_clean(segments[-2]),
        state=_clean(segments[-1]),
    )


class AddressParser:
    """
    Adds the split address columns to the working relation.

    Source address columns are left untouched.
    """

    def __init__(self):
        self.mutated_rows: Set[Any] = set()
        logger.info("address_parser_initialized")

    @property
    def records_mutated(self) -> int:
        return len(self.mutated_rows)

    def parse(self, df: pd.DataFrame) -> AddressParseReport:
        """
        Split PropertyAddress and OwnerAddress into subfield columns.

        Args:
            df: Working relation, modified in place

        Returns:
            AddressParseReport
        """
        report = AddressParseReport()
        self.mutated_rows = set()

        property_parts = [split_property_address(v) for v in df[PROPERTY_ADDRESS]]
        df[PROPERTY_SPLIT_ADDRESS] = pd.Series([p.street for p in property_parts], index=df.index, dtype=object)
        df[PROPERTY_SPLIT_CITY] = pd.Series([p.city for p in property_parts], index=df.index, dtype=object)
        self.mutated_rows = set(df.index)

        for parts in property_parts:
            if parts.street is not None or parts.city is not None:
                report.property_addresses_split += 1
            else:
                report.property_addresses_unsplit += 1

        owner_parts = [split_owner_address(v) for v in df[OWNER_ADDRESS]]
        df[OWNER_SPLIT_ADDRESS] = pd.Series([p.street for p in owner_parts], index=df.index, dtype=object)
        df[OWNER_SPLIT_CITY] = pd.Series([p.city for p in owner_parts], index=df.index, dtype=object)
        df[OWNER_SPLIT_STATE] = pd.Series([p.state for p in owner_parts], index=df.index, dtype=object)

        for parts in owner_parts:
            if parts.street and parts.city and parts.state:
                report.owner_addresses_complete += 1
            else:
                report.owner_addresses_partial += 1

        logger.info(
            "addresses_parsed",
            property_split=report.property_addresses_split,
            property_unsplit=report.property_addresses_unsplit,
            owner_complete=report.owner_addresses_complete,
            owner_partial=report.owner_addresses_partial,
        )

        return report
