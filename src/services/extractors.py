"""
Field extraction utilities for email subjects and form values.

Each subject field is described by a FieldPattern entry and evaluated by
extract_field(). A missing match is a normal outcome and returns None;
malformed or non-string text never raises.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional

from domain.models import StopAddress

logger = logging.getLogger(__name__)

DELIMITER = ' - '
DELIMITED_FIELD_COUNT = 6

# Stop property keys used by the Berlin workflow
HMO_STOP_KEY = 'Berlin-Hmo-Stop'
TJ_STOP_KEY = 'Berlin-TJ-Stop'


@dataclass(frozen=True)
class FieldPattern:
    """
    A named token pattern.

    Attributes:
        name: Field name used by extract_field()
        pattern: Compiled regular expression
        group: Capture group holding the value
    """
    name: str
    pattern: re.Pattern
    group: int = 1


FIELD_PATTERNS: Dict[str, FieldPattern] = {
    p.name: p for p in (
        # ASCII keeps IGNORECASE from folding letters such as the Kelvin sign into [A-Z]
        FieldPattern('ref_number', re.compile(r'REF#\s*([A-Z0-9]+)', re.IGNORECASE | re.ASCII)),
        # MLB is a common typo for MBL in carrier subjects
        FieldPattern('mbl_reference', re.compile(r'(?:MBL|MLB): ([A-Z0-9#\-]+)', re.IGNORECASE | re.ASCII)),
        FieldPattern('ref_reference', re.compile(r'REF# ([A-Za-z0-9\-]+)')),
        FieldPattern('email_address', re.compile(r'<([^>]+)>')),
    )
}


def extract_field(name: str, text: str) -> Optional[str]:
    """
    Extract a named field from text.

    Args:
        name: Key of FIELD_PATTERNS
        text: Text to search

    Returns:
        The captured value trimmed, or None if there is no match

    Raises:
        KeyError: If name is not a known field
    """
    field_pattern = FIELD_PATTERNS[name]

    if not isinstance(text, str) or not text:
        return None

    match = field_pattern.pattern.search(text)
    if match and match.group(field_pattern.group):
        return match.group(field_pattern.group).strip()

    return None


def extract_ref_number(subject: str) -> Optional[str]:
    """
    Extract the REF# number from a subject.

    Example:
        >>> extract_ref_number("Shipment REF# AB123 confirmed")
        'AB123'
    """
    return extract_field('ref_number', subject)


def extract_mbl_reference(subject: str) -> Optional[str]:
    """
    Extract the master bill of lading reference from a subject.

    Accepts both "MBL:" and the transposed "MLB:" label.

    Example:
        >>> extract_mbl_reference("Container MBL: ABC-123#")
        'ABC-123#'
    """
    return extract_field('mbl_reference', subject)


def extract_ref_reference(subject: str) -> Optional[str]:
    """Extract a "REF# " value that may contain dashes (label is case-sensitive)."""
    return extract_field('ref_reference', subject)


def extract_email_address(full_address: str) -> str:
    """
    Extract the bare address from a "Name <address>" string.

    Returns the input unchanged when there are no angle brackets.

    Example:
        >>> extract_email_address("Jane Doe <jane@example.com>")
        'jane@example.com'
    """
    address = extract_field('email_address', full_address)
    return address if address is not None else full_address


def contains_keyword(subject: str, keyword: str) -> bool:
    """Case-insensitive containment test. An empty keyword never matches."""
    if not isinstance(subject, str) or not isinstance(keyword, str) or not keyword:
        return False
    return keyword.upper() in subject.upper()


def stop_property_key(subject: str) -> str:
    """Pick the Berlin stop key: Hermosillo (HMO) or Tijuana."""
    return HMO_STOP_KEY if contains_keyword(subject, 'HMO') else TJ_STOP_KEY


def parse_delimited_field(value: str) -> StopAddress:
    """
    Parse an address-book storage string into a StopAddress.

    The value must hold exactly six fields joined by " - " in the order
    city, org name, postal, state, country, address. Anything else yields
    an all-None StopAddress.

    Args:
        value: Storage string submitted by the origin/destination dropdown

    Returns:
        StopAddress (all fields None on malformed input)

    Example:
        >>> parse_delimited_field("LA - Acme - 90731 - CA - US - 123 Main St").org_name
        'Acme'
    """
    if not isinstance(value, str) or not value:
        return StopAddress()

    parts = value.split(DELIMITER)

    if len(parts) != DELIMITED_FIELD_COUNT:
        logger.warning(f"Unexpected delimited field format ({len(parts)} fields): {value}")
        return StopAddress()

    city, org_name, postal, state, country, address_1 = (p.strip() for p in parts)
    return StopAddress(
        org_name=org_name,
        address_1=address_1,
        city=city,
        state=state,
        country=country,
        postal=postal,
    )


def format_delimited_field(
    city: str,
    org_name: str,
    postal: str,
    state: str,
    country: str,
    address_1: str
) -> str:
    """Build the storage string that parse_delimited_field() reads back."""
    return DELIMITER.join(
        (v or '') for v in (city, org_name, postal, state, country, address_1)
    )
