"""
Registry of Los Angeles / Long Beach container terminals keyed by FIRMS code.

The catalog is built once at import time and never changes. Catalog order
matters: find_code_in_text() returns the first code in this order that
appears in the text, not the first one by position in the text.
"""

import logging
from typing import Dict, Optional, Tuple

from .models import TerminalRecord

logger = logging.getLogger(__name__)


def _terminal(port: str, terminal_name: str, address: str, firms_code: str,
              postal: str) -> TerminalRecord:
    return TerminalRecord(
        port=port,
        terminal_name=terminal_name,
        address=address,
        firms_code=firms_code,
        city=port,
        state='CA',
        postal=postal,
        country='US',
    )


TERMINAL_DATA: Tuple[TerminalRecord, ...] = (
    _terminal('Los Angeles', 'APM Terminals Los Angeles (Pier 400)',
              '2500 Navy Way, Terminal Island', 'W185', '90731'),
    _terminal('Los Angeles', 'Fenix Marine Services (Pier 300)',
              '614 Terminal Way, Terminal Island', 'Y257', '90731'),
    _terminal('Los Angeles', 'Everport Terminal Services (Evergreen)',
              '389 Terminal Island Way, Terminal Island', 'Y124', '90731'),
    _terminal('Los Angeles', 'TraPac Los Angeles',
              '630 West Harry Bridges Blvd, Wilmington', 'Y258', '90744'),
    _terminal('Los Angeles', 'West Basin Container Terminal',
              '2050 John S. Gibson Blvd, San Pedro', 'Y773', '90731'),
    _terminal('Los Angeles', 'Yusen Terminals Inc. (YTI)',
              '701 New Dock Street, Terminal Island', 'Y790', '90731'),
    _terminal('Long Beach', 'International Transportation Service (ITS)',
              '1281 Pier G Way, Long Beach', 'Y309', '90802'),
    _terminal('Long Beach', 'Long Beach Container Terminal (LBCT) Pier F',
              '201 S. Pico Avenue', 'W183', '90802'),
    _terminal('Long Beach', 'Long Beach Container Terminal (LBCT) Pier E (Middle Harbor)',
              '201 South Pico Avenue', 'WAC8', '90802'),
    _terminal('Long Beach', 'Pacific Container Terminal (PCT)',
              '1521 Pier J Avenue', 'W182', '90802'),
    _terminal('Long Beach', 'SSA Marine Terminal (Pier A)',
              '700 Pier A Plaza', 'Z978', '90813'),
    _terminal('Long Beach', 'Matson Terminal (Pier C)',
              '1320 Pier C Street', 'Z611', '90802'),
    _terminal('Long Beach', 'Total Terminals International (TTI)',
              '301 Mediterranean Ave', 'Z952', '90731'),
)

VALID_FIRMS_CODES: Tuple[str, ...] = tuple(t.firms_code for t in TERMINAL_DATA)

_BY_CODE: Dict[str, TerminalRecord] = {t.firms_code: t for t in TERMINAL_DATA}

if len(_BY_CODE) != len(TERMINAL_DATA):
    raise RuntimeError("Duplicate FIRMS code in TERMINAL_DATA")


def lookup_by_code(code: str) -> Optional[TerminalRecord]:
    """
    Get the terminal record for a FIRMS code.

    Comparison is exact and case-sensitive.

    Args:
        code: FIRMS code (e.g., "Z978")

    Returns:
        TerminalRecord, or None if the code is unknown or input is invalid

    Example:
        >>> lookup_by_code("Z978").terminal_name
        'SSA Marine Terminal (Pier A)'
    """
    if not isinstance(code, str) or not code:
        return None
    return _BY_CODE.get(code)


def find_code_in_text(text: str) -> Optional[str]:
    """
    Find the first known FIRMS code contained in free-form text.

    Codes are checked in catalog order, so when several codes appear the one
    declared first in TERMINAL_DATA wins regardless of where it sits in text.

    Args:
        text: Subject line or body text

    Returns:
        The FIRMS code, or None if none is found or input is invalid

    Example:
        >>> find_code_in_text("Multiple codes Y790 and W185")
        'W185'
    """
    if not isinstance(text, str) or not text:
        return None

    for code in VALID_FIRMS_CODES:
        if code in text:
            return code

    return None


def find_terminal_in_text(text: str) -> Optional[TerminalRecord]:
    """Find the terminal whose FIRMS code appears in text."""
    code = find_code_in_text(text)
    if code is None:
        return None

    terminal = _BY_CODE[code]
    logger.info(f"Matched FIRMS code {code}: {terminal.terminal_name}")
    return terminal
