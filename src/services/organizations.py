"""
Helpers for the freight platform address book.

Address-book entries become origin/destination choices. The choice value is a
" - " delimited storage string that services.extractors parses back.
"""

import logging
from typing import Any, Dict, List

from domain.models import OrganizationDetails
from services.extractors import format_delimited_field

logger = logging.getLogger(__name__)


def extract_organization_details(data: Dict[str, Any]) -> List[OrganizationDetails]:
    """
    Convert an address-book API response into OrganizationDetails.

    Args:
        data: Parsed JSON response, expected shape {"data": {"address_books": [...]}}

    Returns:
        List of OrganizationDetails (empty if the structure is unexpected)
    """
    address_books = None
    if isinstance(data, dict) and isinstance(data.get('data'), dict):
        address_books = data['data'].get('address_books')

    if not isinstance(address_books, list):
        logger.warning("Unexpected address book response structure")
        return []

    organizations = []
    for entry in address_books:
        if not isinstance(entry, dict):
            continue
        org = {
            'org_name': entry.get('org_name') or '',
            'city': entry.get('city') or '',
            'postal': entry.get('postal') or '',
            'state': entry.get('state') or '',
            'country': entry.get('country') or '',
            'address_1': entry.get('address_1') or '',
        }
        organizations.append(OrganizationDetails(
            storage=format_delimited_field(
                org['city'], org['org_name'], org['postal'],
                org['state'], org['country'], org['address_1']
            ),
            **org
        ))

    logger.info(f"Extracted {len(organizations)} organization(s) from address book")
    return organizations


def organization_choices(organizations: List[OrganizationDetails]) -> List[Dict[str, Any]]:
    """
    Build dropdown items for origin/destination inputs.

    Returns a single disabled placeholder when there are no organizations.
    """
    if not organizations:
        return [{'label': 'No organizations found', 'value': 'none', 'selected': True, 'disabled': True}]
    return [
        {'label': org.label, 'value': org.storage, 'selected': False}
        for org in organizations
    ]
