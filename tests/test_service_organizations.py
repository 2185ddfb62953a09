"""
Tests for address book helpers.
"""

import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from services import organizations
from services.extractors import parse_delimited_field


@pytest.fixture
def address_book_response():
    """Address book API response."""
    return {
        'data': {
            'address_books': [
                {
                    'org_name': 'Taylor Farms',
                    'address_1': '150 Main St',
                    'city': 'Salinas',
                    'state': 'CA',
                    'postal': '93901',
                    'country': 'US',
                },
                {
                    'org_name': 'Warehouse MX',
                    'city': 'Tijuana',
                    'country': 'MX',
                },
            ]
        }
    }


class TestExtractOrganizationDetails:
    """Test address book conversion."""

    def test_converts_entries(self, address_book_response):
        """Test fields and storage string."""
        orgs = organizations.extract_organization_details(address_book_response)

        assert len(orgs) == 2
        assert orgs[0].org_name == 'Taylor Farms'
        assert orgs[0].storage == 'Salinas - Taylor Farms - 93901 - CA - US - 150 Main St'
        assert orgs[0].label == 'Taylor Farms - Salinas - CA - 93901 - US'

    def test_missing_fields_become_empty(self, address_book_response):
        """Test absent keys become empty strings."""
        org = organizations.extract_organization_details(address_book_response)[1]

        assert org.postal == ''
        assert org.address_1 == ''

    def test_storage_parses_back(self, address_book_response):
        """Test the storage value round-trips through the parser."""
        org = organizations.extract_organization_details(address_book_response)[0]
        stop = parse_delimited_field(org.storage)

        assert stop.org_name == 'Taylor Farms'
        assert stop.address_1 == '150 Main St'

    @pytest.mark.parametrize('data', [None, {}, {'data': None}, {'data': {'address_books': 'x'}}, []])
    def test_unexpected_structure(self, data):
        """Test malformed responses return empty list."""
        assert organizations.extract_organization_details(data) == []


class TestOrganizationChoices:
    """Test dropdown items."""

    def test_choices(self, address_book_response):
        """Test label and value."""
        orgs = organizations.extract_organization_details(address_book_response)
        choices = organizations.organization_choices(orgs)

        assert choices[0]['label'] == orgs[0].label
        assert choices[0]['value'] == orgs[0].storage
        assert choices[0]['selected'] is False

    def test_placeholder_when_empty(self):
        """Test disabled placeholder."""
        assert organizations.organization_choices([]) == [
            {'label': 'No organizations found', 'value': 'none', 'selected': True, 'disabled': True}
        ]


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
