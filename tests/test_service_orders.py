"""
Tests for order notification helpers.
"""

import pytest
from unittest.mock import patch
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from services import orders


class TestBuildOrderLink:
    """Test order links."""

    @patch('services.orders.ROSE_ROCKET_BASE_URL', 'https://athn.roserocket.com/')
    def test_link(self):
        """Test trailing slash is not doubled."""
        assert orders.build_order_link('ord-1') == 'https://athn.roserocket.com/#/ops/orders/ord-1'


class TestBuildOrderNotification:
    """Test notification building."""

    @patch('services.orders.NOTIFICATION_CC', '')
    def test_single_stop_order(self):
        """Test "order" responses."""
        notification = orders.build_order_notification(
            {'order': {'id': 'ord-1', 'public_id': 'AMD-100'}},
            'ILS',
            'user@example.com'
        )

        assert notification.subject == 'Rose Rocket order created: AMD-100 for ILS'
        assert notification.body == f"Rose Rocket order link: {orders.build_order_link('ord-1')}"
        assert notification.recipients == ['user@example.com']

    @patch('services.orders.NOTIFICATION_CC', 'bot@example.com, ops@example.com')
    def test_multistop_order_and_cc(self):
        """Test "multistop_order" responses and CC list."""
        notification = orders.build_order_notification(
            {'multistop_order': {'id': 'ms-9', 'public_id': 'AMD-200'}},
            'TAYLOR',
            'user@example.com'
        )

        assert notification.order_id == 'ms-9'
        assert notification.recipients == ['user@example.com', 'bot@example.com', 'ops@example.com']

    def test_public_id_falls_back_to_id(self):
        """Test missing public_id."""
        notification = orders.build_order_notification({'order': {'id': 'ord-3'}}, 'Berlin')
        assert notification.public_id == 'ord-3'

    @pytest.mark.parametrize('response', [None, {}, {'order': {}}, {'errors': ['bad stop']}])
    def test_invalid_response(self, response):
        """Test responses without an id raise ValueError."""
        with pytest.raises(ValueError, match="Invalid order response"):
            orders.build_order_notification(response, 'ILS')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
