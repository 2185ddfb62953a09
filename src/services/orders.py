"""
Order notification helpers.

Builds the link and notification mail sent after the freight platform
creates an order. Sending the mail is the caller's job.
"""

import os
import logging
from typing import Any, Dict, List

from domain.models import OrderNotification

logger = logging.getLogger(__name__)

ROSE_ROCKET_BASE_URL = os.environ.get('ROSE_ROCKET_BASE_URL', 'https://athn.roserocket.com')

# Extra recipients copied on every order notification (comma separated)
NOTIFICATION_CC = os.environ.get('NOTIFICATION_CC', '')


def build_order_link(order_id: str) -> str:
    """
    Get the URL that opens an order in the freight platform.

    Example:
        >>> build_order_link("abc-123")
        'https://athn.roserocket.com/#/ops/orders/abc-123'
    """
    return f"{ROSE_ROCKET_BASE_URL.rstrip('/')}/#/ops/orders/{order_id}"


def _notification_recipients(user_email: str) -> List[str]:
    recipients = [user_email] if user_email else []
    recipients.extend(a.strip() for a in NOTIFICATION_CC.split(',') if a.strip())
    return recipients


def build_order_notification(
    order_response: Dict[str, Any],
    customer: str,
    user_email: str = ''
) -> OrderNotification:
    """
    Build the notification for a created order.

    Args:
        order_response: Order API response with an "order" or "multistop_order" object
        customer: Customer name shown in the subject (e.g., "ILS")
        user_email: Address of the add-on user

    Returns:
        OrderNotification

    Raises:
        ValueError: If the response carries no order id
    """
    order = (order_response or {}).get('order') or (order_response or {}).get('multistop_order')
    if not order or not order.get('id'):
        errors = (order_response or {}).get('errors')
        raise ValueError(f"Invalid order response: {errors or 'unexpected structure'}")

    order_id = str(order['id'])
    public_id = str(order.get('public_id') or order_id)
    link = build_order_link(order_id)

    logger.info(f"Order created for {customer}: {public_id} ({order_id})")

    return OrderNotification(
        recipients=_notification_recipients(user_email),
        subject=f"Rose Rocket order created: {public_id} for {customer}",
        body=f"Rose Rocket order link: {link}",
        order_id=order_id,
        public_id=public_id,
        link=link,
    )
