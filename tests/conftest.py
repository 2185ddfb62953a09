"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
import pytest

# Add src to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

# Set up test environment variables before importing any modules
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-west-2')
os.environ.setdefault('ENVIRONMENT', 'test')
os.environ.setdefault('LOG_LEVEL', 'INFO')


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables for all tests."""
    # Environment variables are already set above
    yield


@pytest.fixture
def open_event():
    """Message-open event for a Berlin departure thread."""
    return {
        'type': 'open',
        'gmail': {'messageId': 'msg-1', 'threadId': 'thread-1'},
        'messageId': 'msg-1',
        'threadId': 'thread-1',
        'subject': 'Berlin HMO REF# AB123 MBL: MEDU-991# pickup at Z978',
        'from': 'Dispatch Team <dispatch@example.com>',
        'labels': ['Inbox'],
        'body': '',
        'attachments': [
            {'filename': '7512 Departure 001.pdf', 'contentType': 'application/pdf', 'messageId': 'msg-1'},
            {'filename': '7512 Departure 001.pdf', 'contentType': 'application/pdf', 'messageId': 'msg-2'},
            {'filename': 'invoice.pdf', 'contentType': 'application/pdf', 'messageId': 'msg-1'},
        ],
    }
