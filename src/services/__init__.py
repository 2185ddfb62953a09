"""
Service functions used by the add-on workflows.

This package contains reusable helpers for field extraction, attachment
selection, address-book handling, processed file tracking and order
notifications.
"""

__all__ = ['attachment', 'extractors', 'orders', 'organizations', 'processed_files']
