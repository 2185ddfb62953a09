"""
Processed attachment tracking.

Remembers which attachments of a thread have already produced an order, so
cards show them as done instead of offering them again. State is a JSON list
of filenames per thread stored in S3.
"""

import json
import os
import logging
import re
from typing import List

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

# Configure S3 client with timeouts to prevent infinite hangs
s3_config = Config(
    retries={
        'max_attempts': 1,  # 1 attempt total (no retries)
        'mode': 'standard'
    },
    connect_timeout=10,
    read_timeout=30
)

# Module-level client (reused across invocations)
s3_client = boto3.client('s3', config=s3_config)

# Configuration from environment
PROCESSED_FILES_BUCKET = os.environ.get('PROCESSED_FILES_BUCKET', '')
PROCESSED_FILES_PREFIX = os.environ.get('PROCESSED_FILES_PREFIX', 'processed/')
ENVIRONMENT = os.environ.get('ENVIRONMENT', 'dev')


def is_configured() -> bool:
    """
    Check if processed file tracking is configured.

    Returns:
        True if PROCESSED_FILES_BUCKET is set
    """
    return bool(PROCESSED_FILES_BUCKET)


def _object_key(thread_id: str) -> str:
    safe_thread_id = re.sub(r'[^A-Za-z0-9_.\-]', '_', thread_id)
    return f"{PROCESSED_FILES_PREFIX}{ENVIRONMENT}/{safe_thread_id}.json"


def get_processed_files(thread_id: str) -> List[str]:
    """
    Get the names of attachments already processed for a thread.

    Args:
        thread_id: Gmail thread identifier

    Returns:
        List of filenames (empty if nothing stored or not configured)

    Raises:
        ClientError: On S3 errors other than a missing key
    """
    if not is_configured() or not thread_id:
        return []

    key = _object_key(thread_id)
    try:
        response = s3_client.get_object(Bucket=PROCESSED_FILES_BUCKET, Key=key)
    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', '')
        if error_code == 'NoSuchKey':
            return []
        logger.error(f"Failed to read processed files s3://{PROCESSED_FILES_BUCKET}/{key}: {e}")
        raise

    try:
        names = json.loads(response['Body'].read().decode('utf-8'))
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning(f"Ignoring corrupt processed files record {key}: {e}")
        return []

    if not isinstance(names, list):
        logger.warning(f"Ignoring processed files record {key}: expected a list")
        return []

    return [str(n) for n in names]


def mark_processed(thread_id: str, filename: str) -> List[str]:
    """
    Record an attachment as processed for a thread.

    Args:
        thread_id: Gmail thread identifier
        filename: Attachment filename

    Returns:
        The updated list of processed filenames

    Raises:
        ValueError: If thread_id or filename is empty
        ClientError: If S3 operation fails
    """
    if not thread_id:
        raise ValueError("thread_id cannot be empty")
    if not filename:
        raise ValueError("filename cannot be empty")

    if not is_configured():
        logger.warning("Processed file tracking not configured (missing PROCESSED_FILES_BUCKET)")
        return [filename]

    names = get_processed_files(thread_id)
    if filename in names:
        logger.info(f"Attachment already recorded as processed: {filename}")
        return names

    names.append(filename)
    key = _object_key(thread_id)

    s3_client.put_object(
        Bucket=PROCESSED_FILES_BUCKET,
        Key=key,
        Body=json.dumps(names).encode('utf-8'),
        ContentType='application/json'
    )
    logger.info(f"Recorded processed attachment {filename} for thread {thread_id}")

    return names
