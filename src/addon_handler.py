"""
AWS Lambda handler for Gmail add-on events.

Thin orchestration layer that delegates to WorkflowProcessor.
Expected event format:
{
    "type": "open" | "action" | "homepage",
    ... event fields, see domain.email_processor
}
"""

import json
import os
import logging
from typing import Dict, Any

from domain.email_processor import WorkflowProcessor
from domain.workflow import DEFAULT_WORKFLOW, detect_context

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))

# Add console handler for local testing (AWS Lambda provides handlers automatically)
if not logger.handlers:
    console_handler = logging.StreamHandler()
    formatter = logging.Formatter('%(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

ENVIRONMENT = os.environ.get('ENVIRONMENT', 'dev')

# Initialize processor once at module level (reused across invocations)
workflow_processor = WorkflowProcessor()


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': {
            'Content-Type': 'application/json'
        },
        'body': json.dumps(body)
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Process a Gmail add-on event.

    Args:
        event: Add-on event with a "type" field
        context: Lambda context

    Returns:
        Dict with statusCode and JSON body (200 success, 400 invalid input, 500 failure)
    """
    logger.info(f"Environment: {ENVIRONMENT}")

    event_type = (event or {}).get('type')
    logger.info(f"Received {event_type} event")

    if event_type == 'homepage':
        return _response(200, {
            'success': True,
            'workflow': DEFAULT_WORKFLOW.value,
            'context': detect_context(event),
        })

    if event_type == 'open':
        result = workflow_processor.process_open_event(event)
    elif event_type == 'action':
        result = workflow_processor.process_action_event(event)
    else:
        logger.error(f"Unsupported event type: {event_type}")
        return _response(400, {'success': False, 'error': f"Unsupported event type: {event_type}"})

    if result.success:
        logger.info(f"✓ Processed message {result.message_id} -> {result.workflow}")
        return _response(200, result.to_dict())

    if result.is_validation_error:
        logger.warning(f"⚠ Invalid {event_type} event for {result.message_id}: {result.error_message}")
        return _response(400, result.to_dict())

    logger.warning(f"⚠ Processed message {result.message_id} with ERRORS: {result.error_message}")
    return _response(500, result.to_dict())


def health_check(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Simple health check endpoint for monitoring.
    """
    return _response(200, {
        'status': 'healthy',
        'environment': ENVIRONMENT,
    })
