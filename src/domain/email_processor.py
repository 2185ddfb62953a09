"""
Add-on event processing - core business logic.

This module handles the two Gmail add-on triggers:
1. Message open: parse the event, resolve the workflow, select attachments
   and extract reference fields from the subject
2. Card action: route the action to its workflow, validate form inputs,
   record processed attachments and build the order notification

All errors are caught and returned as ProcessingResult with success=False.
No exceptions propagate out of the public methods.
"""

import logging
from typing import Any, Dict, List

from botocore.exceptions import ClientError

from .models import Attachment, EmailMetadata, ProcessingResult, SubjectFields
from .terminals import find_terminal_in_text
from .workflow import Workflow, resolve_workflow, resolve_action, detect_context
from services import attachment as attachment_service
from services import extractors
from services import orders as order_service
from services import organizations as organization_service
from services import processed_files as processed_files_service

logger = logging.getLogger(__name__)

# Workflows that create orders and track processed attachments
ORDER_WORKFLOWS = {
    Workflow.ILS: 'ILS',
    Workflow.TAYLOR: 'TAYLOR',
    Workflow.BERLIN: 'Berlin',
}

DEFAULT_SHARE_SUBJECT = 'Selected PDF Attachments'


def _form_values(form_inputs: Dict[str, Any], name: str) -> List[str]:
    """
    Read a form input as a list of strings.

    Accepts plain values, lists, and the host's
    {"stringInputs": {"value": [...]}} shape.
    """
    value = (form_inputs or {}).get(name)
    if isinstance(value, dict):
        value = value.get('stringInputs', {}).get('value')
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def _form_value(form_inputs: Dict[str, Any], name: str) -> str:
    values = _form_values(form_inputs, name)
    return values[0].strip() if values else ''


def _require_attachment(attachments: List[Attachment], filename: str) -> Attachment:
    attachment = attachment_service.find_attachment(attachments, filename)
    if attachment is None:
        raise ValueError(f"Attachment not found: {filename}")
    return attachment


class WorkflowProcessor:
    """
    Handles add-on events for the customer workflows.

    Resolves which workflow applies and prepares the data the card layer
    and the order integrations need. Returns ProcessingResult for explicit
    success/failure handling.
    """

    def process_open_event(self, event: Dict[str, Any]) -> ProcessingResult:
        """
        Process a message-open event.

        Args:
            event: Event dict with messageId, threadId, subject, from,
                labels, body and attachments

        Returns:
            ProcessingResult with success=True or success=False (errors logged)
        """
        message_id = event.get('messageId', 'UNKNOWN')
        logger.info(f"Processing open event for message: {message_id}")

        try:
            metadata = self._parse_open_event(event)
            logger.info(f"Parsed: from={metadata.from_address}, subject={metadata.subject}, labels={metadata.labels}")

            workflow = resolve_workflow(metadata.subject, metadata.labels)

            processed = []
            if workflow in ORDER_WORKFLOWS:
                processed = processed_files_service.get_processed_files(metadata.thread_id)

            selection = attachment_service.select_attachments(
                workflow, metadata.attachments, processed
            )
            fields = self._extract_subject_fields(metadata, workflow)

            payload = {
                'context': detect_context(event),
                'threadId': metadata.thread_id,
                'subject': metadata.subject,
                'from': metadata.from_address,
                'attachments': selection.to_dict(),
                'fields': fields.to_dict(),
            }

            # Taylor cards offer address-book entries as origin/destination
            if workflow == Workflow.TAYLOR:
                organizations = organization_service.extract_organization_details(event.get('addressBook'))
                payload['stops'] = organization_service.organization_choices(organizations)

            return ProcessingResult(
                success=True,
                message_id=metadata.message_id,
                workflow=workflow.value,
                payload=payload
            )

        except Exception as e:
            logger.error(f"Failed to process open event {message_id}: {e}", exc_info=True)

            return ProcessingResult(
                success=False,
                message_id=message_id,
                error_message=str(e),
                is_validation_error=isinstance(e, ValueError)
            )

    def process_action_event(self, event: Dict[str, Any]) -> ProcessingResult:
        """
        Process a card action (button click or form submit).

        Args:
            event: Event dict with functionName, parameters, formInputs, the
                thread's attachments and, once the order exists, orderResponse

        Returns:
            ProcessingResult with success=True or success=False (errors logged)
        """
        parameters = event.get('parameters') or {}
        message_id = parameters.get('messageId') or event.get('messageId', 'UNKNOWN')
        function_name = event.get('functionName')
        logger.info(f"Processing action {function_name} for message: {message_id}")

        try:
            workflow = resolve_action(function_name)
            if workflow is None:
                raise ValueError(f"Unknown action: {function_name}")

            form_inputs = event.get('formInputs') or {}
            attachments = attachment_service.parse_attachments(event.get('attachments'), message_id)

            if workflow == Workflow.SALSAS_CASTILLO:
                payload = self._prepare_share(form_inputs, attachments)
            else:
                payload = self._prepare_order(workflow, parameters, form_inputs, attachments)
                order_response = event.get('orderResponse')
                if order_response:
                    payload.update(self._complete_order(
                        workflow, parameters, order_response, event.get('userEmail', '')
                    ))

            return ProcessingResult(
                success=True,
                message_id=message_id,
                workflow=workflow.value,
                payload=payload
            )

        except Exception as e:
            logger.error(f"Failed to process action {function_name} for {message_id}: {e}", exc_info=True)

            return ProcessingResult(
                success=False,
                message_id=message_id,
                error_message=str(e),
                is_validation_error=isinstance(e, ValueError)
            )

    def _parse_open_event(self, event: Dict[str, Any]) -> EmailMetadata:
        """
        Parse a message-open event into EmailMetadata.

        Accepts a flat event or one nested under "gmail".

        Raises:
            ValueError: If messageId or threadId is missing
        """
        gmail = event.get('gmail') if isinstance(event.get('gmail'), dict) else {}
        message_id = event.get('messageId') or gmail.get('messageId')
        thread_id = event.get('threadId') or gmail.get('threadId')

        if not message_id:
            raise ValueError("Message ID is missing")
        if not thread_id:
            raise ValueError("Thread ID is missing")

        labels = event.get('labels') or []
        if isinstance(labels, str):
            labels = [labels]

        return EmailMetadata(
            message_id=message_id,
            thread_id=thread_id,
            from_address=extractors.extract_email_address(event.get('from', '') or ''),
            subject=event.get('subject', '') or '',
            labels=list(labels),
            body=event.get('body', '') or '',
            attachments=attachment_service.parse_attachments(event.get('attachments'), message_id),
        )

    def _extract_subject_fields(self, metadata: EmailMetadata, workflow: Workflow) -> SubjectFields:
        """Pull reference values from the subject, falling back to the body for the terminal."""
        subject = metadata.subject

        terminal = find_terminal_in_text(subject) or find_terminal_in_text(metadata.body)

        return SubjectFields(
            ref_number=extractors.extract_ref_number(subject),
            mbl_reference=extractors.extract_mbl_reference(subject),
            firms_code=terminal.firms_code if terminal else None,
            terminal=terminal,
            stop_property_key=extractors.stop_property_key(subject) if workflow == Workflow.BERLIN else None,
            ref_reference=extractors.extract_ref_reference(subject) if workflow == Workflow.BERLIN else None,
        )

    def _prepare_share(
        self,
        form_inputs: Dict[str, Any],
        attachments: List[Attachment]
    ) -> Dict[str, Any]:
        """
        Validate the "send selected PDFs" form.

        Raises:
            ValueError: If nothing is selected, the recipient is missing or a
                selected file is not attached to the thread
        """
        selected = [name for name in _form_values(form_inputs, 'pdf_attachments') if name]
        if not selected:
            raise ValueError("No PDF attachments selected")

        recipient = _form_value(form_inputs, 'recipient_email')
        if not recipient:
            raise ValueError("No recipient email provided")

        shared = [_require_attachment(attachments, name) for name in selected]

        subject = _form_value(form_inputs, 'email_subject') or DEFAULT_SHARE_SUBJECT
        body = "The following PDF attachments were selected:\n\n" + "\n".join(selected) + "\n"

        logger.info(f"Sharing {len(selected)} PDF(s) with {recipient}")

        return {
            'recipient': recipient,
            'subject': subject,
            'body': body,
            'attachments': [a.to_dict() for a in shared],
        }

    def _prepare_order(
        self,
        workflow: Workflow,
        parameters: Dict[str, Any],
        form_inputs: Dict[str, Any],
        attachments: List[Attachment]
    ) -> Dict[str, Any]:
        """
        Validate the inputs needed to create an order.

        Raises:
            ValueError: If the attachment or a required stop is missing, or the
                attachment is not part of the thread
        """
        attachment_name = parameters.get('attachmentName')
        if not attachment_name:
            raise ValueError("Attachment name is missing")

        payload = {
            'attachmentName': attachment_name,
            'threadId': parameters.get('threadId'),
            'customer': ORDER_WORKFLOWS[workflow],
        }

        if workflow == Workflow.TAYLOR:
            origin = _form_value(form_inputs, 'origin')
            destination = _form_value(form_inputs, 'destination')
            if not origin:
                raise ValueError("Origin cannot be empty")
            if not destination:
                raise ValueError("Destination cannot be empty")

            origin_stop = extractors.parse_delimited_field(origin)
            destination_stop = extractors.parse_delimited_field(destination)
            if origin_stop.is_empty:
                raise ValueError(f"Origin has an unexpected format: {origin}")
            if destination_stop.is_empty:
                raise ValueError(f"Destination has an unexpected format: {destination}")

            payload['origin'] = origin_stop.to_dict()
            payload['destination'] = destination_stop.to_dict()

        payload['attachment'] = _require_attachment(attachments, attachment_name).to_dict()

        return payload

    def _complete_order(
        self,
        workflow: Workflow,
        parameters: Dict[str, Any],
        order_response: Dict[str, Any],
        user_email: str
    ) -> Dict[str, Any]:
        """Build the notification and remember the attachment as processed."""
        notification = order_service.build_order_notification(
            order_response, ORDER_WORKFLOWS[workflow], user_email
        )

        processed = []
        thread_id = parameters.get('threadId')
        if thread_id:
            try:
                processed = processed_files_service.mark_processed(thread_id, parameters['attachmentName'])
            except ClientError as e:
                logger.warning(f"Could not record {parameters['attachmentName']} as processed: {e}")
        else:
            logger.warning("No threadId on action, attachment not recorded as processed")

        return {
            'notification': notification.to_dict(),
            'processed': processed,
        }
