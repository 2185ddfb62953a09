"""
Attachment selection for workflow cards.

This module decides which attachments of a thread get an action button for
each workflow, capped at MAX_WIDGETS so the card stays renderable.
"""

import os
import logging
from typing import Callable, Dict, Iterable, List, Optional

from domain.models import Attachment, AttachmentSelection
from domain.workflow import Workflow

logger = logging.getLogger(__name__)

# Card widget limit (default: 80)
DEFAULT_MAX_WIDGETS = 80
MAX_WIDGETS = int(os.environ.get('ATTACHMENT_MAX_WIDGETS', DEFAULT_MAX_WIDGETS))

BERLIN_NAME_MARKER = '7512 departure'


def _is_plain_pdf(attachment: Attachment) -> bool:
    return attachment.is_pdf and not attachment.is_outlook_generated


def _is_plain_pdf_or_image(attachment: Attachment) -> bool:
    return (attachment.is_pdf or attachment.is_image) and not attachment.is_outlook_generated


def _is_plain_spreadsheet(attachment: Attachment) -> bool:
    return attachment.is_spreadsheet and not attachment.is_outlook_generated


def _is_berlin_departure(attachment: Attachment) -> bool:
    return BERLIN_NAME_MARKER in attachment.filename.lower()


ATTACHMENT_FILTERS: Dict[Workflow, Callable[[Attachment], bool]] = {
    Workflow.SALSAS_CASTILLO: _is_plain_pdf_or_image,
    Workflow.ILS: _is_plain_pdf,
    Workflow.TAYLOR: _is_plain_spreadsheet,
    Workflow.BERLIN: _is_berlin_departure,
}


def select_attachments(
    workflow: Workflow,
    attachments: Iterable[Attachment],
    processed_files: Optional[Iterable[str]] = None,
    max_widgets: Optional[int] = None
) -> AttachmentSelection:
    """
    Choose the attachments that get an action button for a workflow.

    Args:
        workflow: Resolved workflow
        attachments: All attachments in the thread, in message order
        processed_files: Names already processed for the thread
        max_widgets: Button limit (defaults to MAX_WIDGETS)

    Returns:
        AttachmentSelection; empty for workflows without attachment actions

    Note:
        - Processed names are reported, not offered again
        - Berlin departures are de-duplicated by name
    """
    selection = AttachmentSelection()
    accept = ATTACHMENT_FILTERS.get(workflow)
    if accept is None:
        return selection

    limit = MAX_WIDGETS if max_widgets is None else max_widgets
    processed = set(processed_files or ())
    seen_names = set()

    for attachment in attachments:
        if not accept(attachment):
            continue

        if attachment.filename in processed:
            if attachment.filename not in selection.processed:
                selection.processed.append(attachment.filename)
            continue

        if workflow == Workflow.BERLIN and attachment.filename in seen_names:
            continue

        if len(selection.selectable) >= limit:
            logger.warning(
                f"Too many matching attachments for {workflow.value}, "
                f"showing the first {limit}"
            )
            selection.truncated = True
            break

        selection.selectable.append(attachment)
        seen_names.add(attachment.filename)

    logger.info(
        f"Selected {len(selection.selectable)} attachment(s) for {workflow.value} "
        f"({len(selection.processed)} already processed)"
    )
    return selection


def find_attachment(attachments: Iterable[Attachment], filename: str) -> Optional[Attachment]:
    """
    Find an attachment by exact filename.

    Returns:
        The first matching Attachment, or None
    """
    for attachment in attachments:
        if attachment.filename == filename:
            return attachment
    return None


def parse_attachments(raw_attachments: Optional[List[Dict]], default_message_id: str = '') -> List[Attachment]:
    """
    Convert attachment dicts from an add-on event into Attachment objects.

    Entries without a filename are skipped.
    """
    attachments = []
    for raw in raw_attachments or []:
        filename = raw.get('filename') or raw.get('name')
        if not filename:
            logger.warning(f"Skipping attachment without a filename: {raw}")
            continue
        attachments.append(Attachment(
            filename=filename,
            content_type=raw.get('contentType') or raw.get('content_type') or '',
            message_id=raw.get('messageId') or raw.get('message_id') or default_message_id,
            size=int(raw.get('size', 0) or 0),
        ))
    return attachments
