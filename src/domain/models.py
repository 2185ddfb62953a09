"""
Data models for the add-on workflow domain.

These type-safe data structures define clear contracts between components.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any


@dataclass(frozen=True)
class TerminalRecord:
    """
    One seaport container terminal.

    Attributes:
        port: Port city name (e.g., "Long Beach")
        terminal_name: Terminal operator name
        address: Street address
        firms_code: FIRMS code, unique across the registry
        city: City
        state: Two-letter state code
        postal: ZIP code
        country: Two-letter country code
    """
    port: str
    terminal_name: str
    address: str
    firms_code: str
    city: str
    state: str
    postal: str
    country: str

    @property
    def full_address(self) -> str:
        """Single-line address for display."""
        return f"{self.address}, {self.city}, {self.state} {self.postal}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StopAddress:
    """
    Stop parsed from a delimited address-book storage string.

    Every field is None when the source string was malformed.
    """
    org_name: Optional[str] = None
    address_1: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """Check if nothing was parsed."""
        return all(v is None for v in asdict(self).values())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OrganizationDetails:
    """
    Address-book entry offered as an origin/destination choice.

    Attributes:
        org_name: Organization name
        city: City
        postal: ZIP code
        state: State code
        country: Country code
        address_1: Street address
        storage: " - " delimited value submitted back by the form
    """
    org_name: str
    city: str
    postal: str
    state: str
    country: str
    address_1: str
    storage: str

    @property
    def label(self) -> str:
        """Dropdown label shown to the user."""
        return f"{self.org_name} - {self.city} - {self.state} - {self.postal} - {self.country}"


@dataclass
class Attachment:
    """
    Email attachment metadata.

    Attributes:
        filename: Original filename
        content_type: MIME type (e.g., "application/pdf")
        message_id: Message that carries the attachment
        size: Size in bytes
    """
    filename: str
    content_type: str
    message_id: str = ''
    size: int = 0

    @property
    def is_pdf(self) -> bool:
        return 'application/pdf' in self.content_type.lower()

    @property
    def is_image(self) -> bool:
        return self.content_type.lower().startswith('image/')

    @property
    def is_spreadsheet(self) -> bool:
        return 'spreadsheetml.sheet' in self.content_type.lower()

    @property
    def is_outlook_generated(self) -> bool:
        """Outlook inlines signature images as "Outlook-*" files."""
        return self.filename.startswith('Outlook-')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'filename': self.filename,
            'content_type': self.content_type,
            'message_id': self.message_id,
        }


@dataclass
class AttachmentSelection:
    """
    Attachments chosen for a workflow.

    Attributes:
        selectable: Attachments that get an action button
        processed: Names of attachments already processed for the thread
        truncated: True when the widget limit cut the list short
    """
    selectable: List[Attachment] = field(default_factory=list)
    processed: List[str] = field(default_factory=list)
    truncated: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.selectable and not self.processed

    def to_dict(self) -> Dict[str, Any]:
        return {
            'selectable': [a.to_dict() for a in self.selectable],
            'processed': list(self.processed),
            'truncated': self.truncated,
        }


@dataclass
class EmailMetadata:
    """
    Structured email metadata extracted from an add-on event.

    Attributes:
        message_id: Gmail message identifier
        thread_id: Gmail thread identifier
        from_address: Bare sender address
        subject: Subject of the first message in the thread
        labels: Thread label names
        body: Plain text body (empty string if not present)
        attachments: Attachments found in the thread
    """
    message_id: str
    thread_id: str
    from_address: str
    subject: str
    labels: List[str] = field(default_factory=list)
    body: str = ''
    attachments: List[Attachment] = field(default_factory=list)


@dataclass
class SubjectFields:
    """Reference values pulled out of a subject line."""
    ref_number: Optional[str] = None
    mbl_reference: Optional[str] = None
    firms_code: Optional[str] = None
    terminal: Optional[TerminalRecord] = None
    stop_property_key: Optional[str] = None
    ref_reference: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ref_number': self.ref_number,
            'mbl_reference': self.mbl_reference,
            'firms_code': self.firms_code,
            'terminal': self.terminal.to_dict() if self.terminal else None,
            'stop_property_key': self.stop_property_key,
            'ref_reference': self.ref_reference,
        }


@dataclass
class OrderNotification:
    """
    Notification mail describing a created freight order.

    Attributes:
        recipients: Addresses to notify
        subject: Mail subject
        body: HTML body with the order link
        order_id: Internal order id
        public_id: Human-facing order number
        link: URL that opens the order
    """
    recipients: List[str]
    subject: str
    body: str
    order_id: str
    public_id: str
    link: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProcessingResult:
    """
    Result of processing an add-on event.

    This explicit result type makes success/failure handling clear
    and prevents exceptions from being used for control flow.

    Attributes:
        success: Whether processing succeeded
        message_id: Gmail message identifier
        workflow: Resolved workflow identifier
        payload: Data handed back to the card layer
        error_message: Error description (if processing failed)
        is_validation_error: True when the failure came from bad input
    """
    success: bool
    message_id: str
    workflow: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    error_message: Optional[str] = None
    is_validation_error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'success': self.success,
            'messageId': self.message_id,
            'workflow': self.workflow,
        }
        if self.success:
            result.update(self.payload)
        else:
            result['error'] = self.error_message
        return result

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.success:
            return f"ProcessingResult(success=True, message_id={self.message_id}, workflow={self.workflow})"
        else:
            return f"ProcessingResult(success=False, message_id={self.message_id}, error={self.error_message})"
