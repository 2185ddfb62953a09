"""
Workflow dispatcher.

Maps an email's subject and labels to the customer workflow the add-on
should present. Rules are evaluated strictly in declaration order and the
first match wins, so the list must stay a sequence.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


class Workflow(str, Enum):
    """Workflows the add-on can present."""
    SALSAS_CASTILLO = 'salsas_castillo'
    ILS = 'ils'
    TAYLOR = 'taylor'
    BERLIN = 'berlin'
    CUSTOM = 'custom'
    GENERIC = 'generic'


DEFAULT_WORKFLOW = Workflow.GENERIC


@dataclass(frozen=True)
class WorkflowRule:
    """
    One dispatch rule.

    Attributes:
        workflow: Workflow selected when the predicate holds
        predicate: Callable(subject, labels) -> bool
        description: Human-readable rule summary for logs
    """
    workflow: Workflow
    predicate: Callable[[str, FrozenSet[str]], bool]
    description: str

    def matches(self, subject: str, labels: FrozenSet[str]) -> bool:
        return bool(self.predicate(subject, labels))


def has_label(name: str) -> Callable[[str, FrozenSet[str]], bool]:
    return lambda subject, labels: name in labels


def subject_matches(pattern: str, flags: int = 0) -> Callable[[str, FrozenSet[str]], bool]:
    regex = re.compile(pattern, flags)
    return lambda subject, labels: regex.search(subject) is not None


WORKFLOW_RULES: Tuple[WorkflowRule, ...] = (
    WorkflowRule(Workflow.SALSAS_CASTILLO, has_label('Salsas Castillo'),
                 "label 'Salsas Castillo'"),
    WorkflowRule(Workflow.ILS, subject_matches(r'T0', re.IGNORECASE),
                 "subject contains 'T0'"),
    WorkflowRule(Workflow.TAYLOR, subject_matches(r'LCS', re.IGNORECASE),
                 "subject contains 'LCS'"),
    WorkflowRule(Workflow.BERLIN, subject_matches(r'Berlin', re.IGNORECASE),
                 "subject contains 'Berlin'"),
    WorkflowRule(Workflow.CUSTOM, subject_matches(r'Otro Asunto Importante'),
                 "subject contains 'Otro Asunto Importante'"),
)

# UI action function names -> workflow that owns them
ACTION_WORKFLOWS: Dict[str, Workflow] = {
    'sendSelectedPDFsEmail': Workflow.SALSAS_CASTILLO,
    'processPdfAttachment': Workflow.ILS,
    'processXlsxAttachmentTaylor': Workflow.TAYLOR,
    'processPdfAttachmentBerlin': Workflow.BERLIN,
}


def resolve_workflow(
    subject: Optional[str],
    labels: Optional[Iterable[str]],
    rules: Tuple[WorkflowRule, ...] = WORKFLOW_RULES
) -> Workflow:
    """
    Select the workflow for an email.

    Args:
        subject: Subject line (None treated as empty)
        labels: Thread label names (None treated as empty)
        rules: Ordered rules to evaluate

    Returns:
        Workflow of the first matching rule, or DEFAULT_WORKFLOW

    Example:
        >>> resolve_workflow("Berlin T01 guide", ["Salsas Castillo"])
        <Workflow.SALSAS_CASTILLO: 'salsas_castillo'>
    """
    subject = subject or ''
    label_set = frozenset(labels or ())

    for rule in rules:
        if rule.matches(subject, label_set):
            logger.info(f"Workflow rule matched: {rule.description} -> {rule.workflow.value}")
            return rule.workflow

    logger.info(f"No workflow rule matched, using {DEFAULT_WORKFLOW.value}")
    return DEFAULT_WORKFLOW


def resolve_action(function_name: Optional[str]) -> Optional[Workflow]:
    """Get the workflow that owns a UI action, or None if unknown."""
    if not function_name:
        return None
    return ACTION_WORKFLOWS.get(function_name)


def detect_context(event: Optional[Dict[str, Any]]) -> str:
    """
    Determine which host surface raised the event.

    Returns:
        "gmail", "drive" or "homepage"
    """
    if event and event.get('gmail'):
        return 'gmail'
    if event and event.get('drive'):
        return 'drive'
    return 'homepage'
