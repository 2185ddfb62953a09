"""
Tests for the workflow dispatcher.
"""

from unittest.mock import Mock

import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from domain.workflow import (
    DEFAULT_WORKFLOW,
    Workflow,
    WorkflowRule,
    detect_context,
    resolve_action,
    resolve_workflow,
)


class TestResolveWorkflow:
    """Test rule evaluation."""

    def test_label_rule_wins_over_subject(self):
        """Test Salsas Castillo label takes precedence."""
        assert resolve_workflow("Berlin LCS T01", ["Salsas Castillo"]) == Workflow.SALSAS_CASTILLO

    def test_label_rule_with_empty_subject(self):
        """Test label rule applies without subject."""
        assert resolve_workflow("", ["Inbox", "Salsas Castillo"]) == Workflow.SALSAS_CASTILLO

    @pytest.mark.parametrize('subject,expected', [
        ("Guia T01 lista", Workflow.ILS),
        ("guia t02", Workflow.ILS),
        ("LCS shipment 55", Workflow.TAYLOR),
        ("Berlin HMO departure", Workflow.BERLIN),
        ("berlin tj", Workflow.BERLIN),
        ("Otro Asunto Importante", Workflow.CUSTOM),
    ])
    def test_subject_rules(self, subject, expected):
        """Test each subject rule."""
        assert resolve_workflow(subject, []) == expected

    def test_custom_rule_is_case_sensitive(self):
        """Test custom subject must match casing."""
        assert resolve_workflow("otro asunto importante", []) == DEFAULT_WORKFLOW

    def test_declaration_order(self):
        """Test ILS rule precedes Taylor and Berlin."""
        assert resolve_workflow("Berlin LCS T0", []) == Workflow.ILS
        assert resolve_workflow("Berlin LCS", []) == Workflow.TAYLOR

    def test_default(self):
        """Test fallback workflow."""
        assert resolve_workflow("Weekly report", ["Inbox"]) == Workflow.GENERIC

    def test_none_inputs(self):
        """Test None subject and labels."""
        assert resolve_workflow(None, None) == DEFAULT_WORKFLOW

    def test_short_circuit(self):
        """Test later rules are not evaluated after a match."""
        first = Mock(return_value=True)
        second = Mock(return_value=True)
        rules = (
            WorkflowRule(Workflow.ILS, first, "first"),
            WorkflowRule(Workflow.TAYLOR, second, "second"),
        )

        assert resolve_workflow("anything", ["x"], rules) == Workflow.ILS
        first.assert_called_once_with("anything", frozenset(["x"]))
        second.assert_not_called()

    def test_idempotent(self):
        """Test identical input gives identical output."""
        assert resolve_workflow("LCS 1", []) == resolve_workflow("LCS 1", [])


class TestResolveAction:
    """Test action routing."""

    @pytest.mark.parametrize('function_name,expected', [
        ('sendSelectedPDFsEmail', Workflow.SALSAS_CASTILLO),
        ('processPdfAttachment', Workflow.ILS),
        ('processXlsxAttachmentTaylor', Workflow.TAYLOR),
        ('processPdfAttachmentBerlin', Workflow.BERLIN),
    ])
    def test_known_actions(self, function_name, expected):
        """Test each action maps to its workflow."""
        assert resolve_action(function_name) == expected

    @pytest.mark.parametrize('function_name', ['deleteEverything', '', None])
    def test_unknown_actions(self, function_name):
        """Test unknown actions return None."""
        assert resolve_action(function_name) is None


class TestDetectContext:
    """Test host context detection."""

    def test_gmail(self):
        """Test Gmail events."""
        assert detect_context({'gmail': {'messageId': 'm'}}) == 'gmail'

    def test_drive(self):
        """Test Drive events."""
        assert detect_context({'drive': {'activeCursorItem': {}}}) == 'drive'

    @pytest.mark.parametrize('event', [None, {}, {'type': 'homepage'}])
    def test_homepage(self, event):
        """Test anything else is the homepage."""
        assert detect_context(event) == 'homepage'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
