"""
Result types
Outcomes, internal step results and the install result returned to callers.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any
import json


class FaultKind(Enum):
    """Why an install did not complete."""
    TRANSPORT = "TransportFault"
    STRUCTURAL_MISMATCH = "StructuralMismatch"
    REMOTE_INSTALL_FAILURE = "RemoteInstallFailure"


class Outcome(Enum):
    """Final outcome of one install invocation."""
    SUCCESS_INSTALLED = "success_installed"
    SUCCESS_ACTIVATED = "success_activated"
    INSTALL_FAILED = "install_failed"
    ACTIVATION_AFFORDANCE_MISSING = "activation_affordance_missing"
    UPLOAD_FORM_MISSING = "upload_form_missing"
    TRANSPORT_ERROR = "transport_error"
    PAYLOAD_UNREADABLE = "payload_unreadable"
    UNEXPECTED_ERROR = "unexpected_error"

    @property
    def is_success(self) -> bool:
        return self in (Outcome.SUCCESS_INSTALLED, Outcome.SUCCESS_ACTIVATED)

    @property
    def fault_kind(self) -> Optional[FaultKind]:
        return _FAULT_KINDS.get(self)


_FAULT_KINDS = {
    Outcome.INSTALL_FAILED: FaultKind.REMOTE_INSTALL_FAILURE,
    Outcome.ACTIVATION_AFFORDANCE_MISSING: FaultKind.STRUCTURAL_MISMATCH,
    Outcome.UPLOAD_FORM_MISSING: FaultKind.STRUCTURAL_MISMATCH,
    Outcome.TRANSPORT_ERROR: FaultKind.TRANSPORT,
}


class InstallState(Enum):
    """States of the post-upload state machine."""
    UPLOADED = "uploaded"
    ACTIVATING = "activating"
    DONE = "done"
    FAILED = "failed"


class StepResult:
    """
    Tagged result of a single stage: either ok with a value, or failed with
    an outcome and a reason. Stages return these instead of raising.
    """

    def __init__(self, value: Any = None, outcome: Optional[Outcome] = None, reason: Optional[str] = None):
        self.value = value
        self.outcome = outcome
        self.reason = reason

    @classmethod
    def ok(cls, value: Any = None) -> 'StepResult':
        return cls(value=value)

    @classmethod
    def failed(cls, outcome: Outcome, reason: str) -> 'StepResult':
        return cls(outcome=outcome, reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.outcome is None

    def __repr__(self) -> str:
        if self.is_ok:
            return "StepResult.ok()"
        return f"StepResult.failed({self.outcome.name}, {self.reason!r})"


class InstallResult:
    """Represents the result of installing one theme."""

    def __init__(
        self,
        theme_name: str,
        outcome: Outcome,
        state: InstallState,
        message: Optional[str] = None,
        activation_url: Optional[str] = None,
        installed: bool = False
    ):
        """
        Initialize install result.

        Args:
            theme_name: Display name of the uploaded theme zip
            outcome: Final outcome
            state: Final state of the install state machine
            message: Failure reason or diagnostic text
            activation_url: Absolute activation URL, if one was followed
            installed: The upload itself went through
        """
        self.theme_name = theme_name
        self.outcome = outcome
        self.state = state
        self.message = message
        self.activation_url = activation_url
        self.installed = installed or outcome.is_success
        self.finished_at = datetime.now(timezone.utc)

    @property
    def success(self) -> bool:
        return self.outcome.is_success

    @property
    def fault_kind(self) -> Optional[FaultKind]:
        return self.outcome.fault_kind

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert install result to dictionary.

        Returns:
            Dictionary representation ready for JSON serialization
        """
        fault_kind = self.fault_kind
        return {
            'themeName': self.theme_name,
            'outcome': self.outcome.value,
            'state': self.state.value,
            'success': self.success,
            'faultKind': fault_kind.value if fault_kind else None,
            'message': self.message,
            'activationUrl': self.activation_url,
            'installed': self.installed,
            'finishedAt': self.finished_at.isoformat(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
