"""Roster state and result models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from src.models.registrant import Registrant


class RosterState(str, Enum):
    """Lifecycle of a roster for one session."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    DEGRADED = "degraded"


class FailureKind(str, Enum):
    """Where a failed operation should be shown to the user."""

    BUSINESS = "Business"  # next to the offending field
    SERVER = "Server"      # form-level alert, retry later


@dataclass
class ValidationResult:
    """Outcome of a whole-form validation."""

    is_valid: bool
    errors: Dict[str, str] = field(default_factory=dict)


@dataclass
class AddResult:
    """Outcome of adding a registrant to the roster."""

    success: bool
    registrant: Optional[Registrant] = None
    error: Optional[str] = None
    kind: Optional[FailureKind] = None

    @classmethod
    def ok(cls, registrant: Registrant) -> "AddResult":
        return cls(success=True, registrant=registrant)

    @classmethod
    def failure(cls, error: str, kind: FailureKind) -> "AddResult":
        return cls(success=False, error=error, kind=kind)


@dataclass
class RemoveResult:
    """Outcome of removing a registrant from the roster."""

    success: bool
    error: Optional[str] = None
    kind: Optional[FailureKind] = None
