# dating_dna/errors.py
# Exception hierarchy for the Dating DNA engine.

from typing import Any, Dict


class DatingDNAError(Exception):
    """Base class for every error raised by the engine."""
    pass


class InputError(DatingDNAError, ValueError):
    """Raised when an answer set or type code is malformed (unknown question, bad value)."""
    pass


class IncompleteAssessmentError(InputError):
    """Raised when a complete answer set is required but some questions are unanswered."""

    def __init__(self, missing_ids):
        self.missing_ids = list(missing_ids)
        super().__init__(
            f"Assessment incomplete: {len(self.missing_ids)} unanswered question(s): "
            f"{', '.join(self.missing_ids)}"
        )


class ContentConfigurationError(DatingDNAError):
    """Raised when the static content tables cannot be loaded or fail their checks."""
    pass


class ValidationError(DatingDNAError):
    """
    Raised when a generated result violates a section contract.

    Carries the dotted section path (e.g. ``partnerA.narrative.overviewSummary``),
    a human readable expected range and the observed value so callers can log
    or report the failure without parsing the message.
    """

    def __init__(self, message: str, section: str, expected_range: str, actual_value: str):
        self.message = message
        self.section = section
        self.expected_range = expected_range
        self.actual_value = actual_value
        super().__init__(f"{section}: {message} (expected {expected_range}, got {actual_value})")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "section": self.section,
            "expected_range": self.expected_range,
            "actual_value": self.actual_value,
            "message": self.message,
        }
