"""Exceptions raised by the timeline engine."""


class TimelineError(ValueError):
    """Base class for all engine errors."""


class InvalidOrderingError(TimelineError):
    """A player ordering does not describe the same set as the evidence."""

    def __init__(self, message: str, evidence_id: str | None = None):
        super().__init__(message)
        self.evidence_id = evidence_id


class CaseNotFoundError(TimelineError):
    """No case file exists for the requested case."""


class CaseFormatError(TimelineError):
    """A case file is not valid JSON or does not match the case schema."""


class SessionError(TimelineError):
    """A session transition was requested that the current state does not allow."""
