"""Error taxonomy for the triage agent."""


class TriageError(Exception):
    """Base class for all triage agent errors."""


class ValidationError(TriageError):
    """The message to analyze is empty or whitespace-only."""


class AnalysisError(TriageError):
    """A suggestion provider failed; the analysis run was aborted."""


class StorageError(TriageError):
    """The history store could not be read or written."""


class SessionStateError(TriageError):
    """An operation was attempted in a session state that does not allow it."""


class ConfigError(TriageError):
    """Configuration could not be loaded or is incomplete."""
