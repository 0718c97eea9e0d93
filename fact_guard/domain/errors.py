"""Error taxonomy for the fact-verification pipeline."""


class FactGuardError(Exception):
    """Base class for pipeline errors."""


class InputError(FactGuardError, ValueError):
    """Missing or invalid caller input. Surfaced as HTTP 400."""


class CollaboratorError(FactGuardError):
    """A generative or search collaborator failed or returned malformed data."""

    def __init__(self, message: str, provider: str = "unknown"):
        super().__init__(message)
        self.provider = provider


class StorageError(FactGuardError):
    """Cache or correction-memory write failed. Always absorbed."""
