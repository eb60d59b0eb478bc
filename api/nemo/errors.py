class NemoError(Exception):
    """Base class for errors raised inside the chat core."""

    reason = "error"


class ValidationError(NemoError):
    """The inbound message cannot be sent to any backend."""

    reason = "validation"

    def __init__(self, message: str, code: str, suggestion: str):
        super().__init__(message)
        self.code = code
        self.suggestion = suggestion


class ConfigurationError(NemoError):
    """A credential required by the selected backend is missing."""

    reason = "configuration"


class BackendError(NemoError):
    """Transport failure, non-2xx status or provider error payload."""

    reason = "backend"


class BackendTimeoutError(BackendError):
    reason = "timeout"


class DegenerateOutputError(BackendError):
    """The backend answered, but the sanitized text is too short to use."""

    reason = "degenerate"
