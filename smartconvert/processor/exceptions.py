class ProcessorError(Exception):
    """Base exception for all file-processing errors."""


class InputError(ProcessorError):
    """Raised when a source file is missing, unreadable or empty."""


class CodecError(ProcessorError):
    """Raised when decoding, rendering or encoding fails at a library boundary."""


class MergeError(CodecError):
    """Raised when images cannot be merged into one document."""


class RecognitionError(CodecError):
    """Raised when text recognition fails."""


class ConfigError(ProcessorError):
    """Raised when an optional feature is not configured (e.g. missing API key)."""


class AggregationError(ProcessorError):
    """Raised when outputs cannot be packaged for delivery."""


class InvalidTransitionError(ProcessorError):
    """Raised when a file entity is moved to a status its current one does not allow."""
