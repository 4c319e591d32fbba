from enum import Enum

class ErrorCode(str, Enum):
    """Stable error codes carried by every EnvError."""
    NOT_FOUND = "not_found"
    INVALID_FORMAT = "invalid_format"

    INVALID_TARGET = "invalid_target"
    INVALID_FALLBACK = "invalid_fallback"
    UNSUPPORTED_TYPE = "unsupported_type"
