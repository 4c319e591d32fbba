import logging

from .accessors import (
    get_bool,
    get_duration,
    get_float32,
    get_float64,
    get_int,
    get_str,
    get_time,
    must_get_bool,
    must_get_duration,
    must_get_float32,
    must_get_float64,
    must_get_int,
    must_get_str,
    must_get_time,
    try_get_bool,
    try_get_duration,
    try_get_float32,
    try_get_float64,
    try_get_int,
    try_get_str,
    try_get_time,
)
from .config import (
    DotenvEnvironment,
    EnvConfig,
    Environment,
    MappingEnvironment,
    OsEnvironment,
)
from .dates import format_rfc3339, parse_rfc3339
from .error_codes import ErrorCode
from .errors import (
    EnvError,
    InvalidFallbackError,
    InvalidFormatError,
    InvalidTargetError,
    MustGetError,
    NotFoundError,
    UnsupportedTypeError,
)
from .loader import ENV_TAG, FALLBACK_TAG, env_field, env_model_field, load
from .logger import JsonFormatter, PlainFormatter, configure_logging, get_logger
from .parsing import parse_bool, parse_float32, parse_float64, parse_int
from .value_objects import Duration, EnvTag, Float32, format_duration, parse_duration

logging.getLogger("typedenv").addHandler(logging.NullHandler())

__all__ = [
    "get_str",
    "try_get_str",
    "must_get_str",
    "get_int",
    "try_get_int",
    "must_get_int",
    "get_float32",
    "try_get_float32",
    "must_get_float32",
    "get_float64",
    "try_get_float64",
    "must_get_float64",
    "get_bool",
    "try_get_bool",
    "must_get_bool",
    "get_time",
    "try_get_time",
    "must_get_time",
    "get_duration",
    "try_get_duration",
    "must_get_duration",
    "load",
    "env_field",
    "env_model_field",
    "ENV_TAG",
    "FALLBACK_TAG",
    "EnvTag",
    "Float32",
    "Duration",
    "EnvConfig",
    "Environment",
    "OsEnvironment",
    "MappingEnvironment",
    "DotenvEnvironment",
    "ErrorCode",
    "EnvError",
    "NotFoundError",
    "InvalidFormatError",
    "InvalidTargetError",
    "InvalidFallbackError",
    "UnsupportedTypeError",
    "MustGetError",
    "parse_int",
    "parse_float32",
    "parse_float64",
    "parse_bool",
    "parse_rfc3339",
    "format_rfc3339",
    "parse_duration",
    "format_duration",
    "configure_logging",
    "get_logger",
    "JsonFormatter",
    "PlainFormatter",
]
