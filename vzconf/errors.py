"""Exception hierarchy and error reporting for vzconf.

Every failure is reported to an error sink as a (domain, code, message)
triple and then raised as one of the exceptions below.
"""

import logging
from enum import Enum
from typing import Optional, Protocol


ERROR_DOMAIN = "openvz"

logger = logging.getLogger(__name__)


class ParseErrorCode(Enum):
    """Reasons a domain document is rejected."""
    XML_ERROR = "xml_error"
    INVALID_ROOT = "invalid_root"
    INVALID_TYPE = "invalid_type"
    INVALID_NAME = "invalid_name"
    RESERVED_ID = "reserved_id"
    MALFORMED_UUID = "malformed_uuid"
    UUID_GENERATION_FAILED = "uuid_generation_failed"
    BAD_FILESYSTEM_COUNT = "bad_filesystem_count"
    BAD_FILESYSTEM_TYPE = "bad_filesystem_type"
    BAD_INTERFACE = "bad_interface"


class ConfigIOErrorCode(Enum):
    """Reasons a container config file could not be used."""
    NO_CONFIG_DIR = "no_config_dir"
    READ_FAILED = "read_failed"
    LINE_TOO_LONG = "line_too_long"
    WRITE_FAILED = "write_failed"


class VzConfError(Exception):
    """Base exception for vzconf errors."""

    code = "internal_error"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.domain = ERROR_DOMAIN


class ValidationError(VzConfError):
    """Malformed or contradictory input."""

    code = "validation_error"


class ParseError(ValidationError):
    """A domain document failed validation."""

    def __init__(self, reason: ParseErrorCode, message: str):
        super().__init__(message, reason.value)
        self.reason = reason


class MalformedUuid(ValidationError):
    """A UUID recorded in a config file does not parse."""

    code = "malformed_uuid"

    def __init__(self, veid: int, text: str):
        super().__init__(f"UUID in config file of VE {veid} malformed: {text!r}")
        self.veid = veid
        self.text = text


class StatusParseError(ValidationError):
    """A runtime status row could not be understood."""

    code = "status_parse_error"


class ConfigIOError(VzConfError):
    """A container config file is missing, unreadable or unwritable."""

    def __init__(self, reason: ConfigIOErrorCode, message: str):
        super().__init__(message, reason.value)
        self.reason = reason


class IdentityConflict(VzConfError):
    """Name already belongs to an active instance."""

    code = "name_in_use"

    def __init__(self, name: str):
        super().__init__(f"Error already an active OpenVZ VM having id '{name}'")
        self.name = name


class InstanceActive(VzConfError):
    """Operation requires an inactive instance."""

    code = "instance_active"


class ResourceExhaustion(VzConfError):
    """A resource (entropy, memory) could not be obtained."""

    code = "resource_exhaustion"


class ErrorSink(Protocol):
    """Receives every error raised by vzconf components."""

    def report(self, domain: str, code: str, message: str) -> None:
        ...


class LoggingErrorSink:
    """Forward errors to the vzconf logger."""

    def report(self, domain: str, code: str, message: str) -> None:
        logger.error(f"[{domain}:{code}] {message}")


class RecordingErrorSink:
    """Keep reported errors in memory, oldest first."""

    def __init__(self) -> None:
        self.errors: list[tuple[str, str, str]] = []

    def report(self, domain: str, code: str, message: str) -> None:
        self.errors.append((domain, code, message))

    @property
    def codes(self) -> list[str]:
        return [code for _, code, _ in self.errors]


def report(sink: ErrorSink, error: VzConfError) -> VzConfError:
    """Send an error to the sink and hand it back for raising."""
    sink.report(error.domain, error.code, error.message)
    return error
