"""
Exception hierarchy for keeper-calldata

Every error carries a numeric code and a details dictionary so the CLI can
report it and tests can assert on it without string matching.
"""
from typing import Any, Dict, Optional


class ErrorCodes:
    """Numeric error codes grouped by area"""
    # Configuration / interface (1xxx)
    CONFIG_INVALID = 1001
    INTERFACE_INVALID = 1002

    # Encoding / decoding (2xxx)
    UNKNOWN_FUNCTION = 2001
    ARGUMENT_MISMATCH = 2002
    MALFORMED_ARGUMENT_INPUT = 2003
    MALFORMED_CALLDATA = 2004


class CalldataError(Exception):
    """Base exception class for keeper-calldata"""

    default_code = 0

    def __init__(self, message: str, code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


class ConfigurationError(CalldataError):
    """Invalid settings from the environment or command line"""
    default_code = ErrorCodes.CONFIG_INVALID

    def __init__(self, message: str, field: str = None, value: Any = None, code: int = None):
        details = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, code=code, details=details)


class InterfaceError(CalldataError):
    """The embedded interface descriptor failed validation"""
    default_code = ErrorCodes.INTERFACE_INVALID


class UnknownFunctionError(CalldataError):
    """No function entry matches the requested name or selector"""
    default_code = ErrorCodes.UNKNOWN_FUNCTION

    def __init__(self, message: str, function_name: str = None, selector: str = None):
        details = {}
        if function_name is not None:
            details["function_name"] = function_name
        if selector is not None:
            details["selector"] = selector
        super().__init__(message, details=details)


class ArgumentMismatchError(CalldataError):
    """Call arguments do not fit the function's declared parameters"""
    default_code = ErrorCodes.ARGUMENT_MISMATCH

    def __init__(self, message: str, signature: str = None, position: int = None,
                 expected_type: str = None, value: Any = None):
        details = {}
        if signature is not None:
            details["signature"] = signature
        if position is not None:
            details["position"] = position
        if expected_type is not None:
            details["expected_type"] = expected_type
        if value is not None:
            details["value"] = value
        super().__init__(message, details=details)


class MalformedArgumentInputError(CalldataError):
    """Raw argument text is not a JSON array"""
    default_code = ErrorCodes.MALFORMED_ARGUMENT_INPUT

    def __init__(self, message: str, raw_input: str = None):
        details = {"raw_input": raw_input} if raw_input is not None else {}
        super().__init__(message, details=details)


class MalformedCalldataError(CalldataError):
    """Calldata cannot be split into a selector and decodable parameters"""
    default_code = ErrorCodes.MALFORMED_CALLDATA
