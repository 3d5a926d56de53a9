"""Exception hierarchy for quant-env.

Every error the command line reports to the user derives from
``QuantEnvError`` and carries a message plus optional suggestions for the
Rich error display.
"""

from typing import List, Optional


class QuantEnvError(Exception):
    """Base exception with Rich display support."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(message)


class UsageError(QuantEnvError):
    """Raised when the run is configured incorrectly."""


class MissingInputError(UsageError):
    """Raised when a required action input is not supplied."""

    def __init__(self, input_name: str):
        self.input_name = input_name
        message = f"Input required and not supplied: {input_name}"
        suggestions = [f"Set '{input_name}' in the step's 'with:' block"]
        super().__init__(message, suggestions)


class ValidationError(UsageError):
    """Raised when an input value is present but not acceptable."""


class ParseError(QuantEnvError):
    """Raised when a variable source cannot be decoded."""


class JsonVariablesError(ParseError):
    """Raised when the json_vars input is not a JSON object of scalars."""

    def __init__(self, raw: str, parse_error: str):
        self.raw = raw
        self.parse_error = parse_error
        message = f"Failed to parse json_vars: {parse_error}"
        suggestions = ['Example: json_vars: \'{"API_URL": "https://api.example.com"}\'']
        super().__init__(message, suggestions)


class EnvFileReadError(ParseError):
    """Raised when the env_file input cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        message = f"Cannot read env file '{path}': {reason}"
        suggestions = ["Check the path is relative to the workspace checkout"]
        super().__init__(message, suggestions)


class RemoteError(QuantEnvError):
    """Raised when a whole-operation remote call fails."""

    def __init__(
        self,
        operation: str,
        message: str,
        status_code: Optional[int] = None,
    ):
        self.operation = operation
        self.status_code = status_code
        super().__init__(message)
