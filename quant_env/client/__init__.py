from .api import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ApiError, VariablesApi
from .remote import CallResult, Outcome, RemoteEnvironment

__all__ = [
    "ApiError",
    "CallResult",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "Outcome",
    "RemoteEnvironment",
    "VariablesApi",
]
