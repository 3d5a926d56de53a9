"""quant-env - reconcile CI environment variables with Quant Cloud."""

__version__ = "1.0.0"
__package_name__ = "quant-env"

# Initialize logging with default configuration
from quant_env.logging import configure_logging

configure_logging()

from .exceptions import (
    MissingInputError,
    ParseError,
    QuantEnvError,
    RemoteError,
    UsageError,
    ValidationError,
)

__all__ = [
    "MissingInputError",
    "ParseError",
    "QuantEnvError",
    "RemoteError",
    "UsageError",
    "ValidationError",
]
