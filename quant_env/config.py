"""Run configuration.

All inputs are read once at process start into an immutable ``RunConfig``
which is then passed explicitly to the engine and reporter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional
from urllib.parse import urlparse

from quant_env.actions import ActionInputs, add_mask
from quant_env.client.api import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from quant_env.exceptions import ValidationError
from quant_env.logging import get_logger

logger = get_logger(__name__)


class Operation(str, Enum):
    LIST = "list"
    SET = "set"
    CLEAR = "clear"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Operation":
        """Parse an operation name; empty means ``list``.

        Raises:
            ValidationError: For an unknown operation name
        """
        if not value:
            return cls.LIST
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(op.value for op in cls)
            raise ValidationError(
                f"Unknown operation: {value}. Valid operations are: {valid}"
            ) from None


def _parse_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def _parse_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        raise ValidationError(
            f"Invalid timeout: {value!r} (expected seconds)"
        ) from None
    if timeout <= 0:
        raise ValidationError(f"Invalid timeout: {value!r} (must be positive)")
    return timeout


@dataclass(frozen=True)
class RunConfig:
    """Everything one invocation needs, validated up front."""

    api_key: str
    organization: str
    app_name: str
    environment_name: str
    operation: Operation = Operation.LIST
    replace: bool = False
    base_url: str = DEFAULT_BASE_URL
    env_file: Optional[str] = None
    json_vars: Optional[str] = None
    variables: Optional[str] = None
    keys: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    # Pre-split KEY=VALUE pairs applied after ``variables``
    overrides: Optional[Dict[str, str]] = field(default=None, hash=False)

    def __post_init__(self):
        parsed_url = urlparse(self.base_url)
        if not parsed_url.scheme or not parsed_url.netloc:
            raise ValidationError(f"Invalid base_url: {self.base_url}")
        if self.operation is Operation.SET and not self.has_sources:
            raise ValidationError(
                "At least one of env_file, json_vars, or variables must be "
                "provided for set operation"
            )
        if self.operation is Operation.DELETE and not self.keys:
            raise ValidationError(
                "No keys provided for delete operation",
                ["Example: keys: 'OLD_API_KEY,LEGACY_URL'"],
            )

    @property
    def has_sources(self) -> bool:
        return bool(
            self.env_file or self.json_vars or self.variables or self.overrides
        )

    def __repr__(self) -> str:
        # Never echo the token or inline values
        return (
            f"RunConfig(organization={self.organization!r}, "
            f"app_name={self.app_name!r}, "
            f"environment_name={self.environment_name!r}, "
            f"operation={self.operation.value!r}, replace={self.replace})"
        )

    @classmethod
    def from_inputs(
        cls, inputs: ActionInputs, mask_secrets: bool = True
    ) -> "RunConfig":
        """Build the configuration from action inputs.

        Args:
            inputs: Input reader
            mask_secrets: Register the API key with the runner's log masking

        Raises:
            MissingInputError: If a required input is empty
            ValidationError: If an input value is invalid
        """
        api_key = inputs.get("api_key", required=True)
        if mask_secrets:
            add_mask(api_key)

        app_name = inputs.get("app_name", required=True)
        organization = inputs.get("organization", required=True)
        environment_name = inputs.get("environment_name", required=True)
        operation = Operation.parse(inputs.get("operation"))

        keys = None
        if operation is Operation.DELETE:
            keys = inputs.get("keys", required=True)

        config = cls(
            api_key=api_key,
            organization=organization,
            app_name=app_name,
            environment_name=environment_name,
            operation=operation,
            replace=_parse_bool(inputs.get("replace")),
            base_url=inputs.get("base_url") or DEFAULT_BASE_URL,
            env_file=inputs.get("env_file") or None,
            json_vars=inputs.get("json_vars") or None,
            variables=inputs.get("variables") or None,
            keys=keys,
            timeout=_parse_timeout(inputs.get("timeout")),
        )
        logger.debug(f"Loaded {config!r}")
        return config
