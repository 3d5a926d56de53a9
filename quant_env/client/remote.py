"""Adapter between the reconciliation engine and the variables API.

Mutating calls return a ``CallResult`` instead of raising, so the engine can
switch over a closed set of outcomes. Listing has no per-key outcome and
raises ``RemoteError`` on failure.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from quant_env.client.api import ApiError, VariablesApi
from quant_env.exceptions import RemoteError


class Outcome(Enum):
    """Result tag of one remote call."""

    APPLIED = "applied"
    ALREADY_ABSENT = "already_absent"
    FAILED = "failed"


@dataclass(frozen=True)
class CallResult:
    outcome: Outcome
    reason: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.outcome is not Outcome.FAILED


APPLIED = CallResult(Outcome.APPLIED)
ALREADY_ABSENT = CallResult(Outcome.ALREADY_ABSENT)


def _failed(error: ApiError) -> CallResult:
    return CallResult(Outcome.FAILED, error.message, error.status_code)


class RemoteEnvironment:
    """One application environment on the remote service."""

    def __init__(
        self,
        api: VariablesApi,
        organization: str,
        application: str,
        environment: str,
    ):
        self.api = api
        self.organization = organization
        self.application = application
        self.environment = environment

    @property
    def _target(self):
        return (self.organization, self.application, self.environment)

    def list(self) -> Dict[str, str]:
        try:
            return self.api.list_environment_variables(*self._target)
        except ApiError as e:
            raise RemoteError("list", e.message, e.status_code) from e

    def bulk_set(self, variables: Dict[str, str]) -> CallResult:
        """Replace the environment's variables with exactly ``variables``."""
        entries = [{"name": name, "value": value} for name, value in variables.items()]
        try:
            self.api.bulk_set_environment_variables(*self._target, entries)
        except ApiError as e:
            return _failed(e)
        return APPLIED

    def update(self, key: str, value: str) -> CallResult:
        try:
            self.api.update_environment_variable(*self._target, key, value)
        except ApiError as e:
            return _failed(e)
        return APPLIED

    def delete(self, key: str) -> CallResult:
        """Delete one variable; a 404 means it is already gone."""
        try:
            self.api.delete_environment_variable(*self._target, key)
        except ApiError as e:
            if e.not_found:
                return ALREADY_ABSENT
            return _failed(e)
        return APPLIED
