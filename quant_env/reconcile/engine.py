"""Reconciliation engine.

Drives one operation against a ``RemoteEnvironment`` and returns an
``OperationReport``. Failure policy differs per operation:

- list, clear: any remote error is fatal and raised as ``RemoteError``.
- set (replace): the single bulk call either applies everything or fails
  the run with ``updated_count=0`` and every key counted as failed.
- set (merge): every key is attempted; any failure fails the run.
- delete: every key is attempted; failures are counted but the run still
  succeeds. A key that is already absent counts as deleted.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from quant_env.client.remote import Outcome, RemoteEnvironment
from quant_env.config import Operation, RunConfig
from quant_env.exceptions import RemoteError
from quant_env.logging import get_logger
from quant_env.variables import merge_variables, parse_key_list

logger = get_logger(__name__)

ALL = "all"


@dataclass
class OperationReport:
    """Counters and status of one reconciliation run."""

    operation: Operation
    variables: Optional[Dict[str, str]] = None
    updated: int = 0
    deleted: Union[int, str] = 0
    failed: int = 0
    succeeded: bool = True
    message: Optional[str] = None
    keys: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.variables or {})

    def fail(self, message: str) -> None:
        self.succeeded = False
        self.message = message


class Reconciler:
    """Execute the configured operation against the remote environment."""

    def __init__(self, remote: RemoteEnvironment, config: RunConfig):
        self.remote = remote
        self.config = config

    def run(self) -> OperationReport:
        """Run the configured operation.

        Sources and key lists are parsed before any remote call is made, so
        parse errors never leave the environment half-updated.
        """
        operation = self.config.operation
        logger.info(f"Operation: {operation.value}")

        if operation is Operation.LIST:
            return self.list_variables()
        if operation is Operation.CLEAR:
            return self.clear()
        if operation is Operation.DELETE:
            return self.delete(parse_key_list(self.config.keys or ""))

        desired = merge_variables(
            env_file=self.config.env_file,
            json_vars=self.config.json_vars,
            variables=self.config.variables,
            overrides=self.config.overrides,
        )
        return self.set(desired, replace=self.config.replace)

    def list_variables(self) -> OperationReport:
        logger.info(f"Listing variables for environment: {self.remote.environment}")
        variables = self.remote.list()
        report = OperationReport(Operation.LIST, variables=variables)

        logger.info(f"Found {report.count} variable(s)")
        for key in variables:
            logger.info(f"  - {key}")
        return report

    def clear(self) -> OperationReport:
        environment = self.remote.environment
        logger.info(f"Clearing all variables for environment: {environment}")
        result = self.remote.bulk_set({})
        if not result.ok:
            logger.error(f"Failed to clear variables: {result.reason}")
            raise RemoteError(
                "clear", result.reason or "Clear failed", result.status_code
            )

        logger.info("All variables cleared successfully")
        return OperationReport(Operation.CLEAR, deleted=ALL, failed=0)

    def delete(self, keys: List[str]) -> OperationReport:
        report = OperationReport(Operation.DELETE, keys=list(keys))
        deleted = 0
        logger.info(f"Deleting {len(keys)} variable(s)...")

        for key in keys:
            result = self.remote.delete(key)
            if result.outcome is Outcome.APPLIED:
                logger.info(f"  Deleted: {key}")
                deleted += 1
            elif result.outcome is Outcome.ALREADY_ABSENT:
                logger.info(f"  Not found (already deleted): {key}")
                deleted += 1
            else:
                logger.warning(f"  Failed to delete {key}: {result.reason}")
                report.failed += 1

        report.deleted = deleted
        logger.info(f"Deleted {deleted} variable(s), {report.failed} failed")
        return report

    def set(self, variables: Dict[str, str], replace: bool = False) -> OperationReport:
        report = OperationReport(Operation.SET, keys=list(variables))

        if not variables:
            logger.warning("No variables to set")
            return report

        count = len(variables)
        if replace:
            logger.info(f"Setting {count} variable(s)... (replace mode - bulk API)")
            self._replace(variables, report)
        else:
            logger.info(f"Setting {count} variable(s)... (merge mode)")
            self._merge(variables, report)
        return report

    def _replace(self, variables: Dict[str, str], report: OperationReport) -> None:
        result = self.remote.bulk_set(variables)
        if not result.ok:
            logger.error(f"Failed to set variables: {result.reason}")
            report.updated = 0
            report.failed = len(variables)
            report.fail(result.reason or "Bulk set failed")
            return

        logger.info(
            f"Successfully replaced all variables with {len(variables)} new variable(s)"
        )
        for key in variables:
            logger.info(f"  - {key}")
        report.updated = len(variables)
        report.failed = 0

    def _merge(self, variables: Dict[str, str], report: OperationReport) -> None:
        for key, value in variables.items():
            result = self.remote.update(key, value)
            if result.ok:
                logger.info(f"  Set: {key}")
                report.updated += 1
            else:
                logger.warning(f"  Failed to set {key}: {result.reason}")
                report.failed += 1

        logger.info(f"Set {report.updated} variable(s), {report.failed} failed")
        if report.failed > 0:
            report.fail(f"Failed to set {report.failed} variable(s)")
