"""Translate an ``OperationReport`` into step outputs and exit status."""

import json

from quant_env.actions import OutputWriter
from quant_env.config import Operation
from quant_env.logging import get_logger
from quant_env.reconcile.engine import OperationReport

logger = get_logger(__name__)


class ResultReporter:
    """Emit the declared outputs for each operation.

    Variable values are only ever written to the ``variables`` output of a
    list run; log lines carry names alone.
    """

    def __init__(self, writer: OutputWriter):
        self.writer = writer

    def report(self, report: OperationReport) -> int:
        """Write outputs and return the process exit code."""
        if report.operation is Operation.LIST:
            variables = report.variables or {}
            self.writer.set_output("variables", json.dumps(variables, indent=2))
            self.writer.set_output("count", report.count)
        elif report.operation is Operation.SET:
            self.writer.set_output("updated_count", report.updated)
            self.writer.set_output("failed_count", report.failed)
        else:
            self.writer.set_output("deleted_count", report.deleted)
            self.writer.set_output("failed_count", report.failed)

        if not report.succeeded:
            logger.error(report.message or "Operation failed")
            return 1
        return 0

    def fatal(self, message: str) -> int:
        """Mark the run failed after an error that produced no report."""
        logger.error(message)
        return 1
