from .engine import ALL, OperationReport, Reconciler
from .reporter import ResultReporter

__all__ = ["ALL", "OperationReport", "Reconciler", "ResultReporter"]
