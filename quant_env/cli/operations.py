"""Business operations for the quant-env CLI.

Commands build a ``RunConfig`` and hand it to ``execute_operation``; this
module wires the HTTP client, remote adapter, engine and reporter together
and keeps presentation out of the way.
"""

from typing import Optional, Tuple

import requests

from quant_env.actions import OutputWriter
from quant_env.client import RemoteEnvironment, VariablesApi
from quant_env.config import RunConfig
from quant_env.logging import get_logger
from quant_env.reconcile import OperationReport, Reconciler, ResultReporter

logger = get_logger(__name__)


def create_remote(
    config: RunConfig, session: Optional[requests.Session] = None
) -> RemoteEnvironment:
    """Create the remote adapter for the configured environment."""
    api = VariablesApi(
        config.api_key,
        base_url=config.base_url,
        timeout=config.timeout,
        session=session,
    )
    return RemoteEnvironment(
        api, config.organization, config.app_name, config.environment_name
    )


def execute_operation(
    config: RunConfig,
    writer: OutputWriter,
    session: Optional[requests.Session] = None,
) -> Tuple[int, OperationReport]:
    """Run the configured operation and write its outputs.

    Args:
        config: Validated run configuration
        writer: Destination for step outputs
        session: Optional pre-built HTTP session

    Returns:
        Tuple of (exit_code, report)

    Raises:
        ParseError: If a variable source is malformed
        ValidationError: If the key list is empty
        RemoteError: If a list or clear call fails
    """
    remote = create_remote(config, session)
    try:
        report = Reconciler(remote, config).run()
    finally:
        remote.api.close()

    exit_code = ResultReporter(writer).report(report)
    return exit_code, report
