#!/usr/bin/env python3
"""quant-env CLI.

``quant-env run`` is the GitHub Action entrypoint: it reads the step's
``INPUT_*`` variables, reconciles and writes the step outputs. The
``list``, ``set``, ``clear`` and ``delete`` commands run the same
operations from a terminal, taking connection settings from options or
their ``QUANT_*`` environment fallbacks.
"""

from typing import Dict, List, Optional

import typer
from rich.console import Console

from quant_env.actions import ActionInputs, OutputWriter
from quant_env.cli.display import display_error, display_report, display_target
from quant_env.cli.operations import execute_operation
from quant_env.client.api import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from quant_env.config import Operation, RunConfig
from quant_env.exceptions import QuantEnvError
from quant_env.logging import configure_logging, get_logger
from quant_env.reconcile import ResultReporter
from quant_env.utils.env import load_settings_file

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="quant-env",
    help="Manage Quant Cloud environment variables from CI pipelines",
    add_completion=False,
)

# Shared connection options for the local commands
API_KEY_OPTION = typer.Option(
    ..., "--api-key", envvar="QUANT_API_KEY", help="Quant Cloud API token"
)
ORGANIZATION_OPTION = typer.Option(
    ..., "--organization", "-o", envvar="QUANT_ORGANIZATION", help="Organization"
)
APP_OPTION = typer.Option(
    ..., "--app", "-a", envvar="QUANT_APP_NAME", help="Application name"
)
ENVIRONMENT_OPTION = typer.Option(
    ..., "--environment", "-e", envvar="QUANT_ENVIRONMENT", help="Environment name"
)
BASE_URL_OPTION = typer.Option(
    DEFAULT_BASE_URL, "--base-url", envvar="QUANT_BASE_URL", help="API base URL"
)
TIMEOUT_OPTION = typer.Option(
    DEFAULT_TIMEOUT, "--timeout", help="Request timeout in seconds"
)


def _version_callback(value: bool) -> None:
    if value:
        from quant_env import __version__

        console.print(f"quant-env v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only show warnings and errors"
    ),
    dotenv: Optional[str] = typer.Option(
        None,
        "--dotenv",
        envvar="QUANT_ENV_DOTENV",
        help="Load QUANT_* settings from this dotenv file",
    ),
) -> None:
    """Reconcile environment variables against Quant Cloud.

    Examples:
        quant-env run
        quant-env list -o acme -a web -e production
        quant-env set -o acme -a web -e staging --env-file .env.staging
        quant-env delete -o acme -a web -e staging OLD_KEY LEGACY_URL
    """
    configure_logging(verbose=verbose, quiet=quiet)

    if dotenv and not load_settings_file(dotenv):
        logger.warning(f"Settings file not found: {dotenv}")


@app.command()
def run() -> None:
    """Run as a GitHub Action step using the INPUT_* environment."""
    writer = OutputWriter()
    try:
        config = RunConfig.from_inputs(ActionInputs())
        logger.info("Quant Cloud Environment Variables Action")
        exit_code, _ = execute_operation(config, writer)
    except QuantEnvError as e:
        raise typer.Exit(ResultReporter(writer).fatal(e.message))

    if exit_code:
        raise typer.Exit(exit_code)


def _parse_var_options(values: Optional[List[str]]) -> Optional[Dict[str, str]]:
    """Split repeated ``--var KEY=VALUE`` options; values may hold commas."""
    if not values:
        return None

    overrides: Dict[str, str] = {}
    for item in values:
        key, separator, value = item.partition("=")
        key = key.strip()
        if not separator or not key:
            raise typer.BadParameter(
                "Expected KEY=VALUE with a non-empty KEY", param_hint="--var"
            )
        overrides[key] = value.strip()
    return overrides


def _run_local(**settings) -> None:
    """Build a config from CLI options, execute and display the result."""
    try:
        config = RunConfig(**settings)
        display_target(config)
        # Outputs reach GITHUB_OUTPUT only, never the terminal
        exit_code, report = execute_operation(config, OutputWriter(echo=False))
    except QuantEnvError as e:
        display_error(e)
        logger.debug(f"Command failed: {e.message}")
        raise typer.Exit(1)

    display_report(report)
    if exit_code:
        raise typer.Exit(exit_code)


@app.command("list")
def list_variables(
    api_key: str = API_KEY_OPTION,
    organization: str = ORGANIZATION_OPTION,
    app_name: str = APP_OPTION,
    environment: str = ENVIRONMENT_OPTION,
    base_url: str = BASE_URL_OPTION,
    timeout: float = TIMEOUT_OPTION,
) -> None:
    """List the variable names of an environment.

    The full name/value map is written to the ``variables`` output only.
    """
    _run_local(
        api_key=api_key,
        organization=organization,
        app_name=app_name,
        environment_name=environment,
        operation=Operation.LIST,
        base_url=base_url,
        timeout=timeout,
    )


@app.command("set")
def set_variables(
    api_key: str = API_KEY_OPTION,
    organization: str = ORGANIZATION_OPTION,
    app_name: str = APP_OPTION,
    environment: str = ENVIRONMENT_OPTION,
    env_file: Optional[str] = typer.Option(
        None, "--env-file", "-f", help="Dotenv file providing baseline values"
    ),
    json_vars: Optional[str] = typer.Option(
        None, "--json", help="JSON object of overrides"
    ),
    variables: Optional[List[str]] = typer.Option(
        None, "--var", help="KEY=VALUE override, may be repeated"
    ),
    replace: bool = typer.Option(
        False,
        "--replace",
        help="Replace ALL remote variables with the merged set (bulk API)",
    ),
    base_url: str = BASE_URL_OPTION,
    timeout: float = TIMEOUT_OPTION,
) -> None:
    """Set variables, merging env file, JSON and inline values in that order."""
    _run_local(
        api_key=api_key,
        organization=organization,
        app_name=app_name,
        environment_name=environment,
        operation=Operation.SET,
        replace=replace,
        env_file=env_file,
        json_vars=json_vars,
        overrides=_parse_var_options(variables),
        base_url=base_url,
        timeout=timeout,
    )


@app.command("clear")
def clear_variables(
    api_key: str = API_KEY_OPTION,
    organization: str = ORGANIZATION_OPTION,
    app_name: str = APP_OPTION,
    environment: str = ENVIRONMENT_OPTION,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    base_url: str = BASE_URL_OPTION,
    timeout: float = TIMEOUT_OPTION,
) -> None:
    """Delete every variable of an environment."""
    if not yes and not typer.confirm(
        f"Delete ALL variables of {organization}/{app_name}/{environment}?"
    ):
        console.print("⏹️  [yellow]Operation cancelled[/yellow]")
        return

    _run_local(
        api_key=api_key,
        organization=organization,
        app_name=app_name,
        environment_name=environment,
        operation=Operation.CLEAR,
        base_url=base_url,
        timeout=timeout,
    )


@app.command("delete")
def delete_variables(
    keys: List[str] = typer.Argument(..., help="Variable names to delete"),
    api_key: str = API_KEY_OPTION,
    organization: str = ORGANIZATION_OPTION,
    app_name: str = APP_OPTION,
    environment: str = ENVIRONMENT_OPTION,
    base_url: str = BASE_URL_OPTION,
    timeout: float = TIMEOUT_OPTION,
) -> None:
    """Delete the named variables; missing ones count as deleted."""
    _run_local(
        api_key=api_key,
        organization=organization,
        app_name=app_name,
        environment_name=environment,
        operation=Operation.DELETE,
        keys="\n".join(keys),
        base_url=base_url,
        timeout=timeout,
    )


def cli() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    cli()
