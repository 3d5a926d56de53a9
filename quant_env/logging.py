import logging
import os
import sys
from typing import Optional

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Workflow commands understood by the GitHub Actions runner
ANNOTATION_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def running_in_actions() -> bool:
    """Return True when executing inside a GitHub Actions job."""
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


class ActionsFormatter(logging.Formatter):
    """Render records as GitHub Actions log lines.

    INFO records are printed as-is; warnings and errors become
    ``::warning::`` / ``::error::`` annotations so they surface in the
    job summary.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = ANNOTATION_COMMANDS.get(record.levelno)
        if command is None:
            return message
        # Annotation payloads must stay on one line
        escaped = (
            message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        )
        return f"::{command}::{escaped}"


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the specified name.

    Args:
        name: The name for the logger, typically __name__

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def _build_formatter(actions: bool) -> logging.Formatter:
    if actions:
        return ActionsFormatter("%(message)s")
    return logging.Formatter(DEFAULT_FORMAT)


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    actions: Optional[bool] = None,
) -> None:
    """Configure logging settings based on command line flags.

    Args:
        verbose: Whether to enable verbose mode (shows all debug logs)
        quiet: Whether to enable quiet mode (only shows warnings and errors)
        actions: Force GitHub Actions annotation output on or off. Detected
            from the environment when omitted.
    """
    if quiet:
        root_level = logging.WARNING
    elif verbose:
        root_level = logging.DEBUG
    else:
        root_level = DEFAULT_LOG_LEVEL

    if actions is None:
        actions = running_in_actions()

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Clear existing handlers to avoid duplicate logs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(actions))
    root_logger.addHandler(handler)

    suppress_third_party_loggers()


def suppress_third_party_loggers():
    """Suppress noisy third-party loggers."""
    noisy_loggers = [
        "urllib3",
        "requests",
    ]

    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

