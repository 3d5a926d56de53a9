"""Environment helpers for running quant-env outside a CI runner.

Locally the connection settings usually live in a dotenv file rather than
in the shell. ``load_settings_file`` loads such a file into the process
environment so the CLI options can pick the values up through their
``QUANT_*`` environment fallbacks.
"""

from pathlib import Path

from dotenv import load_dotenv

from quant_env.logging import get_logger

logger = get_logger(__name__)


def load_settings_file(path: str, override: bool = False) -> bool:
    """Load a dotenv file of CLI settings into ``os.environ``.

    Args:
    ----
        path: Path to the dotenv file
        override: Replace variables already set in the environment

    Returns:
    -------
        True if the file existed and was loaded, False otherwise
    """
    env_file = Path(path)
    if not env_file.is_file():
        logger.debug(f"No settings file found at: {env_file}")
        return False

    loaded = load_dotenv(env_file, override=override)
    if loaded:
        logger.debug(f"Loaded settings from: {env_file}")
    return loaded

