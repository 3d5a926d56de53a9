"""Parser for dotenv-style variable files.

The dialect is deliberately small: ``KEY=VALUE`` per line, ``#`` comments,
blank lines, and one optional pair of outer quotes around the value. There
is no escape processing, interpolation or ``export`` prefix.
"""

from typing import Dict

from quant_env.exceptions import EnvFileReadError
from quant_env.logging import get_logger

logger = get_logger(__name__)

QUOTE_CHARS = ('"', "'")


def _strip_quotes(value: str) -> str:
    """Remove one matching pair of outer quotes, if present."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTE_CHARS:
        return value[1:-1]
    return value


def parse_env_text(content: str) -> Dict[str, str]:
    """Parse dotenv text into a name to value mapping.

    Args:
        content: Raw file contents

    Returns:
        Mapping of variable names to values. Later duplicates win.
    """
    result: Dict[str, str] = {}

    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if "=" not in stripped:
            continue

        key, value = stripped.split("=", 1)
        key = key.strip()
        if not key:
            continue

        result[key] = _strip_quotes(value.strip())

    return result


def read_env_file(path: str) -> Dict[str, str]:
    """Read and parse a dotenv file.

    Args:
        path: Path to the file

    Returns:
        Parsed variables

    Raises:
        EnvFileReadError: If the file cannot be opened or decoded
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileReadError(path, str(e)) from e

    variables = parse_env_text(content)
    logger.debug(f"Parsed {len(variables)} variable(s) from {path}")
    return variables
