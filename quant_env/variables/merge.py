"""Merge variable sources into one desired-state mapping.

Three sources are supported and always applied in the same order, each one
overriding keys set by the previous:

1. ``env_file``  - a dotenv file, the baseline
2. ``json_vars`` - a JSON object, structured overrides
3. ``variables`` - inline ``KEY=VALUE`` pairs, final per-run overrides
"""

import json
import re
from functools import reduce
from typing import Any, Callable, Dict, List, Optional, Tuple

from quant_env.exceptions import JsonVariablesError
from quant_env.logging import get_logger
from quant_env.variables.dotenv import read_env_file

logger = get_logger(__name__)

# Inline lists and key lists accept newlines and commas interchangeably
FRAGMENT_SEPARATOR = re.compile(r"[\n,]")


def split_fragments(raw: str) -> List[str]:
    """Split a newline/comma separated string into trimmed, non-empty parts."""
    fragments = (fragment.strip() for fragment in FRAGMENT_SEPARATOR.split(raw))
    return [fragment for fragment in fragments if fragment]


def _coerce_json_value(key: str, value: Any, raw: str) -> str:
    """Convert a decoded JSON value to the string stored remotely."""
    if value is None:
        raise JsonVariablesError(raw, f"value for '{key}' is null")
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    # Arrays and nested objects are stored as compact JSON text
    return json.dumps(value, separators=(",", ":"))


def parse_json_variables(raw: str) -> Dict[str, str]:
    """Parse a JSON object string into variables.

    Args:
        raw: JSON text, e.g. ``{"API_URL": "https://example.com"}``

    Returns:
        Mapping with every value converted to a string

    Raises:
        JsonVariablesError: If the text is not valid JSON, the top level is
            not an object, or a value is null
    """
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise JsonVariablesError(raw, str(e)) from e

    if not isinstance(parsed, dict):
        raise JsonVariablesError(
            raw, f"expected a JSON object, got {type(parsed).__name__}"
        )

    result: Dict[str, str] = {}
    for key, value in parsed.items():
        if not key.strip():
            logger.debug("Skipping JSON entry with an empty name")
            continue
        result[key] = _coerce_json_value(key, value, raw)
    return result


def parse_inline_variables(raw: str) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` pairs separated by newlines or commas.

    Only the first ``=`` splits key from value. Fragments without ``=`` or
    with an empty key are skipped.
    """
    result: Dict[str, str] = {}
    for fragment in split_fragments(raw):
        if "=" not in fragment:
            logger.debug("Skipping inline fragment without '='")
            continue
        key, value = fragment.split("=", 1)
        key = key.strip()
        if not key:
            continue
        result[key] = value.strip()
    return result


def _merge(base: Dict[str, str], override: Dict[str, str]) -> Dict[str, str]:
    return {**base, **override}


def merge_variables(
    env_file: Optional[str] = None,
    json_vars: Optional[str] = None,
    variables: Optional[str] = None,
    overrides: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Build the desired-state mapping from the configured sources.

    Sources that are empty or omitted are skipped. With no sources the
    result is an empty mapping.

    Args:
        env_file: Path to a dotenv file
        json_vars: JSON object text
        variables: Inline ``KEY=VALUE`` list
        overrides: Already split pairs, applied last

    Returns:
        Merged variables, File <- JSON <- inline <- overrides

    Raises:
        EnvFileReadError: If env_file cannot be read
        JsonVariablesError: If json_vars is malformed
    """
    steps: List[Tuple[str, Any, Callable[[Any], Dict[str, str]]]] = [
        (f"Loading variables from .env file: {env_file}", env_file, read_env_file),
        ("Loading variables from JSON", json_vars, parse_json_variables),
        ("Loading individual variables", variables, parse_inline_variables),
        ("Loading command line variables", overrides, dict),
    ]

    parsed: List[Dict[str, str]] = []
    for message, raw, parse in steps:
        if not raw:
            continue
        logger.info(message)
        source_vars = parse(raw)
        logger.debug(f"Source provided {len(source_vars)} variable(s)")
        parsed.append(source_vars)

    return reduce(_merge, parsed, {})
