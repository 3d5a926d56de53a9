"""Parse the key list for the delete operation."""

from typing import List

from quant_env.exceptions import ValidationError
from quant_env.variables.merge import split_fragments


def parse_key_list(raw: str) -> List[str]:
    """Split a newline/comma separated list of variable names.

    Order and duplicates are preserved; each key is deleted independently.

    Raises:
        ValidationError: If no key remains after trimming
    """
    keys = split_fragments(raw or "")
    if not keys:
        raise ValidationError(
            "No keys provided for delete operation",
            ["Example: keys: 'OLD_API_KEY,LEGACY_URL'"],
        )
    return keys
