"""Variable source parsing and merging."""

from quant_env.variables.dotenv import parse_env_text, read_env_file
from quant_env.variables.keys import parse_key_list
from quant_env.variables.merge import (
    merge_variables,
    parse_inline_variables,
    parse_json_variables,
    split_fragments,
)

__all__ = [
    "merge_variables",
    "parse_env_text",
    "parse_inline_variables",
    "parse_json_variables",
    "parse_key_list",
    "read_env_file",
    "split_fragments",
]
