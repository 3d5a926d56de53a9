"""GitHub Actions input/output plumbing.

Inputs arrive as ``INPUT_<NAME>`` environment variables. Outputs are
appended to the file named by ``GITHUB_OUTPUT``; outside a runner they are
printed to stdout in the same format unless the writer is built with
``echo=False``.
"""

import os
import sys
import uuid
from typing import IO, Mapping, Optional

from quant_env.exceptions import MissingInputError
from quant_env.logging import get_logger

logger = get_logger(__name__)


def _input_env_name(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


class ActionInputs:
    """Read step inputs the way the Actions runner exposes them."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def get(self, name: str, required: bool = False) -> str:
        """Return the trimmed input value, or "" when not set.

        Raises:
            MissingInputError: If ``required`` and the input is empty
        """
        value = self._environ.get(_input_env_name(name), "").strip()
        if required and not value:
            raise MissingInputError(name)
        return value


def add_mask(value: str, stream: Optional[IO[str]] = None) -> None:
    """Ask the runner to redact ``value`` from all subsequent log output."""
    if not value:
        return
    stream = stream or sys.stdout
    stream.write(f"::add-mask::{value}\n")
    stream.flush()


class OutputWriter:
    """Write named step outputs."""

    def __init__(
        self,
        output_path: Optional[str] = None,
        stream: Optional[IO[str]] = None,
        echo: bool = True,
    ):
        if output_path is None:
            output_path = os.environ.get("GITHUB_OUTPUT") or None
        self.output_path = output_path
        self.stream = stream or sys.stdout
        # Print outputs to the stream when there is no GITHUB_OUTPUT file
        self.echo = echo
        self.values = {}

    @staticmethod
    def _format(name: str, value: str) -> str:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        # The delimiter must not occur in the value itself
        while delimiter in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
        return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"

    def set_output(self, name: str, value) -> None:
        """Record an output value; non-strings are converted with ``str``."""
        text = value if isinstance(value, str) else str(value)
        self.values[name] = text

        if self.output_path:
            with open(self.output_path, "a", encoding="utf-8") as f:
                f.write(self._format(name, text))
            logger.debug(f"Wrote output '{name}' to {self.output_path}")
            return

        if not self.echo:
            return
        if "\n" in text:
            self.stream.write(self._format(name, text))
        else:
            self.stream.write(f"{name}={text}\n")
        self.stream.flush()
