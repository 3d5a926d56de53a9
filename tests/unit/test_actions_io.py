"""Tests for GitHub Actions input/output plumbing."""

import io

import pytest

from quant_env.actions import ActionInputs, OutputWriter, add_mask
from quant_env.exceptions import MissingInputError


class TestActionInputs:
    """Test reading INPUT_* variables."""

    def test_value_is_trimmed(self):
        """Test surrounding whitespace is removed."""
        reader = ActionInputs({"INPUT_APP_NAME": "  web \n"})
        assert reader.get("app_name") == "web"

    def test_missing_optional_is_empty(self):
        """Test unset optional inputs read as empty strings."""
        assert ActionInputs({}).get("env_file") == ""

    def test_missing_required_raises(self):
        """Test unset required inputs raise."""
        with pytest.raises(MissingInputError):
            ActionInputs({"INPUT_API_KEY": "   "}).get("api_key", required=True)

    def test_spaces_in_names(self):
        """Test spaces map to underscores like the runner does."""
        reader = ActionInputs({"INPUT_BASE_URL": "https://x.test"})
        assert reader.get("base url") == "https://x.test"

    def test_reads_process_environment(self, monkeypatch):
        """Test the default reader uses os.environ."""
        monkeypatch.setenv("INPUT_OPERATION", "clear")
        assert ActionInputs().get("operation") == "clear"


class TestOutputWriter:
    """Test writing step outputs."""

    def test_writes_github_output_file(self, output_file, read_outputs):
        """Test outputs are appended to GITHUB_OUTPUT with delimiters."""
        writer = OutputWriter()
        writer.set_output("count", 2)
        writer.set_output("variables", '{\n  "A": "1"\n}')

        outputs = read_outputs(output_file)
        assert outputs == {"count": "2", "variables": '{\n  "A": "1"\n}'}

    def test_stdout_fallback_single_line(self):
        """Test single-line outputs print as name=value without a file."""
        stream = io.StringIO()
        writer = OutputWriter(stream=stream)

        writer.set_output("deleted_count", "all")

        assert stream.getvalue() == "deleted_count=all\n"
        assert writer.values == {"deleted_count": "all"}

    def test_no_echo_without_output_file(self):
        """Test echo=False records values but prints nothing."""
        stream = io.StringIO()
        writer = OutputWriter(stream=stream, echo=False)

        writer.set_output("variables", '{"TOKEN": "s3cr3t"}')

        assert stream.getvalue() == ""
        assert writer.values == {"variables": '{"TOKEN": "s3cr3t"}'}

    def test_no_echo_still_writes_output_file(self, output_file, read_outputs):
        """Test echo=False does not affect GITHUB_OUTPUT."""
        stream = io.StringIO()
        writer = OutputWriter(stream=stream, echo=False)

        writer.set_output("count", 3)

        assert read_outputs(output_file) == {"count": "3"}
        assert stream.getvalue() == ""

    def test_stdout_fallback_multiline(self):
        """Test multi-line outputs use the delimiter form on stdout."""
        stream = io.StringIO()
        writer = OutputWriter(stream=stream)

        writer.set_output("variables", "{\n}")

        lines = stream.getvalue().splitlines()
        name, delimiter = lines[0].split("<<")
        assert name == "variables"
        assert lines[1:] == ["{", "}", delimiter]


class TestAddMask:
    """Test secret masking."""

    def test_add_mask(self):
        """Test the workflow command is emitted."""
        stream = io.StringIO()
        add_mask("token", stream)
        assert stream.getvalue() == "::add-mask::token\n"

    def test_empty_value_not_masked(self):
        """Test empty secrets emit nothing."""
        stream = io.StringIO()
        add_mask("", stream)
        assert stream.getvalue() == ""
