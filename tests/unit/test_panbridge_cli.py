#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the panbridge command-line interface."""
import io
import json
from unittest.mock import AsyncMock, patch

import pytest
from utils import DIALECT_EXTENSIONS, SAMPLE_DOCUMENT

from panbridge.cli import build_engine_options, create_parser, main
from panbridge.cli.exit_codes import EXIT_ENGINE_ERROR, EXIT_INPUT_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from panbridge.engine import PandocProcessEngine
from panbridge.exceptions import EngineError, EngineNotFoundError


@pytest.fixture(autouse=True)
def _isolated_cli(monkeypatch, restore_root_logger):
    """Keep the environment from leaking into CLI runs."""
    monkeypatch.delenv("PANBRIDGE_CONFIG", raising=False)
    monkeypatch.delenv("PANBRIDGE_PANDOC", raising=False)


def _fake_list_extensions():
    return AsyncMock(side_effect=lambda fmt: DIALECT_EXTENSIONS[fmt])


@pytest.fixture
def sample_json_file(tmp_path):
    """Write the sample document to a file."""
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(SAMPLE_DOCUMENT), encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestParser:
    """Test argument parsing."""

    def test_command_required(self):
        """Test that running without a command is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args([])
        assert exc_info.value.code == 2

    def test_log_level_case_insensitive(self):
        """Test that log level names are upper-cased."""
        parsed = create_parser().parse_args(["--log-level", "debug", "format-with", "gfm"])
        assert parsed.log_level == "DEBUG"

    def test_build_engine_options_priority(self, monkeypatch):
        """Test flags over environment over config file."""
        monkeypatch.setenv("PANBRIDGE_PANDOC", "env-pandoc")
        config = {"pandoc_path": "config-pandoc", "timeout": 3}

        parsed = create_parser().parse_args(["extensions", "gfm"])
        assert build_engine_options(parsed, config).pandoc_path == "env-pandoc"
        assert build_engine_options(parsed, config).timeout == 3.0

        parsed = create_parser().parse_args(["--pandoc", "flag-pandoc", "--timeout", "9", "extensions", "gfm"])
        options = build_engine_options(parsed, config)
        assert options.pandoc_path == "flag-pandoc"
        assert options.timeout == 9.0


@pytest.mark.unit
@pytest.mark.cli
class TestFormatCommands:
    """Test the format negotiation commands."""

    def test_format_with(self, capsys):
        """Test inserting toggles without an engine."""
        code = main(["--no-config", "format-with", "markdown+footnotes", "--prepend=+smart", "--append=-raw_html"])

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "markdown+smart+footnotes-raw_html"

    def test_resolve_json(self, capsys):
        """Test JSON output of a resolved format."""
        with patch.object(PandocProcessEngine, "list_extensions", new=_fake_list_extensions()):
            code = main(["--no-config", "resolve", "gfm-emoji+footnotes", "--json"])

        assert code == EXIT_SUCCESS
        record = json.loads(capsys.readouterr().out)
        assert record["baseName"] == "gfm"
        assert record["fullName"] == "gfm-emoji"
        assert record["extensions"]["emoji"] is False
        assert record["warnings"] == {"invalidFormat": "", "invalidOptions": ["footnotes"]}

    def test_resolve_plain(self, capsys):
        """Test plain output with warnings on stderr."""
        with patch.object(PandocProcessEngine, "list_extensions", new=_fake_list_extensions()):
            code = main(["--no-config", "resolve", "docbook"])

        captured = capsys.readouterr()
        assert code == EXIT_SUCCESS
        assert "Format: markdown" in captured.out
        assert "Enabled extensions (7)" in captured.out
        assert "docbook" in captured.err

    def test_resolve_rich(self, capsys):
        """Test that rich output renders the extension table."""
        with patch.object(PandocProcessEngine, "list_extensions", new=_fake_list_extensions()):
            code = main(["--no-config", "resolve", "markdown_strict", "--rich"])

        assert code == EXIT_SUCCESS
        output = capsys.readouterr().out
        assert "markdown_strict" in output
        assert "raw_html" in output

    def test_extensions(self, capsys):
        """Test printing a dialect's extension list."""
        with patch.object(PandocProcessEngine, "list_extensions", new=_fake_list_extensions()):
            code = main(["--no-config", "extensions", "commonmark"])

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out == DIALECT_EXTENSIONS["commonmark"]

    def test_engine_failure(self, capsys):
        """Test that an engine failure maps to its exit code."""
        failing = AsyncMock(side_effect=EngineError("pandoc crashed", operation="list_extensions"))
        with patch.object(PandocProcessEngine, "list_extensions", new=failing):
            code = main(["--no-config", "resolve", "markdown"])

        assert code == EXIT_ENGINE_ERROR
        assert "pandoc crashed" in capsys.readouterr().err

    def test_missing_pandoc(self, capsys):
        """Test the message when pandoc is not installed."""
        missing = AsyncMock(side_effect=EngineNotFoundError("no-such-pandoc", operation="list_extensions"))
        with patch.object(PandocProcessEngine, "list_extensions", new=missing):
            code = main(["--no-config", "--pandoc", "no-such-pandoc", "extensions", "gfm"])

        assert code == EXIT_ENGINE_ERROR
        assert "no-such-pandoc" in capsys.readouterr().err

    def test_invalid_timeout(self, capsys):
        """Test that a non-positive timeout is a validation error."""
        code = main(["--no-config", "--timeout", "0", "format-with", "gfm"])

        assert code == EXIT_VALIDATION_ERROR
        assert "timeout" in capsys.readouterr().err


@pytest.mark.unit
@pytest.mark.cli
class TestTokenCommands:
    """Test the AST inspection commands."""

    def test_text(self, capsys, sample_json_file):
        """Test printing block text."""
        code = main(["--no-config", "text", str(sample_json_file)])

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out.splitlines() == ["Intro", "Hello bold link."]

    def test_title(self, capsys, sample_json_file):
        """Test printing the document title."""
        code = main(["--no-config", "title", str(sample_json_file)])

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "My Great Doc"

    def test_title_from_stdin(self, capsys, monkeypatch):
        """Test reading the document from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(SAMPLE_DOCUMENT)))
        code = main(["--no-config", "title", "-"])

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "My Great Doc"

    def test_malformed_input(self, capsys, tmp_path):
        """Test that a file that is not a pandoc document is an input error."""
        path = tmp_path / "bad.json"
        path.write_text('{"blocks": 3}', encoding="utf-8")

        assert main(["--no-config", "text", str(path)]) == EXIT_INPUT_ERROR
        assert "blocks" in capsys.readouterr().err

    def test_non_utf8_input(self, capsys, tmp_path):
        """Test that a file in another encoding is an input error."""
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"blocks": [], "meta": {"title": "caf\xe9"}}')

        assert main(["--no-config", "text", str(path)]) == EXIT_INPUT_ERROR
        assert "UTF-8" in capsys.readouterr().err

    def test_invalid_api_version(self, capsys, tmp_path):
        """Test that a scalar pandoc-api-version is an input error."""
        path = tmp_path / "doc.json"
        path.write_text('{"blocks": [], "pandoc-api-version": 5}', encoding="utf-8")

        assert main(["--no-config", "text", str(path)]) == EXIT_INPUT_ERROR
        assert "pandoc-api-version" in capsys.readouterr().err

    def test_missing_input(self, capsys, tmp_path):
        """Test that an unreadable file is an input error."""
        assert main(["--no-config", "text", str(tmp_path / "missing.json")]) == EXIT_INPUT_ERROR
        assert "cannot read input" in capsys.readouterr().err


@pytest.mark.unit
@pytest.mark.cli
class TestConfigHandling:
    """Test configuration loading through main."""

    def test_bad_config_file(self, capsys, tmp_path):
        """Test that an unusable config file is a validation error."""
        path = tmp_path / "settings.ini"
        path.write_text("x", encoding="utf-8")

        assert main(["--config", str(path), "format-with", "gfm"]) == EXIT_VALIDATION_ERROR
        assert "Unsupported config file format" in capsys.readouterr().err

    def test_config_file_used(self, tmp_path):
        """Test that config values reach the engine."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"pandoc_path": "pandoc-from-config", "timeout": 4}), encoding="utf-8")
        seen = {}

        async def record(self, format):
            seen["options"] = self.options
            return DIALECT_EXTENSIONS[format]

        with patch.object(PandocProcessEngine, "list_extensions", new=record):
            assert main(["--config", str(path), "resolve", "markdown", "--json"]) == EXIT_SUCCESS

        assert seen["options"].pandoc_path == "pandoc-from-config"
        assert seen["options"].timeout == 4.0

    def test_config_env_var(self, tmp_path, monkeypatch):
        """Test the PANBRIDGE_CONFIG environment variable."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"timeout": -1}), encoding="utf-8")
        monkeypatch.setenv("PANBRIDGE_CONFIG", str(path))

        assert main(["format-with", "gfm"]) == EXIT_VALIDATION_ERROR
