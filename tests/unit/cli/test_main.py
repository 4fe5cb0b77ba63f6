"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import json
import logging
from unittest.mock import MagicMock, Mock, patch

import pytest
from typer.testing import CliRunner

from src.cli.main import VERSION, _configure_logging, app
from src.cli.models import ExitCode
from tests.fixtures import ROOT_ID, block_dict, create_sample_dump


runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("GEN_BOOKS_CONFIG", raising=False)
    monkeypatch.delenv("GEN_BOOKS_SOURCE_ROOT", raising=False)
    yield
    logging.getLogger("src").handlers.clear()


def write_project(root, dump=None):
    """Write books.yaml and a source tree dump into root."""
    (root / "cache").mkdir()
    (root / "cache" / "go.json").write_text(
        json.dumps(dump or create_sample_dump()), encoding="utf-8"
    )
    config_file = root / "books.yaml"
    config_file.write_text(
        "books:\n"
        "  - name: go\n"
        f"    start_page_id: {ROOT_ID}\n"
        "    source_tree: cache/go.json\n"
    )
    return config_file


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    def test_verbosity_0_sets_warning_level(self):
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(0)

            mock_logger.setLevel.assert_called_with(logging.WARNING)

    def test_verbosity_1_sets_info_level(self):
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(1)

            mock_logger.setLevel.assert_called_with(logging.INFO)

    def test_verbosity_2_sets_debug_level(self):
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(2)

            mock_logger.setLevel.assert_called_with(logging.DEBUG)

    def test_logdir_creates_log_file(self, tmp_path):
        logdir = tmp_path / "logs"

        _configure_logging(1, str(logdir))

        log_files = list(logdir.glob("gen-books_*.log"))
        assert len(log_files) == 1

    def test_repeated_calls_replace_handlers(self, tmp_path):
        _configure_logging(0)
        _configure_logging(2, str(tmp_path / "logs"))
        _configure_logging(1)

        handlers = logging.getLogger("src").handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].level == logging.INFO


class TestMainCommand:
    """Test cases for the gen-books command."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert VERSION in result.output

    @patch('src.cli.main.BuildCommand')
    def test_passes_options_to_build_command(self, mock_build_cmd):
        mock_instance = Mock()
        mock_instance.run.return_value = ExitCode.SUCCESS
        mock_build_cmd.return_value = mock_instance

        result = runner.invoke(app, [
            "--config", "my.yaml", "--book", "go", "--book", "rust",
            "--source-root", "/src", "--no-show-tree",
        ])

        assert result.exit_code == ExitCode.SUCCESS
        kwargs = mock_build_cmd.call_args.kwargs
        assert kwargs["config_path"] == "my.yaml"
        assert kwargs["source_root"] == "/src"
        mock_instance.run.assert_called_once_with(book_names=["go", "rust"], show_tree=False)

    @patch('src.cli.main.BuildCommand')
    def test_config_path_from_environment(self, mock_build_cmd, monkeypatch):
        monkeypatch.setenv("GEN_BOOKS_CONFIG", "env.yaml")
        mock_build_cmd.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, [])

        assert mock_build_cmd.call_args.kwargs["config_path"] == "env.yaml"

    @patch('src.cli.main.BuildCommand')
    def test_exit_code_from_build_command(self, mock_build_cmd):
        mock_build_cmd.return_value.run.return_value = ExitCode.CONTENT_ERROR

        result = runner.invoke(app, [])

        assert result.exit_code == ExitCode.CONTENT_ERROR

    def test_builds_book_end_to_end(self, tmp_path):
        config_file = write_project(tmp_path)

        result = runner.invoke(app, ["--config", str(config_file), "--no-color"])

        assert result.exit_code == ExitCode.SUCCESS
        assert "Essential Go" in result.output
        assert "Basic types" in result.output
        assert "Pages: 2" in result.output
        assert "Missing source files: 1" in result.output

    def test_unknown_directive_exits_with_content_error(self, tmp_path):
        dump = {"pages": [{"id": ROOT_ID, "root": block_dict(ROOT_ID, "page", title="Root", content=[
            block_dict("b1", "text", text="$bogus: x"),
        ])}]}
        config_file = write_project(tmp_path, dump)

        result = runner.invoke(app, ["--config", str(config_file), "--no-color"])

        assert result.exit_code == ExitCode.CONTENT_ERROR
        assert "bogus" in result.output

    def test_missing_config_exits_with_config_error(self, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "missing.yaml"), "--no-color"])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "not found" in result.output
