"""Tests for the envmap command-line interface.

``main()`` returns an exit status and prints to stdout/stderr, so it
can be driven directly with an argument list.  Most tests pass
``--no-environ`` to keep the real process environment out of the
output.
"""

import json
from pathlib import Path

import pytest

from envmap.cli import build_parser, format_env, main
from envmap.mapping import EnvMap

USAGE_ERROR = 2


class TestFormatEnv:
    """Verify rendering a map."""

    def test_dotenv_sorted(self) -> None:
        """Pairs are rendered one per line, sorted by key."""
        assert format_env(EnvMap({"B": "2", "A": "1"})) == "A=1\nB=2"

    def test_dotenv_quotes_when_needed(self) -> None:
        """Values that would not survive a re-parse are quoted."""
        assert format_env(EnvMap({"A": " padded "})) == 'A=" padded "'

    def test_json(self) -> None:
        """JSON output is an object."""
        text = format_env(EnvMap({"A": "1"}), "json")
        assert json.loads(text) == {"A": "1"}

    def test_empty(self) -> None:
        """An empty map renders as nothing."""
        assert format_env(EnvMap()) == ""


class TestParser:
    """Verify the argparse configuration."""

    def test_defaults(self) -> None:
        """No options means environment on, dotenv output."""
        options = build_parser().parse_args([])
        assert options.file == []
        assert options.no_environ is False
        assert options.format == "dotenv"
        assert options.get is None

    def test_repeatable_file(self) -> None:
        """-f can be given several times."""
        options = build_parser().parse_args(["-f", "a.env", "--file", "b.env"])
        assert options.file == ["a.env", "b.env"]


class TestMain:
    """Verify end-to-end runs."""

    def test_flags_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Flag pairs in every spelling end up in the output."""
        status = main(["--no-environ", "-e", "B=2", "-e=A=1", "--e", "C=3"])
        assert status == 0
        assert capsys.readouterr().out == "A=1\nB=2\nC=3\n"

    def test_flags_override_files(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Later sources win."""
        path = tmp_path / "app.env"
        path.write_text("# app settings\nMODE=file\nNAME='my app'\n", encoding="utf-8")
        status = main(["--no-environ", "-f", str(path), "-e", "MODE=cli"])
        assert status == 0
        assert capsys.readouterr().out == "MODE=cli\nNAME=my app\n"

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--format json prints an object."""
        main(["--no-environ", "--format", "json", "-e", "A=1"])
        assert json.loads(capsys.readouterr().out) == {"A": "1"}

    def test_environment_included(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Without --no-environ the process environment is the base layer."""
        monkeypatch.setenv("ENVMAP_CLI_VAR", "from-env")
        assert main(["--get", "ENVMAP_CLI_VAR"]) == 0
        assert capsys.readouterr().out == "from-env\n"

    def test_get_prefers_flags(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """--get sees the merged result."""
        monkeypatch.setenv("ENVMAP_CLI_VAR", "from-env")
        assert main(["--get", "ENVMAP_CLI_VAR", "-e", "ENVMAP_CLI_VAR=from-cli"]) == 0
        assert capsys.readouterr().out == "from-cli\n"

    def test_get_missing(self, capsys: pytest.CaptureFixture[str]) -> None:
        """An unknown key exits with status 1."""
        assert main(["--no-environ", "--get", "NOPE"]) == 1
        assert "NOPE is not set" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A missing file is reported and exits with status 1."""
        status = main(["--no-environ", "-f", str(tmp_path / "missing.env")])
        captured = capsys.readouterr()
        assert status == 1
        assert captured.out == ""
        assert captured.err.startswith("Error: Cannot open")

    def test_missing_ok(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """--missing-ok skips the file with a warning on stderr."""
        missing = tmp_path / "missing.env"
        status = main(["--no-environ", "--missing-ok", "-f", str(missing), "-e", "A=1"])
        captured = capsys.readouterr()
        assert status == 0
        assert captured.out == "A=1\n"
        assert "[WARNING]" in captured.err

    def test_verbose_prints_log(self, capsys: pytest.CaptureFixture[str]) -> None:
        """-v prints the whole parse log to stderr."""
        main(["--no-environ", "-v", "-e", "A=1"])
        assert "[INFO] flags: stored 1 pairs" in capsys.readouterr().err

    def test_unparsable_flag_is_a_usage_error(self) -> None:
        """A flagged token that is not a pair reaches argparse and fails."""
        with pytest.raises(SystemExit) as excinfo:
            main(["--no-environ", "-e=oops"])
        assert excinfo.value.code == USAGE_ERROR
