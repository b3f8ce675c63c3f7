"""Integration tests for the command-line entry point."""

import sys
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx

from steamcmd_script import cli

OWNED_GAMES_URL = "https://api.steampowered.com/IPlayerService/GetOwnedGames/v1/"


@pytest.fixture(autouse=True)
def keep_test_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the session logging setup instead of binding to a per-test stderr."""
    monkeypatch.setattr(cli, "setup_logging", lambda config=None: None)


@pytest.fixture
def no_args(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI the way it is meant to be run: without arguments."""
    monkeypatch.setattr(sys, "argv", ["steamcmd-script"])


class TestMain:
    """Tests for cli.main()."""

    @respx.mock
    def test_missing_configuration(
        self,
        no_args: None,
        set_env: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that missing variables exit 1 before any request."""
        set_env(base=False)

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "The STEAM_API_KEY environment variable should contain your Steam API key." in (
            captured.err
        )
        assert "The STEAM_PROFILE_ID environment variable is required." in captured.err
        assert captured.out == ""
        assert respx.calls.call_count == 0

    @respx.mock
    def test_empty_api_key(
        self,
        no_args: None,
        set_env: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that an empty key counts as missing and nothing is requested."""
        set_env({"STEAM_API_KEY": "", "STEAM_PROFILE_ID": "765"}, base=False)

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 1
        assert "The STEAM_API_KEY environment variable should contain your Steam API key." in (
            capsys.readouterr().err
        )
        assert respx.calls.call_count == 0

    @respx.mock
    def test_missing_profile_only(
        self,
        no_args: None,
        set_env: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test guidance when only the profile ID is missing."""
        set_env({"STEAM_API_KEY": "key"}, base=False)

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "STEAM_PROFILE_ID" in err
        assert "STEAM_API_KEY" not in err

    @respx.mock
    def test_writes_script_to_stdout(
        self,
        no_args: None,
        mock_env: None,
        owned_games_response: dict[str, Any],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a successful run writing to standard output."""
        respx.get(OWNED_GAMES_URL).mock(return_value=httpx.Response(200, json=owned_games_response))

        cli.main()

        out = capsys.readouterr().out
        assert out.startswith("// Half-Life - https://store.steampowered.com/app/70\napp_update 70\n")
        assert out.count("app_update") == 4
        assert sys.stdout.closed is False

    @respx.mock
    def test_writes_script_to_file(
        self,
        no_args: None,
        set_env: Any,
        tmp_path: Path,
        owned_games_response: dict[str, Any],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a successful run writing to OUTPUT_FILE."""
        target = tmp_path / "update_games.txt"
        set_env({"OUTPUT_FILE": str(target), "SKIP_GAMES": "70"})
        respx.get(OWNED_GAMES_URL).mock(return_value=httpx.Response(200, json=owned_games_response))

        cli.main()

        assert capsys.readouterr().out == ""
        content = target.read_text(encoding="utf-8")
        assert "app_update 70\n" not in content
        assert content.count("app_update") == 3

    @respx.mock
    def test_owned_games_failure(
        self,
        no_args: None,
        mock_env: None,
    ) -> None:
        """Test that an owned games failure exits 1."""
        respx.get(OWNED_GAMES_URL).mock(return_value=httpx.Response(403))

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 1

    def test_help(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the usage text."""
        monkeypatch.setattr(sys, "argv", ["steamcmd-script", "--help"])

        cli.main()

        assert "STEAM_PROFILE_ID" in capsys.readouterr().out

    def test_unknown_argument(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that arguments are rejected."""
        monkeypatch.setattr(sys, "argv", ["steamcmd-script", "ingest"])

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 1

    @respx.mock
    def test_unopenable_output_file(
        self,
        no_args: None,
        set_env: Any,
        tmp_path: Path,
    ) -> None:
        """Test that an output file that cannot be opened exits 1 before any request."""
        set_env({"OUTPUT_FILE": str(tmp_path / "missing_dir" / "update_games.txt")})

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 1
        assert respx.calls.call_count == 0
