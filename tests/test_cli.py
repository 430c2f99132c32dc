"""
Unit tests for the CLI module (npc_relay/cli.py).

Tests cover:
- Command parsing and help output
- run delegates to start_server with CLI overrides
- sweep removes expired audio from the configured directory
- config prints the summary
"""

import argparse
import os
import time
from unittest.mock import patch

import pytest

from npc_relay import cli
from npc_relay.config import use_test_audio_dir

# ============================================================================
# PARSING TESTS
# ============================================================================


@pytest.mark.unit
def test_main_without_command_prints_help(capsys):
    with patch("sys.argv", ["npc-relay"]):
        assert cli.main() == 0

    assert "npc-relay" in capsys.readouterr().out


@pytest.mark.unit
def test_main_dispatches_run_with_arguments():
    with patch("sys.argv", ["npc-relay", "run", "--port", "4001", "--host", "127.0.0.1"]):
        with patch("npc_relay.cli.configure_logging"):
            with patch("npc_relay.api.server.start_server") as mock_start:
                assert cli.main() == 0

    mock_start.assert_called_once_with(host="127.0.0.1", port=4001)


# ============================================================================
# RUN COMMAND TESTS
# ============================================================================


@pytest.mark.unit
def test_cmd_run_defaults_to_config_values():
    with patch("npc_relay.api.server.start_server") as mock_start:
        assert cli.cmd_run(argparse.Namespace(host=None, port=None)) == 0

    mock_start.assert_called_once_with(host=None, port=None)


@pytest.mark.unit
def test_cmd_run_keyboard_interrupt_is_clean_exit(capsys):
    with patch("npc_relay.api.server.start_server", side_effect=KeyboardInterrupt):
        assert cli.cmd_run(argparse.Namespace(host=None, port=None)) == 0

    assert "Relay stopped." in capsys.readouterr().out


@pytest.mark.unit
def test_cmd_run_startup_error_returns_one(capsys):
    with patch("npc_relay.api.server.start_server", side_effect=OSError("address in use")):
        assert cli.cmd_run(argparse.Namespace(host=None, port=None)) == 1

    assert "address in use" in capsys.readouterr().err


# ============================================================================
# SWEEP AND CONFIG COMMAND TESTS
# ============================================================================


@pytest.mark.unit
def test_cmd_sweep_removes_only_expired_files(tmp_path, capsys):
    audio_dir = tmp_path / "audio"
    audio_dir.mkdir()
    old = audio_dir / "old.mp3"
    fresh = audio_dir / "fresh.mp3"
    old.write_bytes(b"x")
    fresh.write_bytes(b"x")
    stale = time.time() - 3600
    os.utime(old, (stale, stale))

    with use_test_audio_dir(audio_dir):
        assert cli.cmd_sweep(argparse.Namespace()) == 0

    assert not old.exists()
    assert fresh.exists()
    assert "Removed 1 expired file(s)" in capsys.readouterr().out


@pytest.mark.unit
def test_cmd_config_prints_summary(capsys):
    assert cli.cmd_config(argparse.Namespace()) == 0

    assert "NPC RELAY CONFIGURATION" in capsys.readouterr().out
