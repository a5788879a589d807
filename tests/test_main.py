"""
Tests for the command-line entry point.
"""

from motd_server import __version__
from motd_server.__main__ import main


def test_version_flag(capsys):
    """--version prints the version and exits successfully."""
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == f"motd-server version {__version__}"


def test_bad_configuration_exits_nonzero(monkeypatch, tmp_path):
    """Invalid configuration is reported and exits with status 1."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MOTD_CACHE_MAX_FILES", "lots")

    assert main([]) == 1
