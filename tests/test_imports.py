"""Tests for package imports and version."""

from __future__ import annotations


def test_import_package():
    """Test package can be imported."""
    import hpl_scoreboard

    assert hasattr(hpl_scoreboard, "__version__")


def test_version():
    """Test version string format."""
    from hpl_scoreboard import __version__

    assert isinstance(__version__, str)
    parts = __version__.split(".")
    assert len(parts) >= 3, "Version should be at least X.Y.Z"


def test_import_cli():
    """Test CLI module can be imported."""
    from hpl_scoreboard.cli import main

    assert callable(main)


def test_public_api():
    """Test top-level exports."""
    import hpl_scoreboard

    for name in hpl_scoreboard.__all__:
        assert hasattr(hpl_scoreboard, name), name
