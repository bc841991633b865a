"""Test version import works correctly."""

from linkgnome import __version__


def test_version() -> None:
    """The package version is a non-empty string."""
    assert isinstance(__version__, str)
    assert len(__version__) > 0
