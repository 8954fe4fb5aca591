"""Test version information."""

import devinit_client


def test_version() -> None:
    """Test that version is accessible."""
    assert hasattr(devinit_client, "__version__")
    assert isinstance(devinit_client.__version__, str)
    assert devinit_client.__version__ == "0.1.0"
