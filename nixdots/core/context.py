"""
Process context — which settings file the current invocation is using.

Set ONCE at startup by the CLI group callback (or by tests) so that
sub-command groups registered from ``nixdots.ui.cli`` resolve the same
file without threading it through every call.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


_config_path: Optional[Path] = None


def set_config_path(path: Optional[Path]) -> None:
    """Register the settings file for the current process (None = defaults)."""
    global _config_path
    _config_path = path


def get_config_path() -> Optional[Path]:
    """Return the registered settings file, or None when running on defaults."""
    return _config_path
