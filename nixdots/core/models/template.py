"""
Generated file model — used by all generators.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file produced by one of the template generators.

    Attributes:
        path:       Relative path from the dotfiles directory.
        content:    Full file content.
        executable: Whether the file gets mode 0755.
        reason:     Why this file was generated.
    """

    path: str
    content: str
    executable: bool = False
    reason: str = ""
