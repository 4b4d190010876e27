"""
Settings model — personalisation values that flow into every template.

Loaded from nixdots.yml when one exists; every field has a default so a
bare ``nixdots setup`` produces the stock configuration.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

HOME_MANAGER_CHANNEL_URL = (
    "https://github.com/nix-community/home-manager/archive/master.tar.gz"
)
PLACEHOLDER_EMAIL = "your-email@example.com"

_HOSTNAME_RE = re.compile(r"^[A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")


def default_dotfiles_dir(username: str) -> str:
    """/home/<username>/<username>Nix, independent of who runs nixdots."""
    return f"/home/{username}/{username}Nix"


class Settings(BaseModel):
    """Who the configuration is for and where it lives."""

    username: str = Field(default="wlmr", min_length=1)
    description: str = ""
    hostname: str = "wlmr-machine"
    git_email: str = PLACEHOLDER_EMAIL

    dotfiles_dir: str = ""
    system_config_dir: str = "/etc/nixos"

    system_state_version: str = "25.11"
    home_state_version: str = "25.05"

    channel_name: str = "home-manager"
    channel_url: str = HOME_MANAGER_CHANNEL_URL

    @model_validator(mode="after")
    def _fill_derived(self) -> Settings:
        if not self.description:
            self.description = self.username
        if not self.dotfiles_dir:
            self.dotfiles_dir = default_dotfiles_dir(self.username)
        # Always absolute; read back from other working directories
        self.dotfiles_dir = str(Path(self.dotfiles_dir).expanduser().resolve())
        return self

    @property
    def dotfiles_path(self) -> Path:
        """Absolute dotfiles directory."""
        return Path(self.dotfiles_dir)

    @property
    def system_path(self) -> Path:
        return Path(self.system_config_dir)

    @property
    def modules_path(self) -> Path:
        return self.dotfiles_path / "modules"

    @property
    def hostname_valid(self) -> bool:
        return bool(_HOSTNAME_RE.match(self.hostname))

    def channel_hint(self) -> str:
        """The shell one-liner that installs the home-manager channel."""
        return (
            f"sudo nix-channel --add {self.channel_url} {self.channel_name}"
            " && sudo nix-channel --update"
        )
