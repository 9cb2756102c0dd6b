# Host environment facts used for config path resolution
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class HostEnvironment:
    """Snapshot of the facts that decide where client configs live.

    ABOUTME: Passed explicitly so path resolution never reads process globals
    ABOUTME: platform uses sys.platform values (darwin, win32, linux)
    """

    platform: str
    home: Path
    cwd: Path
    environ: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def current(cls) -> "HostEnvironment":
        """Capture the running process's platform, home, cwd and environment."""
        return cls(
            platform=sys.platform,
            home=Path.home(),
            cwd=Path.cwd(),
            environ=dict(os.environ),
        )

    def display_path(self, path: Path) -> str:
        """Render path with the home directory shown as ~.

        Examples:
            >>> env = HostEnvironment("linux", Path("/home/u"), Path("/work"))
            >>> env.display_path(Path("/home/u/.codex/config.toml"))
            '~/.codex/config.toml'
        """
        try:
            relative = path.relative_to(self.home)
        except ValueError:
            return str(path)
        return str(Path("~") / relative)
