# Filesystem capability used by the loader, writer and registry
import contextlib
import os
import shutil
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the file operations the synchronizer needs.

    ABOUTME: Injected so tests and callers can substitute their own storage
    """

    def exists(self, path: Path) -> bool:
        ...

    def read_text(self, path: Path) -> str:
        ...

    def write_text(self, path: Path, content: str) -> None:
        ...

    def make_dirs(self, path: Path) -> None:
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk.

    ABOUTME: Text is always UTF-8
    ABOUTME: write_text is atomic: unique temp file next to the real target, then os.replace()
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def write_text(self, path: Path, content: str) -> None:
        """Replace path with content in one step.

        ABOUTME: Creates parent directories if needed
        ABOUTME: A symlinked path is written through, the link itself is kept
        ABOUTME: The temp file is removed if anything fails before the rename

        Raises:
            OSError: If the directory or file cannot be written
        """
        if path.is_symlink():
            path = path.resolve()
        self.make_dirs(path.parent)

        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            # mkstemp creates 0600; keep the mode the file already had
            if path.exists():
                shutil.copymode(path, tmp_path)
            else:
                os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)
            raise
