"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import os
import stat
import tempfile
from pathlib import Path

from stratify_remediator.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        """Check if path is a directory."""
        return path.is_dir()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file, replacing it in one step."""
        self.write_bytes(path, content.encode("utf-8"))

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write to a sibling temp file, then rename over the target."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
            if path.exists():
                os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode))
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def make_dirs(self, path: Path) -> None:
        """Create directory and parent directories if needed."""
        path.mkdir(parents=True, exist_ok=True)

    def delete_file(self, path: Path) -> None:
        path.unlink(missing_ok=True)

    def make_executable(self, path: Path) -> bool:
        """Set the executable bits where the platform supports them. Returns False when it does not."""
        try:
            mode = path.stat().st_mode
            path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except (OSError, NotImplementedError):
            return False
        return True

    def walk_files(self, root: Path, suffix: str) -> list[Path]:
        """All files under root with the given suffix, sorted for stable output."""
        if not root.is_dir():
            return []
        return sorted(p for p in root.rglob(f"*{suffix}") if p.is_file())
