"""Path helpers shared by backup strategies."""

from pathlib import Path

from stratify_remediator.domain.exceptions import BackupError


def relative_to_root(path: Path, project_root: Path) -> Path:
    """Path of a target relative to the project root; targets outside the root cannot be staged."""
    try:
        return path.resolve().relative_to(project_root.resolve())
    except ValueError as exc:
        raise BackupError(f"{path} is outside project root {project_root}") from exc


def deepest_existing_ancestor(path: Path) -> Path:
    current = path.parent
    while not current.exists() and current != current.parent:
        current = current.parent
    return current


def prune_empty_dirs(start: Path, stop: Path) -> None:
    """Remove empty directories from start upwards, never removing stop or anything above it."""
    current = start
    stop = stop.resolve()
    while current.resolve() != stop and stop in current.resolve().parents:
        try:
            current.rmdir()
        except OSError:
            return
        current = current.parent
