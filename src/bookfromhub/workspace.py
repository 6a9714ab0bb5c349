"""Per-run temporary directories."""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .constraint import OUTPUT_FILENAME, SOURCE_FILENAME, WORKSPACE_PREFIX
from .errors import WorkspaceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Workspace:
    path: Path

    @property
    def source_file(self) -> Path:
        return self.path / SOURCE_FILENAME

    @property
    def output_file(self) -> Path:
        return self.path / OUTPUT_FILENAME


def remove_workspace(path: Path) -> None:
    try:
        shutil.rmtree(path)
    except (FileNotFoundError, PermissionError) as exc:
        logger.debug("Ignoring workspace cleanup failure for %s: %s", path, exc)
    except OSError as exc:
        logger.warning("Could not remove workspace %s: %s", path, exc)


@contextmanager
def workspace(root: Path | None = None) -> Iterator[Workspace]:
    """Yield a private, uniquely named directory that is removed on exit."""

    try:
        # mkdtemp picks a random name and creates the directory with mode 0o700.
        created = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=root))
    except OSError as exc:
        raise WorkspaceError(f"Failed to create temporary workspace: {exc}") from exc
    try:
        yield Workspace(path=created)
    finally:
        remove_workspace(created)


__all__ = ["Workspace", "workspace", "remove_workspace"]
