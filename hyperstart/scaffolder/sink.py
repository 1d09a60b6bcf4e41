"""File/folder sink used by every installer and the template composer.

All filesystem effects of a scaffold run go through one ``FileSink`` bound to
the project root.  Writes happen off the event loop via
``asyncio.to_thread`` and every operation is recorded in a ``SinkReport`` so
callers (and tests) can see exactly what a step touched.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from hyperstart.utils import console


class SinkAction(str, Enum):
    """Kinds of filesystem effect."""
    MKDIR = "mkdir"
    WRITE = "write"
    PATCH = "patch"
    DELETE = "delete"


class SinkEntry(BaseModel):
    """A single recorded filesystem effect."""
    action: SinkAction = Field(..., description="What happened")
    path: str = Field(..., description="POSIX path relative to the project root")


class SinkReport(BaseModel):
    """Ordered log of everything a sink did."""
    entries: list[SinkEntry] = Field(default_factory=list)

    def paths(self, action: SinkAction | None = None) -> list[str]:
        """Return recorded paths, optionally filtered by *action*."""
        return [e.path for e in self.entries if action is None or e.action == action]

    @property
    def written(self) -> list[str]:
        return self.paths(SinkAction.WRITE)

    @property
    def patched(self) -> list[str]:
        return self.paths(SinkAction.PATCH)

    @property
    def deleted(self) -> list[str]:
        return self.paths(SinkAction.DELETE)


class FileSink:
    """Pass-through filesystem access rooted at one project directory.

    Paths are always given relative to ``root``.  Absolute paths and paths
    that climb out of the root are rejected so nothing is ever written
    outside the project.
    """

    def __init__(self, root: str | Path, *, verbose: bool = False) -> None:
        self.root = Path(root)
        self.verbose = verbose
        self.report = SinkReport()

    # -- Path handling -------------------------------------------------------

    def resolve(self, rel_path: str | Path) -> Path:
        rel = Path(rel_path)
        if rel.is_absolute() or ".." in rel.parts:
            raise ValueError(f"Path escapes the project root: {rel_path}")
        return self.root / rel

    def _record(self, action: SinkAction, rel_path: str | Path) -> None:
        rel = Path(rel_path).as_posix()
        self.report.entries.append(SinkEntry(action=action, path=rel))
        if self.verbose:
            marker = {
                SinkAction.MKDIR: "[blue]+dir[/blue]",
                SinkAction.WRITE: "[green]+[/green]",
                SinkAction.PATCH: "[yellow]~[/yellow]",
                SinkAction.DELETE: "[red]-[/red]",
            }[action]
            console.print(f"  {marker} {rel}")

    # -- Operations ----------------------------------------------------------

    async def mkdir(self, rel_path: str | Path) -> Path:
        """Create a directory (and parents).  Idempotent."""
        target = self.resolve(rel_path)
        await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        self._record(SinkAction.MKDIR, rel_path)
        return target

    async def write(self, rel_path: str | Path, content: str) -> Path:
        """Create or fully overwrite a file.  Parent directories are created."""
        target = self.resolve(rel_path)
        await asyncio.to_thread(_write_file, target, content)
        self._record(SinkAction.WRITE, rel_path)
        return target

    async def patch(self, rel_path: str | Path, content: str) -> Path:
        """Write back a read-modify-write result for an existing file."""
        target = self.resolve(rel_path)
        await asyncio.to_thread(_write_file, target, content)
        self._record(SinkAction.PATCH, rel_path)
        return target

    def exists(self, rel_path: str | Path) -> bool:
        return self.resolve(rel_path).exists()

    async def read_text(self, rel_path: str | Path) -> str:
        return await asyncio.to_thread(self.resolve(rel_path).read_text, encoding="utf-8")

    async def delete(self, rel_path: str | Path) -> bool:
        """Delete a file.  Returns ``False`` if it was already absent."""
        target = self.resolve(rel_path)
        if not target.is_file():
            return False
        await asyncio.to_thread(target.unlink)
        self._record(SinkAction.DELETE, rel_path)
        return True


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
