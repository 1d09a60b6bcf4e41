"""Default and optional npm packages plus the standard ``src/`` folders.

The folders are created right after the base scaffold, before any installer
writes into them.

Vite projects always get ``react-router-dom``; the route table and the basic
entry point both import it.  Selecting ``axios`` additionally writes a
pre-configured client instance and the ``API_URL`` environment key.
"""

from __future__ import annotations

from collections.abc import Iterable

from hyperstart.models import ExtraPackage
from hyperstart.scaffolder.installer import BaseInstaller, InstallResult
from hyperstart.scaffolder.layout import ProjectLayout
from hyperstart.scaffolder.sink import FileSink

VITE_DEFAULT_PACKAGES: list[str] = ["react-router-dom"]

SRC_FOLDERS: tuple[str, ...] = ("components", "hooks", "store", "utils", "assets")

AXIOS_ENV: dict[str, str] = {"API_URL": "http://localhost:5000"}


async def create_src_folders(sink: FileSink, layout: ProjectLayout) -> list[str]:
    """Create the standard ``src/`` folders and the pages directory."""
    folders = [f"src/{folder}" for folder in SRC_FOLDERS] + [layout.pages_dir]
    for folder in folders:
        await sink.mkdir(folder)
    return folders


class ExtrasInstaller(BaseInstaller):
    """Installs default plus selected extra packages."""

    name = "extras"

    async def install(self, packages: Iterable[ExtraPackage]) -> InstallResult:
        selected = [p for p in ExtraPackage if p in set(packages)]
        result, mark = self._start()

        defaults = VITE_DEFAULT_PACKAGES if self.layout.is_vite else []
        await self.install_packages(result, defaults + [p.value for p in selected])

        if ExtraPackage.AXIOS in selected:
            await self.render("extras/axiosInstance.js.j2", "src/utils/axiosInstance.js")
            await self.merge_env(result, "HTTP client", AXIOS_ENV)

        return self._finish(result, mark)
