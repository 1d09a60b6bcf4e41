"""Common plumbing for the CSS, component-library and service installers.

An installer receives the project sink, the framework layout, the command
runner and the template renderer, and returns an ``InstallResult`` listing
the packages it installed and the files it wrote or patched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from hyperstart.scaffolder.env import merge_env_example
from hyperstart.scaffolder.layout import ProjectLayout
from hyperstart.scaffolder.sink import FileSink, SinkAction
from hyperstart.scaffolder.templates import TemplateRenderer
from hyperstart.utils import CommandRunner


class InstallResult(BaseModel):
    """What a single installer did."""

    name: str = Field(..., description="Installer name, e.g. 'firebase'")
    packages: list[str] = Field(default_factory=list, description="npm packages installed")
    commands: list[str] = Field(
        default_factory=list, description="Other external commands issued"
    )
    files_written: list[str] = Field(default_factory=list)
    files_patched: list[str] = Field(default_factory=list)
    env_keys: list[str] = Field(
        default_factory=list, description="Keys this installer added to .env.example"
    )

    @property
    def skipped(self) -> bool:
        return not (self.packages or self.commands or self.files_written or self.files_patched)


class BaseInstaller:
    """Shared constructor and helpers for installers."""

    name = "base"

    def __init__(
        self,
        sink: FileSink,
        layout: ProjectLayout,
        runner: CommandRunner,
        renderer: TemplateRenderer | None = None,
        *,
        npm: str = "npm",
        npx: str = "npx",
    ) -> None:
        self.sink = sink
        self.layout = layout
        self.runner = runner
        self.renderer = renderer or TemplateRenderer()
        self.npm = npm
        self.npx = npx

    # -- Result bookkeeping --------------------------------------------------

    def _start(self) -> tuple[InstallResult, int]:
        return InstallResult(name=self.name), len(self.sink.report.entries)

    def _finish(self, result: InstallResult, mark: int) -> InstallResult:
        for entry in self.sink.report.entries[mark:]:
            if entry.action == SinkAction.WRITE and entry.path not in result.files_written:
                result.files_written.append(entry.path)
            elif entry.action == SinkAction.PATCH and entry.path not in result.files_patched:
                result.files_patched.append(entry.path)
        return result

    # -- Helpers -------------------------------------------------------------

    def context(self, **extra: Any) -> dict[str, Any]:
        """Base template context every installer template can rely on."""
        return {
            "layout": self.layout,
            "env": self.layout.env_ref,
            "public_env": self.layout.public_env,
            "header": _header(self.layout),
            **extra,
        }

    async def install_packages(
        self, result: InstallResult, packages: list[str], *, dev: bool = False
    ) -> None:
        installed = await self.runner.install(self.npm, packages, self.sink.root, dev=dev)
        result.packages.extend(installed)

    async def render(self, template: str, rel_path: str, **extra: Any) -> str:
        return await self.renderer.render_to_sink(
            template, self.sink, rel_path, self.context(**extra)
        )

    async def merge_env(
        self, result: InstallResult, section: str, public: dict[str, str], server: dict[str, str] | None = None
    ) -> None:
        """Merge public (prefixed) and server-only keys into ``.env.example``."""
        variables = {self.layout.public_env(k): v for k, v in public.items()}
        variables.update(server or {})
        added = await merge_env_example(self.sink, section, variables)
        result.env_keys.extend(added)


def _header(layout: ProjectLayout) -> str:
    if layout.client_directive:
        return f"{layout.client_directive}\n\n"
    return ""
