"""Tests for the shadcn/ui installer (hyperstart.scaffolder.component_library).

Covers:
- components.json for Vite and Next-style projects
- cn helper, jsconfig alias, Vite resolve alias
- shadcn CLI invocation only when components were requested
"""

from __future__ import annotations

import json

import pytest

from hyperstart.models import COMPONENT_LIBRARY_CATALOG, Framework
from hyperstart.scaffolder.component_library import (
    COMPONENT_EXPORTS,
    HELPER_PACKAGES,
    ComponentLibraryInstaller,
    components_json,
)
from hyperstart.scaffolder.layout import get_layout
from hyperstart.scaffolder.sink import FileSink
from hyperstart.utils import CommandRunner

pytestmark = pytest.mark.unit


class TestComponentsJson:
    def test_vite(self):
        config = components_json("src/index.css", rsc=False)
        assert config["rsc"] is False
        assert config["tsx"] is False
        assert config["tailwind"]["css"] == "src/index.css"
        assert config["aliases"]["ui"] == "@/components/ui"

    def test_catalog_has_exports(self):
        assert set(COMPONENT_LIBRARY_CATALOG) <= set(COMPONENT_EXPORTS)


class TestComponentLibraryInstaller:
    async def test_vite(self, vite_sink: FileSink, runner: CommandRunner):
        installer = ComponentLibraryInstaller(vite_sink, get_layout(Framework.VITE), runner)
        result = await installer.install(["card", "button", "card"])

        config = json.loads(await vite_sink.read_text("components.json"))
        assert config["rsc"] is False
        assert "twMerge" in await vite_sink.read_text("src/lib/utils.js")
        assert "@/*" in await vite_sink.read_text("jsconfig.json")
        assert "'@': path.resolve(__dirname, './src')" in await vite_sink.read_text("vite.config.js")

        assert result.packages == HELPER_PACKAGES
        assert runner.history[-1].command == ["npx", "shadcn@latest", "add", "card", "button", "--yes"]
        assert runner.history[-1].cwd == vite_sink.root

    async def test_next_keeps_existing_jsconfig(self, next_sink: FileSink, runner: CommandRunner):
        before = await next_sink.read_text("jsconfig.json")
        installer = ComponentLibraryInstaller(next_sink, get_layout(Framework.NEXTLIKE), runner)
        await installer.install(["button"])

        assert await next_sink.read_text("jsconfig.json") == before
        config = json.loads(await next_sink.read_text("components.json"))
        assert config["rsc"] is True
        assert config["tailwind"]["css"] == "src/app/globals.css"

    async def test_no_components_skips_cli(self, vite_sink: FileSink, runner: CommandRunner):
        installer = ComponentLibraryInstaller(vite_sink, get_layout(Framework.VITE), runner)
        result = await installer.install([])
        assert result.commands == []
        assert all("shadcn@latest" not in r.command for r in runner.history)
