"""Tests for the CSS framework installer (hyperstart.scaffolder.css).

Covers:
- packages_for per framework and layout
- Tailwind (Vite plugin, Next PostCSS config, global stylesheet, entry import)
- Bootstrap CDN (index.html tags, JSX head for Next)
- Bootstrap package and MUI entry patches
- shadcn/ui delegation to the component-library installer
- Missing entry file raises ScaffoldError
"""

from __future__ import annotations

import pytest

from hyperstart.models import CssFramework, Framework
from hyperstart.scaffolder.css import (
    BOOTSTRAP_CSS_IMPORT,
    BOOTSTRAP_CSS_URL,
    BOOTSTRAP_JS_URL,
    CssInstaller,
    packages_for,
)
from hyperstart.scaffolder.layout import ScaffoldError, get_layout
from hyperstart.scaffolder.sink import FileSink
from hyperstart.utils import CommandRunner

pytestmark = pytest.mark.unit


def _installer(sink: FileSink, runner: CommandRunner, framework: Framework) -> CssInstaller:
    return CssInstaller(sink, get_layout(framework), runner)


# ---------------------------------------------------------------------------
# packages_for
# ---------------------------------------------------------------------------


class TestPackagesFor:
    def test_vite_tailwind(self):
        assert packages_for(CssFramework.TAILWIND, vite=True) == ["tailwindcss", "@tailwindcss/vite"]

    def test_next_tailwind(self):
        assert packages_for(CssFramework.TAILWIND_SHADCN, vite=False) == [
            "tailwindcss",
            "@tailwindcss/postcss",
            "postcss",
        ]

    def test_cdn_installs_nothing(self):
        assert packages_for(CssFramework.BOOTSTRAP_CDN, vite=True) == []

    def test_mui(self):
        assert "@mui/material" in packages_for(CssFramework.MUI, vite=False)


# ---------------------------------------------------------------------------
# Tailwind
# ---------------------------------------------------------------------------


class TestTailwind:
    async def test_vite(self, vite_sink: FileSink, runner: CommandRunner):
        result = await _installer(vite_sink, runner, Framework.VITE).install(CssFramework.TAILWIND)

        config = await vite_sink.read_text("vite.config.js")
        assert "plugins: [tailwindcss(), react()]" in config
        assert "import tailwindcss from '@tailwindcss/vite'" in config

        css = await vite_sink.read_text("src/index.css")
        assert css.startswith('@import "tailwindcss";')
        assert "--radius" not in css

        entry = await vite_sink.read_text("src/main.jsx")
        assert entry.splitlines()[0] == "import './index.css';"
        assert entry.count("index.css") == 1

        assert result.packages == ["tailwindcss", "@tailwindcss/vite"]
        assert runner.history[0].command == ["npm", "install", "tailwindcss", "@tailwindcss/vite"]
        assert "vite.config.js" in result.files_patched
        assert "src/index.css" in result.files_written

    async def test_next(self, next_sink: FileSink, runner: CommandRunner):
        await _installer(next_sink, runner, Framework.NEXTLIKE).install(CssFramework.TAILWIND)

        assert "@tailwindcss/postcss" in await next_sink.read_text("postcss.config.mjs")
        layout = await next_sink.read_text("src/app/layout.js")
        assert layout.splitlines()[0] == "import './globals.css';"
        assert '"./globals.css"' not in layout
        assert not next_sink.exists("vite.config.js")


# ---------------------------------------------------------------------------
# Bootstrap / MUI
# ---------------------------------------------------------------------------


class TestBootstrapCdn:
    async def test_vite_index_html(self, vite_sink: FileSink, runner: CommandRunner):
        result = await _installer(vite_sink, runner, Framework.VITE).install(CssFramework.BOOTSTRAP_CDN)

        html = await vite_sink.read_text("index.html")
        assert html.index(BOOTSTRAP_CSS_URL) < html.index("</head>")
        assert html.index(BOOTSTRAP_JS_URL) < html.index("</body>")
        assert result.packages == []
        assert runner.history == []

    async def test_vite_idempotent(self, vite_sink: FileSink, runner: CommandRunner):
        installer = _installer(vite_sink, runner, Framework.VITE)
        await installer.install(CssFramework.BOOTSTRAP_CDN)
        first = await vite_sink.read_text("index.html")
        await installer.install(CssFramework.BOOTSTRAP_CDN)
        assert await vite_sink.read_text("index.html") == first

    async def test_next_layout_head(self, next_sink: FileSink, runner: CommandRunner):
        await _installer(next_sink, runner, Framework.NEXTLIKE).install(CssFramework.BOOTSTRAP_CDN)
        layout = await next_sink.read_text("src/app/layout.js")
        assert '<html lang="en">\n      <head>' in layout
        assert BOOTSTRAP_CSS_URL in layout


class TestBootstrapPackage:
    async def test_entry_import(self, vite_sink: FileSink, runner: CommandRunner):
        result = await _installer(vite_sink, runner, Framework.VITE).install(
            CssFramework.BOOTSTRAP_PACKAGE
        )
        entry = await vite_sink.read_text("src/main.jsx")
        assert entry.splitlines()[0] == BOOTSTRAP_CSS_IMPORT
        assert "./index.css" not in entry
        assert result.packages == ["bootstrap", "react-bootstrap"]


class TestMui:
    async def test_entry_stylesheets_dropped(self, vite_sink: FileSink, runner: CommandRunner):
        await _installer(vite_sink, runner, Framework.VITE).install(CssFramework.MUI)
        entry = await vite_sink.read_text("src/main.jsx")
        assert ".css" not in entry
        assert "import App from './App.jsx'" in entry


# ---------------------------------------------------------------------------
# shadcn/ui & errors
# ---------------------------------------------------------------------------


class TestShadcn:
    async def test_delegates_to_component_library(self, vite_sink: FileSink, runner: CommandRunner):
        result = await _installer(vite_sink, runner, Framework.VITE).install(
            CssFramework.TAILWIND_SHADCN, ["button", "card"]
        )
        css = await vite_sink.read_text("src/index.css")
        assert "--radius" in css
        assert vite_sink.exists("components.json")
        assert "clsx" in result.packages
        assert result.commands == ["npx shadcn@latest add button card --yes"]


class TestMissingEntry:
    async def test_raises(self, empty_sink: FileSink, runner: CommandRunner):
        with pytest.raises(ScaffoldError):
            await _installer(empty_sink, runner, Framework.VITE).install(CssFramework.MUI)
