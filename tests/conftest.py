"""Shared pytest fixtures for the Hyperstart test suite.

Provides reusable fixtures for:
- Fake base projects as written by ``npm create vite`` and ``create-next-app``
- File sinks bound to those projects
- A dry-run command runner and one that lays down a base project when it
  sees a create command
- A shared template renderer
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from hyperstart.scaffolder.sink import FileSink
from hyperstart.scaffolder.templates import TemplateRenderer
from hyperstart.utils import CommandRunner


# ---------------------------------------------------------------------------
# Base project trees
# ---------------------------------------------------------------------------

VITE_BASE: dict[str, str] = {
    "package.json": textwrap.dedent("""\
        {
          "name": "base",
          "private": true,
          "type": "module",
          "scripts": { "dev": "vite", "build": "vite build" }
        }
    """),
    "index.html": textwrap.dedent("""\
        <!doctype html>
        <html lang="en">
          <head>
            <meta charset="UTF-8" />
            <title>Vite + React</title>
          </head>
          <body>
            <div id="root"></div>
            <script type="module" src="/src/main.jsx"></script>
          </body>
        </html>
    """),
    "vite.config.js": textwrap.dedent("""\
        import { defineConfig } from 'vite'
        import react from '@vitejs/plugin-react'

        // https://vite.dev/config/
        export default defineConfig({
          plugins: [react()],
        })
    """),
    "src/main.jsx": textwrap.dedent("""\
        import { StrictMode } from 'react'
        import { createRoot } from 'react-dom/client'
        import './index.css'
        import App from './App.jsx'

        createRoot(document.getElementById('root')).render(
          <StrictMode>
            <App />
          </StrictMode>,
        )
    """),
    "src/App.jsx": textwrap.dedent("""\
        import { useState } from 'react'
        import './App.css'

        function App() {
          const [count, setCount] = useState(0)
          return <button onClick={() => setCount(count + 1)}>count is {count}</button>
        }

        export default App
    """),
    "src/index.css": ":root {\n  font-family: system-ui, sans-serif;\n}\n",
    "src/App.css": "#root {\n  max-width: 1280px;\n}\n",
}

NEXT_BASE: dict[str, str] = {
    "package.json": textwrap.dedent("""\
        {
          "name": "base",
          "private": true,
          "scripts": { "dev": "next dev", "build": "next build" }
        }
    """),
    "jsconfig.json": textwrap.dedent("""\
        {
          "compilerOptions": {
            "paths": { "@/*": ["./src/*"] }
          }
        }
    """),
    "src/app/layout.js": textwrap.dedent("""\
        import "./globals.css";

        export const metadata = {
          title: "Create Next App",
        };

        export default function RootLayout({ children }) {
          return (
            <html lang="en">
              <body>{children}</body>
            </html>
          );
        }
    """),
    "src/app/page.js": textwrap.dedent("""\
        import Image from "next/image";
        import styles from "./page.module.css";

        export default function Home() {
          return <main className={styles.main}>Get started</main>;
        }
    """),
    "src/app/globals.css": ":root {\n  --background: #ffffff;\n}\n",
    "src/app/page.module.css": ".main {\n  display: flex;\n}\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write *files* (relative path -> content) under *root*."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Projects & sinks
# ---------------------------------------------------------------------------


@pytest.fixture
def vite_project(tmp_path: Path) -> Path:
    """A freshly created Vite + React project."""
    return write_tree(tmp_path / "vite-app", VITE_BASE)


@pytest.fixture
def next_project(tmp_path: Path) -> Path:
    """A freshly created create-next-app project (App Router, src/ dir)."""
    return write_tree(tmp_path / "next-app", NEXT_BASE)


@pytest.fixture
def vite_sink(vite_project: Path) -> FileSink:
    return FileSink(vite_project)


@pytest.fixture
def next_sink(next_project: Path) -> FileSink:
    return FileSink(next_project)


@pytest.fixture
def empty_sink(tmp_path: Path) -> FileSink:
    root = tmp_path / "empty"
    root.mkdir()
    return FileSink(root)


# ---------------------------------------------------------------------------
# Commands & rendering
# ---------------------------------------------------------------------------


class ScaffoldingRunner(CommandRunner):
    """Dry-run runner that writes a fake base project for create commands."""

    async def run(self, cmd: list[str], cwd: str | Path | None = None) -> int:
        await super().run(cmd, cwd=cwd)
        parent = Path(cwd) if cwd else Path(".")
        if len(cmd) > 3 and cmd[1] == "create" and cmd[2].startswith("vite"):
            write_tree(parent / cmd[3], VITE_BASE)
        elif len(cmd) > 2 and cmd[1].startswith("create-next-app"):
            write_tree(parent / cmd[2], NEXT_BASE)
        return 0


@pytest.fixture
def runner() -> CommandRunner:
    """Command runner that records but never executes."""
    return CommandRunner(dry_run=True)


@pytest.fixture
def scaffolding_runner() -> ScaffoldingRunner:
    return ScaffoldingRunner(dry_run=True)


@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    return TemplateRenderer()
