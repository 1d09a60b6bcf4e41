"""Per-framework file conventions of the generated project.

The two base scaffolds put their entry point, root component and stylesheets
in different places and expose public environment variables differently.
Everything that needs to know *where* a file lives asks a ``ProjectLayout``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from hyperstart.models import Framework
from hyperstart.scaffolder.sink import FileSink


class ScaffoldError(Exception):
    """Raised when the project tree does not satisfy a step's precondition."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message)


class ProjectLayout(BaseModel):
    """File layout of one base scaffold.  Paths are relative to the project root."""

    model_config = ConfigDict(frozen=True)

    framework: Framework
    entry_candidates: tuple[str, ...] = Field(..., description="Entry file, primary first")
    root_candidates: tuple[str, ...] = Field(..., description="Root component, primary first")
    global_stylesheet: str
    default_stylesheet: str
    pages_dir: str
    jsx_ext: str = Field(..., description="Extension for generated component files")
    env_prefix: str = Field(..., description="Prefix that exposes a variable to the browser")
    env_accessor: str = Field(..., description="JS expression that holds public variables")
    client_directive: str = Field(default="", description="Module header for client components")

    # -- Derived locations ---------------------------------------------------

    @property
    def entry_file(self) -> str:
        return self.entry_candidates[0]

    @property
    def root_component(self) -> str:
        return self.root_candidates[0]

    @property
    def is_vite(self) -> bool:
        return self.framework == Framework.VITE

    def page_path(self, component: str) -> str:
        return f"{self.pages_dir}/{component}{self.jsx_ext}"

    def component_path(self, name: str) -> str:
        return f"src/components/{name}{self.jsx_ext}"

    def hook_path(self, name: str) -> str:
        # Hooks that render JSX (context providers) need the JSX extension.
        return f"src/hooks/{name}{self.jsx_ext}"

    # -- Environment ---------------------------------------------------------

    def public_env(self, key: str) -> str:
        """Browser-visible variable name for *key*."""
        return f"{self.env_prefix}{key}"

    def env_ref(self, key: str) -> str:
        """JS expression reading the public variable *key*."""
        return f"{self.env_accessor}.{self.public_env(key)}"

    # -- Probing -------------------------------------------------------------

    def find_entry(self, sink: FileSink) -> str | None:
        """Return the first entry-file candidate that exists, if any."""
        return _first_existing(sink, self.entry_candidates)

    def find_root_component(self, sink: FileSink) -> str | None:
        return _first_existing(sink, self.root_candidates)

    def require_entry(self, sink: FileSink) -> str:
        """Like :meth:`find_entry` but raises ``ScaffoldError`` when absent."""
        found = self.find_entry(sink)
        if found is None:
            raise ScaffoldError(
                f"Entry file not found (looked for {', '.join(self.entry_candidates)})",
                path=self.entry_file,
            )
        return found


LAYOUTS: dict[Framework, ProjectLayout] = {
    Framework.VITE: ProjectLayout(
        framework=Framework.VITE,
        entry_candidates=("src/main.jsx", "src/main.tsx"),
        root_candidates=("src/App.jsx", "src/App.tsx"),
        global_stylesheet="src/index.css",
        default_stylesheet="src/App.css",
        pages_dir="src/pages",
        jsx_ext=".jsx",
        env_prefix="VITE_",
        env_accessor="import.meta.env",
        client_directive="",
    ),
    Framework.NEXTLIKE: ProjectLayout(
        framework=Framework.NEXTLIKE,
        entry_candidates=("src/app/layout.js", "src/app/layout.tsx"),
        root_candidates=("src/app/page.js", "src/app/page.tsx"),
        global_stylesheet="src/app/globals.css",
        default_stylesheet="src/app/page.module.css",
        pages_dir="src/views",
        jsx_ext=".js",
        env_prefix="NEXT_PUBLIC_",
        env_accessor="process.env",
        client_directive="'use client';",
    ),
}


def get_layout(framework: Framework) -> ProjectLayout:
    return LAYOUTS[framework]


def _first_existing(sink: FileSink, candidates: tuple[str, ...]) -> str | None:
    for candidate in candidates:
        if sink.exists(candidate):
            return candidate
    return None
