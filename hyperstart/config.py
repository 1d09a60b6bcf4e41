"""Hyperstart runtime configuration.

Typed configuration for a scaffolding run.  Everything about *what* gets
generated comes from the interactive answers; this model only covers *how*
the run behaves (where to write, which binaries to call, how chatty to be).
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field


_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


class Config(BaseModel):
    """Global Hyperstart configuration.

    Created once by the CLI entry point (usually via :meth:`from_env`) and
    handed to the ``Pipeline``.
    """

    output_dir: Path = Field(default=Path("."), description="Parent of the project root")
    npm: str = Field(default="npm", description="npm executable")
    npx: str = Field(default="npx", description="npx executable")
    dry_run: bool = Field(
        default=False, description="Record external commands instead of executing them"
    )
    quiet: bool = Field(default=False, description="Suppress per-file narration")

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def project_root(self, project_name: str) -> Path:
        """The single directory every generated file lives under."""
        return self.output_dir / project_name

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            HYPERSTART_OUTPUT_DIR, HYPERSTART_NPM, HYPERSTART_NPX,
            HYPERSTART_DRY_RUN, HYPERSTART_QUIET.
        """
        return cls(
            output_dir=Path(os.environ.get("HYPERSTART_OUTPUT_DIR") or "."),
            npm=os.environ.get("HYPERSTART_NPM") or "npm",
            npx=os.environ.get("HYPERSTART_NPX") or "npx",
            dry_run=_env_flag("HYPERSTART_DRY_RUN"),
            quiet=_env_flag("HYPERSTART_QUIET"),
        )
