"""Shared utility functions for Hyperstart.

Provides external command execution, duration formatting and the Rich-based console
narration used by the pipeline.  Only the pipeline and the file sink print;
everything else returns structured results.
"""

from __future__ import annotations

import asyncio
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# External command execution
# ---------------------------------------------------------------------------


class CommandError(Exception):
    """Raised when an external command exits non-zero or cannot be started."""

    def __init__(self, message: str, command: str = "", returncode: int = 1):
        self.command = command
        self.returncode = returncode
        super().__init__(message)


async def run_command(cmd: list[str], cwd: str | Path | None = None) -> int:
    """Run *cmd* to completion with the parent's stdout/stderr.

    The child's output goes straight to the terminal, so the user sees
    package-manager progress live.  There is no timeout.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.

    Returns:
        The exit status (always ``0``).

    Raises:
        CommandError: If the program is missing or exits non-zero.
    """
    display = shlex.join(cmd)
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd) if cwd else None,
        )
    except FileNotFoundError as exc:
        raise CommandError(
            f"Command not found: {cmd[0]}", command=display, returncode=127
        ) from exc

    returncode = await process.wait()
    if returncode != 0:
        raise CommandError(
            f"Command failed with exit code {returncode}: {display}",
            command=display,
            returncode=returncode,
        )
    return returncode


@dataclass
class CommandRecord:
    """One external command issued during a run."""

    command: list[str]
    cwd: Path | None
    executed: bool


@dataclass
class CommandRunner:
    """Runs external commands one at a time and remembers every invocation.

    With ``dry_run`` enabled the commands are recorded and narrated but never
    executed, which lets a whole scaffold be previewed offline.
    """

    dry_run: bool = False
    history: list[CommandRecord] = field(default_factory=list)

    async def run(self, cmd: list[str], cwd: str | Path | None = None) -> int:
        where = Path(cwd) if cwd else None
        if self.dry_run:
            console.print(f"  [dim]\\[dry-run] {shlex.join(cmd)}[/dim]")
            self.history.append(CommandRecord(list(cmd), where, executed=False))
            return 0
        console.print(f"  [cyan]$[/cyan] {shlex.join(cmd)}")
        self.history.append(CommandRecord(list(cmd), where, executed=True))
        return await run_command(cmd, cwd=where)

    async def install(
        self,
        npm: str,
        packages: list[str],
        cwd: str | Path,
        *,
        dev: bool = False,
    ) -> list[str]:
        """``npm install`` the given packages; an empty list is a no-op."""
        if not packages:
            return []
        cmd = [npm, "install", *(["-D"] if dev else []), *packages]
        await self.run(cmd, cwd=cwd)
        return list(packages)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STEP_NAMES: dict[int, str] = {
    1: "CREATE",
    2: "STYLE",
    3: "SERVICES",
    4: "COMPOSE",
    5: "CLEANUP",
    6: "DOCUMENT",
}

STEP_COLORS: dict[int, str] = {
    1: "bright_cyan",
    2: "bright_magenta",
    3: "bright_yellow",
    4: "bright_green",
    5: "bright_red",
    6: "bright_blue",
}


def print_step_header(step: int, name: str) -> None:
    """Print a full-width rule naming the step, coloured per step."""
    color = STEP_COLORS.get(step, "white")
    console.print()
    console.print(
        Rule(
            f"[bold {color}] Step {step}: {name.upper()} [/bold {color}]",
            style=color,
        )
    )
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
