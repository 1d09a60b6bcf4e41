"""Hyperstart Pipeline Orchestrator.

Runs the six scaffold steps in dependency order:

Step 1: CREATE   -- Run the base scaffold tool (Vite or create-next-app).
Step 2: STYLE    -- Install and wire the CSS framework (and shadcn/ui).
Step 3: SERVICES -- Firebase, AI backend, payments, PWA and extra packages.
Step 4: COMPOSE  -- Emit the feature template's pages and mount them.
Step 5: CLEANUP  -- Drop default stylesheets, then finalize a basic project.
Step 6: DOCUMENT -- Write README.md.

Any failure stops the run.  Nothing is rolled back; the partially generated
project stays on disk.

Usage::

    hyperstart
    python -m hyperstart.pipeline
"""

from __future__ import annotations

import asyncio
import sys
import time
import traceback
from typing import Any

from rich.panel import Panel

from hyperstart.config import Config
from hyperstart.models import (
    CSS_LABELS,
    FRAMEWORK_LABELS,
    TEMPLATE_LABELS,
    AnswerSet,
    Framework,
)
from hyperstart.prompts import collect_answers
from hyperstart.reporter.readme import ReadmeGenerator
from hyperstart.scaffolder.ai_saas import AISaasInstaller
from hyperstart.scaffolder.cleanup import cleanup
from hyperstart.scaffolder.composer import Route, TemplateComposer
from hyperstart.scaffolder.css import CssInstaller
from hyperstart.scaffolder.env import ENV_EXAMPLE
from hyperstart.scaffolder.extras import ExtrasInstaller, create_src_folders
from hyperstart.scaffolder.firebase import FirebaseInstaller
from hyperstart.scaffolder.installer import BaseInstaller, InstallResult
from hyperstart.scaffolder.layout import ScaffoldError, get_layout
from hyperstart.scaffolder.payments import PaymentsInstaller
from hyperstart.scaffolder.pwa import PwaInstaller
from hyperstart.scaffolder.sink import FileSink
from hyperstart.scaffolder.templates import TemplateRenderer
from hyperstart.utils import (
    STEP_NAMES,
    CommandError,
    CommandRunner,
    console,
    format_duration,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PipelineError(Exception):
    """Raised when a pipeline step cannot continue."""

    def __init__(self, step: int, message: str) -> None:
        self.step = step
        super().__init__(f"Step {step} ({STEP_NAMES.get(step, '?')}): {message}")


# ---------------------------------------------------------------------------
# Base scaffold commands
# ---------------------------------------------------------------------------


def base_scaffold_command(
    framework: Framework, project_name: str, *, npm: str = "npm", npx: str = "npx"
) -> list[str]:
    """Command that creates the base project directory *project_name*."""
    if framework == Framework.VITE:
        return [npm, "create", "vite@latest", project_name, "--", "--template", "react"]
    return [
        npx,
        "create-next-app@latest",
        project_name,
        "--js",
        "--app",
        "--src-dir",
        "--eslint",
        "--no-tailwind",
        "--import-alias",
        "@/*",
        "--use-npm",
        "--yes",
    ]


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives one scaffold run for a fixed ``AnswerSet``.

    Attributes:
        config: Runtime configuration.
        answers: The collected answers.
        sink: File sink rooted at the project directory.
        state: Accumulated per-step results and the overall ``success`` flag.
    """

    _STEP_METHODS: dict[int, str] = {
        1: "step1_create",
        2: "step2_style",
        3: "step3_services",
        4: "step4_compose",
        5: "step5_cleanup",
        6: "step6_document",
    }

    def __init__(
        self,
        config: Config,
        answers: AnswerSet,
        runner: CommandRunner | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.answers = answers
        self.project_root = config.project_root(answers.project_name)
        self.layout = get_layout(answers.framework)
        self.runner = runner or CommandRunner(dry_run=config.dry_run)
        self.renderer = renderer or TemplateRenderer()
        self.sink = FileSink(self.project_root, verbose=not config.quiet)
        self.composer = TemplateComposer(self.sink, self.layout, self.renderer)
        self.routes: list[Route] = []
        self.installs: list[InstallResult] = []
        self.state: dict[str, Any] = {
            "project_root": str(self.project_root),
            "steps_completed": [],
            "steps_failed": [],
            "success": False,
        }

    # ------------------------------------------------------------------
    # Step dispatch
    # ------------------------------------------------------------------

    async def run(self) -> dict[str, Any]:
        """Execute every step in order and return the final state."""
        pipeline_start = time.monotonic()

        console.print(
            Panel(
                f"[bold bright_cyan]Hyperstart[/bold bright_cyan]\n"
                f"Project   : {self.answers.project_name}\n"
                f"Framework : {FRAMEWORK_LABELS[self.answers.framework]}\n"
                f"Template  : {TEMPLATE_LABELS[self.answers.template]}\n"
                f"Output    : {self.project_root.resolve()}",
                title="[bold]Scaffold Start[/bold]",
                border_style="bright_cyan",
            )
        )

        all_success = True

        for step_num in sorted(self._STEP_METHODS):
            method = getattr(self, self._STEP_METHODS[step_num])
            step_name = STEP_NAMES.get(step_num, "UNKNOWN")
            print_step_header(step_num, step_name)

            step_start = time.monotonic()
            try:
                result = await method()
                self.state[f"step{step_num}"] = result
                self.state["steps_completed"].append(step_num)
                print_success(
                    f"Step {step_num} ({step_name}) completed in "
                    f"{format_duration(time.monotonic() - step_start)}"
                )
                if result.get("created") is False:
                    # Dry run without a base project: there is nothing to patch.
                    print_warning("Dry run: base project not created, remaining steps skipped.")
                    break

            except (PipelineError, CommandError, ScaffoldError) as exc:
                all_success = False
                self.state["steps_failed"].append(step_num)
                self.state[f"step{step_num}_error"] = str(exc)
                print_error(
                    f"Step {step_num} ({step_name}) FAILED after "
                    f"{format_duration(time.monotonic() - step_start)}: {exc}"
                )
                break

            except Exception as exc:
                all_success = False
                self.state["steps_failed"].append(step_num)
                tb = traceback.format_exc()
                self.state[f"step{step_num}_error"] = tb
                print_error(
                    f"Step {step_num} ({step_name}) FAILED after "
                    f"{format_duration(time.monotonic() - step_start)}: {exc}"
                )
                console.print(f"[dim]{tb}[/dim]")
                break

        total_elapsed = time.monotonic() - pipeline_start
        self.state["success"] = all_success
        self.state["total_duration"] = format_duration(total_elapsed)

        self._print_final_summary(total_elapsed)
        return self.state

    # ------------------------------------------------------------------
    # Step 1: CREATE
    # ------------------------------------------------------------------

    async def step1_create(self) -> dict[str, Any]:
        """Run the base scaffold tool in the output directory."""
        root = self.project_root
        if root.exists() and any(root.iterdir()):
            raise ScaffoldError(f"Directory {root} already exists and is not empty", str(root))

        await asyncio.to_thread(self.config.output_dir.mkdir, parents=True, exist_ok=True)
        cmd = base_scaffold_command(
            self.answers.framework,
            self.answers.project_name,
            npm=self.config.npm,
            npx=self.config.npx,
        )
        await self.runner.run(cmd, cwd=self.config.output_dir)

        if not root.is_dir():
            if self.runner.dry_run:
                return {"command": cmd, "created": False}
            raise PipelineError(1, f"{cmd[0]} did not create {root}")

        if self.answers.framework == Framework.VITE:
            await self.runner.run([self.config.npm, "install"], cwd=root)

        folders = await create_src_folders(self.sink, self.layout)
        console.print(f"  [green]+[/green] Base project at {root}")
        return {"command": cmd, "created": True, "folders": folders}

    # ------------------------------------------------------------------
    # Step 2: STYLE
    # ------------------------------------------------------------------

    async def step2_style(self) -> dict[str, Any]:
        """Install the CSS framework and, for shadcn/ui, its components."""
        result = await self._installer(CssInstaller).install(
            self.answers.css_framework, self.answers.component_library_components
        )
        self._record(result)
        console.print(f"  [green]+[/green] {CSS_LABELS[self.answers.css_framework]}")
        return result.model_dump()

    # ------------------------------------------------------------------
    # Step 3: SERVICES
    # ------------------------------------------------------------------

    async def step3_services(self) -> dict[str, Any]:
        """Run every optional-service installer.  Unselected ones are no-ops."""
        a = self.answers
        results = [
            await self._installer(FirebaseInstaller).install(a.firebase_services),
            await self._installer(AISaasInstaller).install(
                a.ai_providers, a.ai_features, payments=a.payments_enabled
            ),
            await self._installer(PaymentsInstaller).install(a.payments_enabled),
            await self._installer(PwaInstaller).install(a.is_pwa, a.project_name),
            await self._installer(ExtrasInstaller).install(a.extra_packages),
        ]
        for result in results:
            self._record(result)
            if result.skipped:
                console.print(f"  [dim]-[/dim] {result.name}: not selected")
            else:
                console.print(f"  [green]+[/green] {result.name}")
        return {"installers": [r.model_dump() for r in results]}

    # ------------------------------------------------------------------
    # Step 4: COMPOSE
    # ------------------------------------------------------------------

    async def step4_compose(self) -> dict[str, Any]:
        """Write the template's pages and mount them in the root component."""
        result = await self.composer.compose(self.answers)
        self.routes = list(result.routes)
        for route in self.routes:
            console.print(f"  [green]+[/green] {route.path} -> {route.component}")
        return result.model_dump(mode="json")

    # ------------------------------------------------------------------
    # Step 5: CLEANUP
    # ------------------------------------------------------------------

    async def step5_cleanup(self) -> dict[str, Any]:
        """Remove default stylesheets, then rewrite a basic project's root files."""
        removed = await cleanup(self.sink, self.layout, self.answers.css_framework)
        finalized = await self.composer.finalize(self.answers)
        return {
            "deleted": removed.deleted,
            "patched": removed.patched,
            "finalized": finalized.files,
        }

    # ------------------------------------------------------------------
    # Step 6: DOCUMENT
    # ------------------------------------------------------------------

    async def step6_document(self) -> dict[str, Any]:
        """Write README.md."""
        path = await ReadmeGenerator(self.renderer).render(
            self.sink, self.answers, self.layout, self.routes
        )
        return {"readme": path}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _installer(self, cls: type[BaseInstaller]) -> Any:
        return cls(
            self.sink,
            self.layout,
            self.runner,
            self.renderer,
            npm=self.config.npm,
            npx=self.config.npx,
        )

    def _record(self, result: InstallResult) -> None:
        self.installs.append(result)

    def _print_final_summary(self, total_elapsed: float) -> None:
        """Print the summary table and the next-step panel."""
        a = self.answers
        packages = [p for r in self.installs for p in r.packages]
        print_summary_table(
            {
                "Project": a.project_name,
                "Framework": FRAMEWORK_LABELS[a.framework],
                "Template": TEMPLATE_LABELS[a.template],
                "CSS": CSS_LABELS[a.css_framework],
                "Firebase": ", ".join(s.value for s in a.firebase_services) or "none",
                "AI providers": ", ".join(p.value for p in a.ai_providers) or "none",
                "Payments": "yes" if a.payments_enabled else "no",
                "PWA": "yes" if a.is_pwa else "no",
                "Extra packages": ", ".join(p.value for p in a.extra_packages) or "none",
                "npm packages": str(len(packages)),
                "Files written": str(len(set(self.sink.report.written))),
                "Duration": format_duration(total_elapsed),
            },
            title="Scaffold Summary",
        )

        if self.state.get("success"):
            lines = [
                "[bold green]PROJECT READY[/bold green]",
                "",
                f"  cd {a.project_name}",
            ]
            if self.sink.exists(ENV_EXAMPLE):
                lines.append(f"  cp {ENV_EXAMPLE} .env   [dim]# then fill in your keys[/dim]")
            lines.append("  npm run dev")
            border_style = "bold green"
        else:
            failed = ", ".join(str(s) for s in self.state.get("steps_failed", []))
            lines = [
                "[bold red]SCAFFOLD FAILED[/bold red]",
                "",
                f"Failed step : {failed or '?'}",
                f"Output      : {self.project_root}",
                "Partial output was left on disk.",
            ]
            border_style = "bold red"

        console.print(
            Panel(
                "\n".join(lines),
                title="[bold]Next Steps[/bold]",
                border_style=border_style,
            )
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """CLI entry point for ``hyperstart`` and ``python -m hyperstart.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="hyperstart",
        description="Hyperstart -- interactive React project scaffolder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "All choices are made interactively.\n"
            "Environment:\n"
            "  HYPERSTART_OUTPUT_DIR  parent directory of the new project (default: .)\n"
            "  HYPERSTART_NPM         npm executable (default: npm)\n"
            "  HYPERSTART_NPX         npx executable (default: npx)\n"
            "  HYPERSTART_DRY_RUN     print external commands instead of running them\n"
            "  HYPERSTART_QUIET       do not list every file written\n"
        ),
    )
    parser.parse_args()

    config = Config.from_env()
    try:
        answers = collect_answers()
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_error("Aborted.")
        sys.exit(1)

    result = asyncio.run(Pipeline(config, answers).run())
    if not result.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
