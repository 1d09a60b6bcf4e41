"""Interactive answer collection.

Asks the setup questions in a fixed order and builds one immutable
``AnswerSet``.  Some questions are only shown when an earlier answer makes
them meaningful (component picks for shadcn/ui, providers and features for
the AI SaaS template, payments for templates that sell something).

The ``ask`` and ``confirm`` callables default to Rich's ``Prompt.ask`` and
``Confirm.ask``; tests inject scripted replacements.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any, TypeVar

from pydantic import ValidationError
from rich.prompt import Confirm, Prompt

from hyperstart.models import (
    AI_FEATURE_LABELS,
    AI_PROVIDER_LABELS,
    COMPONENT_LIBRARY_CATALOG,
    CSS_LABELS,
    FRAMEWORK_LABELS,
    PACKAGE_DESCRIPTIONS,
    PAYMENT_TEMPLATES,
    TEMPLATE_LABELS,
    AIFeature,
    AIProvider,
    AnswerSet,
    CssFramework,
    ExtraPackage,
    FirebaseService,
    Framework,
    Template,
)
from hyperstart.utils import console, print_error

E = TypeVar("E", bound=Enum)

FIREBASE_LABELS: dict[FirebaseService, str] = {
    FirebaseService.AUTH: "Authentication",
    FirebaseService.DATABASE: "Firestore database",
    FirebaseService.STORAGE: "Cloud Storage",
}

DEFAULT_PROJECT_NAME = "my-app"


def parse_selection(raw: str, count: int) -> list[int]:
    """Parse a comma-separated list of 1-based option numbers.

    ``""`` selects nothing and ``"all"`` selects every option.  The result is
    a sorted list of 0-based indexes without duplicates.

    Raises:
        ValueError: for anything that is not a number in ``1..count``.
    """
    text = raw.strip().lower()
    if not text:
        return []
    if text in {"all", "a", "*"}:
        return list(range(count))

    picked: set[int] = set()
    for part in text.replace(" ", ",").split(","):
        if not part:
            continue
        if not part.isdigit():
            raise ValueError(f"'{part}' is not an option number")
        number = int(part)
        if not 1 <= number <= count:
            raise ValueError(f"{number} is out of range (1-{count})")
        picked.add(number - 1)
    return sorted(picked)


class AnswerCollector:
    """Asks the setup questions and returns a validated ``AnswerSet``."""

    def __init__(
        self,
        ask: Callable[..., str] | None = None,
        confirm: Callable[..., bool] | None = None,
    ) -> None:
        self.ask = ask or Prompt.ask
        self.confirm = confirm or Confirm.ask

    def collect(self) -> AnswerSet:
        answers: dict[str, Any] = {"project_name": self.ask_project_name()}
        answers["framework"] = self.choose("Framework", Framework, FRAMEWORK_LABELS)
        answers["template"] = self.choose("Template", Template, TEMPLATE_LABELS)
        answers["css_framework"] = self.choose("CSS framework", CssFramework, CSS_LABELS)

        if answers["css_framework"] == CssFramework.TAILWIND_SHADCN:
            answers["component_library_components"] = self.choose_many(
                "shadcn/ui components",
                [(c, c) for c in COMPONENT_LIBRARY_CATALOG],
                default="all",
            )

        answers["firebase_services"] = self.choose_many(
            "Firebase services",
            [(s, FIREBASE_LABELS[s]) for s in FirebaseService],
        )

        if answers["template"] == Template.AI_SAAS:
            answers["ai_providers"] = self.choose_many(
                "AI providers",
                [(p, AI_PROVIDER_LABELS[p]) for p in AIProvider],
                default="1",
            )
            answers["ai_features"] = self.choose_many(
                "AI features",
                [(f, AI_FEATURE_LABELS[f]) for f in AIFeature],
            )

        if answers["template"] in PAYMENT_TEMPLATES:
            answers["include_payments"] = self.confirm(
                "Add Stripe payments?", default=False
            )

        answers["is_pwa"] = self.confirm("Make it a Progressive Web App?", default=False)
        answers["extra_packages"] = self.choose_many(
            "Extra packages",
            [(p, f"{p.value} - {PACKAGE_DESCRIPTIONS[p]}") for p in ExtraPackage],
        )
        return AnswerSet(**answers)

    # ------------------------------------------------------------------
    # Question helpers
    # ------------------------------------------------------------------

    def ask_project_name(self) -> str:
        """Ask until the name is usable as a single directory name."""
        while True:
            raw = self.ask("[bold]Project name[/bold]", default=DEFAULT_PROJECT_NAME)
            try:
                return AnswerSet(project_name=raw).project_name
            except ValidationError as exc:
                print_error(_first_error(exc))

    def choose(self, title: str, enum_cls: type[E], labels: dict[E, str]) -> E:
        """Single choice by option number; the first option is the default."""
        options = list(enum_cls)
        _print_options(title, [labels[o] for o in options])
        raw = self.ask(
            f"[bold]{title}[/bold]",
            choices=[str(i) for i in range(1, len(options) + 1)],
            default="1",
        )
        return options[int(raw) - 1]

    def choose_many(
        self,
        title: str,
        options: Sequence[tuple[Any, str]],
        default: str = "",
    ) -> list[Any]:
        """Multi-select by comma-separated option numbers; re-asks on bad input."""
        _print_options(title, [label for _, label in options])
        while True:
            raw = self.ask(
                f"[bold]{title}[/bold] (comma-separated numbers, 'all' or blank)",
                default=default,
                show_default=bool(default),
            )
            try:
                indexes = parse_selection(raw, len(options))
            except ValueError as exc:
                print_error(str(exc))
                continue
            return [options[i][0] for i in indexes]


def collect_answers() -> AnswerSet:
    """Run the interactive questionnaire on the terminal."""
    return AnswerCollector().collect()


def _print_options(title: str, labels: Sequence[str]) -> None:
    console.print()
    console.print(f"[bold cyan]{title}[/bold cyan]")
    for number, label in enumerate(labels, start=1):
        console.print(f"  [cyan]{number}[/cyan]. {label}")


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    return str(errors[0].get("msg", exc))
