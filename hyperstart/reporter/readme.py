"""README generator for the scaffolded project.

Renders ``README.md`` from the answers: one section per selected feature and
nothing about features that were not selected.  Environment keys are read
back from ``.env.example`` so the README lists exactly what the installers
wrote.
"""

from __future__ import annotations

from collections.abc import Iterable

from hyperstart.models import (
    AI_FEATURE_LABELS,
    CSS_LABELS,
    FRAMEWORK_LABELS,
    PACKAGE_DESCRIPTIONS,
    TEMPLATE_LABELS,
    AnswerSet,
)
from hyperstart.scaffolder.ai_saas import provider_entries
from hyperstart.scaffolder.composer import Route
from hyperstart.scaffolder.env import ENV_EXAMPLE, parse_env_keys
from hyperstart.scaffolder.layout import ProjectLayout
from hyperstart.scaffolder.sink import FileSink
from hyperstart.scaffolder.templates import TemplateRenderer

README = "README.md"


class ReadmeGenerator:
    """Writes ``README.md`` describing the generated project."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    async def render(
        self,
        sink: FileSink,
        answers: AnswerSet,
        layout: ProjectLayout,
        routes: Iterable[Route] = (),
    ) -> str:
        """Render the README into *sink* and return its relative path."""
        env_keys: list[str] = []
        if sink.exists(ENV_EXAMPLE):
            env_keys = parse_env_keys(await sink.read_text(ENV_EXAMPLE))

        context = self.build_context(answers, layout, routes, env_keys)
        return await self.renderer.render_to_sink("readme/README.md.j2", sink, README, context)

    @staticmethod
    def build_context(
        answers: AnswerSet,
        layout: ProjectLayout,
        routes: Iterable[Route] = (),
        env_keys: Iterable[str] = (),
    ) -> dict:
        return {
            "project_name": answers.project_name,
            "layout": layout,
            "framework_label": FRAMEWORK_LABELS[layout.framework],
            "template_label": TEMPLATE_LABELS[answers.template],
            "css": answers.css_framework.value,
            "css_label": CSS_LABELS[answers.css_framework],
            "components": list(answers.component_library_components),
            "firebase_services": [s.value for s in answers.firebase_services],
            "providers": provider_entries(answers.ai_providers),
            "features": [{"label": AI_FEATURE_LABELS[f]} for f in answers.ai_features],
            "payments": answers.payments_enabled,
            "pwa": answers.is_pwa,
            "packages": [
                {"name": p.value, "description": PACKAGE_DESCRIPTIONS[p]}
                for p in answers.extra_packages
            ],
            "package_names": [p.value for p in answers.extra_packages],
            "routes": list(routes),
            "env_keys": list(env_keys),
        }
