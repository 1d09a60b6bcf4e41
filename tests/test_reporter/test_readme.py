"""Unit tests for the README generator (hyperstart.reporter.readme).

Tests cover:
- build_context() labels and lists
- Sections appear only for selected features
- Env keys are read back from .env.example
- Pages table from composed routes
- Framework-specific scripts
"""

from __future__ import annotations

import pytest

from hyperstart.models import (
    AIFeature,
    AIProvider,
    AnswerSet,
    CssFramework,
    ExtraPackage,
    FirebaseService,
    Framework,
    Template,
)
from hyperstart.reporter.readme import README, ReadmeGenerator
from hyperstart.scaffolder.composer import Route
from hyperstart.scaffolder.env import ENV_EXAMPLE
from hyperstart.scaffolder.layout import get_layout
from hyperstart.scaffolder.sink import FileSink
from hyperstart.scaffolder.templates import TemplateRenderer


@pytest.fixture
def generator(renderer: TemplateRenderer) -> ReadmeGenerator:
    return ReadmeGenerator(renderer)


# ---------------------------------------------------------------------------
# build_context
# ---------------------------------------------------------------------------

class TestBuildContext:
    @pytest.mark.unit
    def test_labels(self):
        answers = AnswerSet(
            project_name="shop",
            template=Template.ECOMMERCE,
            css_framework=CssFramework.MUI,
            extra_packages=[ExtraPackage.AXIOS],
        )
        ctx = ReadmeGenerator.build_context(answers, get_layout(Framework.NEXTLIKE))
        assert ctx["framework_label"] == "Next.js"
        assert ctx["template_label"] == "E-commerce"
        assert ctx["css_label"] == "MUI"
        assert ctx["package_names"] == ["axios"]
        assert ctx["providers"] == []
        assert ctx["env_keys"] == []


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class TestRender:
    @pytest.mark.unit
    async def test_minimal(self, generator: ReadmeGenerator, vite_sink: FileSink):
        answers = AnswerSet(project_name="plain", css_framework=CssFramework.BOOTSTRAP_CDN)
        path = await generator.render(vite_sink, answers, get_layout(Framework.VITE))

        assert path == README
        text = await vite_sink.read_text(README)
        assert text.startswith("# plain\n")
        assert "| Framework | Vite |" in text
        assert "Bootstrap 5.3.3 is loaded from the jsDelivr CDN" in text
        for heading in ("## Firebase", "## AI Backend", "## Payments", "## Progressive Web App",
                        "## Extra Packages", "## Environment Variables", "## Pages"):
            assert heading not in text
        assert "cp .env.example" not in text
        assert "npm run preview" in text

    @pytest.mark.unit
    async def test_full(self, generator: ReadmeGenerator, next_sink: FileSink):
        await next_sink.write(
            ENV_EXAMPLE,
            "# Firebase\nNEXT_PUBLIC_FIREBASE_API_KEY=x\n\n# Supabase\nOPENAI_API_KEY=y\n",
        )
        answers = AnswerSet(
            project_name="studio",
            framework=Framework.NEXTLIKE,
            template=Template.AI_SAAS,
            css_framework=CssFramework.TAILWIND_SHADCN,
            component_library_components=["button", "card"],
            firebase_services=[FirebaseService.AUTH, FirebaseService.STORAGE],
            ai_providers=[AIProvider.OPENAI],
            ai_features=[AIFeature.CHAT],
            include_payments=True,
            is_pwa=True,
            extra_packages=[ExtraPackage.AXIOS],
        )
        routes = [
            Route(path="/", component="AIStudio", file="src/views/AIStudio.js"),
            Route(path="/pricing", component="Pricing", file="src/views/Pricing.js"),
        ]
        await generator.render(next_sink, answers, get_layout(Framework.NEXTLIKE), routes)
        text = await next_sink.read_text(README)

        assert "| Firebase | auth, storage |" in text
        assert "### Authentication" in text
        assert "### Firestore" not in text
        assert "### Storage" in text
        assert "supabase secrets set OPENAI_API_KEY=..." in text
        assert "for: Chat" in text
        assert "## Payments (Stripe)" in text
        assert "src/app/manifest.js" in text
        assert "Installed components: button, card." in text
        assert "src/utils/axiosInstance.js" in text
        assert "| `/pricing` | `src/views/Pricing.js` |" in text
        assert "- `NEXT_PUBLIC_FIREBASE_API_KEY`" in text
        assert "- `OPENAI_API_KEY`" in text
        assert "cp .env.example .env" in text
        assert "npm start" in text
        assert "npm run preview" not in text

    @pytest.mark.unit
    async def test_vite_pwa(self, generator: ReadmeGenerator, vite_sink: FileSink):
        answers = AnswerSet(project_name="offline", is_pwa=True)
        await generator.render(vite_sink, answers, get_layout(Framework.VITE))
        text = await vite_sink.read_text(README)
        assert "`vite-plugin-pwa` generates the service worker" in text
        assert "Tailwind CSS" in text
