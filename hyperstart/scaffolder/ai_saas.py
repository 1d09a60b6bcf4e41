"""AI-SaaS backend installer.

Sets up a Supabase backend for the ``ai-saas`` template: the Supabase client,
an AI client module and an edge function that only know about the providers
the user picked, the database schema with row-level security, and the
``useAIGeneration`` hook the studio page calls.
"""

from __future__ import annotations

from collections.abc import Iterable

from hyperstart.models import AI_PROVIDER_LABELS, AIFeature, AIProvider
from hyperstart.scaffolder.installer import BaseInstaller, InstallResult

SUPABASE_ENV: dict[str, str] = {
    "SUPABASE_URL": "https://your-project.supabase.co",
    "SUPABASE_ANON_KEY": "your-anon-key",
}

# Server-side only; never exposed with the public prefix.
PROVIDER_ENV: dict[AIProvider, str] = {
    AIProvider.OPENAI: "OPENAI_API_KEY",
    AIProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    AIProvider.GEMINI: "GEMINI_API_KEY",
}

PROVIDER_MODELS: dict[AIProvider, str] = {
    AIProvider.OPENAI: "gpt-4o-mini",
    AIProvider.ANTHROPIC: "claude-3-5-haiku-latest",
    AIProvider.GEMINI: "gemini-1.5-flash",
}


def provider_entries(providers: Iterable[AIProvider]) -> list[dict[str, str]]:
    """Template-friendly description of each selected provider."""
    selected = set(providers)
    return [
        {
            "id": provider.value,
            "label": AI_PROVIDER_LABELS[provider],
            "model": PROVIDER_MODELS[provider],
            "env_key": PROVIDER_ENV[provider],
        }
        for provider in AIProvider
        if provider in selected
    ]


class AISaasInstaller(BaseInstaller):
    """Installs the Supabase + AI provider backend."""

    name = "ai-saas"

    async def install(
        self,
        providers: Iterable[AIProvider],
        features: Iterable[AIFeature] = (),
        *,
        payments: bool = False,
    ) -> InstallResult:
        entries = provider_entries(providers)
        result, mark = self._start()
        if not entries:
            return result

        await self.install_packages(result, ["@supabase/supabase-js"])

        ctx = {
            "providers": entries,
            "features": [f.value for f in AIFeature if f in set(features)],
            "payments": payments,
        }
        await self.render("ai/supabase.js.j2", "src/lib/supabase.js", **ctx)
        await self.merge_env(
            result,
            "Supabase / AI providers",
            SUPABASE_ENV,
            {entry["env_key"]: f"your-{entry['id']}-api-key" for entry in entries},
        )
        await self.render("ai/ai.js.j2", "src/lib/ai.js", **ctx)
        await self.render("ai/schema.sql.j2", "supabase/schema.sql", **ctx)
        await self.render("ai/generate.ts.j2", "supabase/functions/generate/index.ts", **ctx)
        await self.render("ai/useAIGeneration.js.j2", "src/hooks/useAIGeneration.js", **ctx)

        return self._finish(result, mark)
