"""Tests for the AI-SaaS backend installer (hyperstart.scaffolder.ai_saas).

Covers:
- provider_entries ordering and metadata
- No providers means no writes and no installs
- AI config, edge function and schema only reference the selected providers
- Subscriptions table only with payments
- Env keys: public Supabase keys plus server-only provider keys
"""

from __future__ import annotations

import pytest

from hyperstart.models import AIFeature, AIProvider, Framework
from hyperstart.scaffolder.ai_saas import AISaasInstaller, provider_entries
from hyperstart.scaffolder.env import ENV_EXAMPLE, parse_env_keys
from hyperstart.scaffolder.layout import get_layout
from hyperstart.scaffolder.sink import FileSink
from hyperstart.utils import CommandRunner

pytestmark = pytest.mark.unit


def _installer(sink: FileSink, runner: CommandRunner, framework=Framework.VITE) -> AISaasInstaller:
    return AISaasInstaller(sink, get_layout(framework), runner)


class TestProviderEntries:
    def test_enum_order(self):
        entries = provider_entries([AIProvider.GEMINI, AIProvider.OPENAI])
        assert [e["id"] for e in entries] == ["openai", "gemini"]

    def test_metadata(self):
        (entry,) = provider_entries([AIProvider.ANTHROPIC])
        assert entry["label"] == "Anthropic"
        assert entry["env_key"] == "ANTHROPIC_API_KEY"
        assert entry["model"]

    def test_empty(self):
        assert provider_entries([]) == []


class TestAISaasInstaller:
    async def test_no_providers_is_noop(self, vite_sink: FileSink, runner: CommandRunner):
        result = await _installer(vite_sink, runner).install([], [AIFeature.CHAT])
        assert result.skipped
        assert vite_sink.report.entries == []
        assert runner.history == []

    async def test_openai_only(self, vite_sink: FileSink, runner: CommandRunner):
        result = await _installer(vite_sink, runner).install(
            [AIProvider.OPENAI], [AIFeature.SUMMARIZATION, AIFeature.CHAT]
        )

        assert result.packages == ["@supabase/supabase-js"]
        ai = await vite_sink.read_text("src/lib/ai.js")
        assert '"openai"' in ai
        assert "anthropic" not in ai.lower()
        assert "gemini" not in ai.lower()
        assert 'export const AI_FEATURES = ["chat", "summarization"];' in ai
        assert 'export const DEFAULT_PROVIDER = "openai";' in ai

        edge = await vite_sink.read_text("supabase/functions/generate/index.ts")
        assert "callOpenAI" in edge
        assert "callAnthropic" not in edge
        assert "callGemini" not in edge

        schema = await vite_sink.read_text("supabase/schema.sql")
        assert "public.profiles" in schema
        assert "public.generations" in schema
        assert "check (provider in ('openai'))" in schema
        assert "subscriptions" not in schema

        assert vite_sink.exists("src/lib/supabase.js")
        assert vite_sink.exists("src/hooks/useAIGeneration.js")

    async def test_payments_adds_subscriptions(self, vite_sink: FileSink, runner: CommandRunner):
        await _installer(vite_sink, runner).install([AIProvider.ANTHROPIC], payments=True)
        schema = await vite_sink.read_text("supabase/schema.sql")
        assert "public.subscriptions" in schema

    async def test_env_keys(self, vite_sink: FileSink, runner: CommandRunner):
        result = await _installer(vite_sink, runner).install(
            [AIProvider.OPENAI, AIProvider.GEMINI]
        )
        keys = parse_env_keys(await vite_sink.read_text(ENV_EXAMPLE))
        assert keys == [
            "VITE_SUPABASE_URL",
            "VITE_SUPABASE_ANON_KEY",
            "OPENAI_API_KEY",
            "GEMINI_API_KEY",
        ]
        assert result.env_keys == keys

    async def test_next_public_prefix(self, next_sink: FileSink, runner: CommandRunner):
        await _installer(next_sink, runner, Framework.NEXTLIKE).install([AIProvider.OPENAI])
        supabase = await next_sink.read_text("src/lib/supabase.js")
        assert "process.env.NEXT_PUBLIC_SUPABASE_URL" in supabase
        keys = parse_env_keys(await next_sink.read_text(ENV_EXAMPLE))
        assert "NEXT_PUBLIC_SUPABASE_ANON_KEY" in keys
        assert "OPENAI_API_KEY" in keys
