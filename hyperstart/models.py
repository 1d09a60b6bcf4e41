"""Pydantic v2 models for the answers collected by the Hyperstart CLI.

Defines the enumerations for every closed choice offered to the user and the
immutable ``AnswerSet`` consumed by every installer, the template composer
and the README generator.  Conditional answers are normalised when the model
is built, so downstream code never sees a value that is meaningless for the
chosen template or CSS framework.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Framework(str, Enum):
    """Base scaffold tool and file layout conventions."""
    VITE = "vite"
    NEXTLIKE = "nextlike"


class Template(str, Enum):
    """Feature template applied on top of the base scaffold."""
    BASIC = "basic"
    DASHBOARD = "dashboard"
    BLOG = "blog"
    ECOMMERCE = "ecommerce"
    LANDING = "landing"
    AI_SAAS = "ai-saas"
    SOCIAL = "social"
    PROJECT_MGMT = "project-mgmt"
    LEARNING = "learning"


class CssFramework(str, Enum):
    """Styling stack wired into the generated project."""
    TAILWIND = "tailwind"
    TAILWIND_SHADCN = "tailwind+shadcn"
    BOOTSTRAP_CDN = "bootstrap-cdn"
    BOOTSTRAP_PACKAGE = "bootstrap-package"
    MUI = "mui"


class FirebaseService(str, Enum):
    """Independently toggleable Firebase sub-services."""
    AUTH = "auth"
    DATABASE = "database"
    STORAGE = "storage"


class AIProvider(str, Enum):
    """AI providers the AI-SaaS template can call."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"


class AIFeature(str, Enum):
    """Descriptive AI capabilities; they only label generated UI."""
    CHAT = "chat"
    TEXT_GENERATION = "text-generation"
    IMAGE_GENERATION = "image-generation"
    SUMMARIZATION = "summarization"
    CODE_GENERATION = "code-generation"


class ExtraPackage(str, Enum):
    """Optional npm packages offered during setup."""
    AXIOS = "axios"
    REACT_ICONS = "react-icons"
    REACT_HOOK_FORM = "react-hook-form"
    YUP = "yup"
    FORMIK = "formik"
    MOMENT = "moment"


# ---------------------------------------------------------------------------
# Display metadata
# ---------------------------------------------------------------------------

FRAMEWORK_LABELS: dict[Framework, str] = {
    Framework.VITE: "Vite",
    Framework.NEXTLIKE: "Next.js",
}

TEMPLATE_LABELS: dict[Template, str] = {
    Template.BASIC: "Basic",
    Template.DASHBOARD: "Dashboard",
    Template.BLOG: "Blog",
    Template.ECOMMERCE: "E-commerce",
    Template.LANDING: "Landing Page",
    Template.AI_SAAS: "AI SaaS",
    Template.SOCIAL: "Social Feed",
    Template.PROJECT_MGMT: "Project Management",
    Template.LEARNING: "Learning Platform",
}

CSS_LABELS: dict[CssFramework, str] = {
    CssFramework.TAILWIND: "Tailwind CSS",
    CssFramework.TAILWIND_SHADCN: "Tailwind CSS + shadcn/ui",
    CssFramework.BOOTSTRAP_CDN: "Bootstrap (CDN)",
    CssFramework.BOOTSTRAP_PACKAGE: "React Bootstrap",
    CssFramework.MUI: "MUI",
}

AI_PROVIDER_LABELS: dict[AIProvider, str] = {
    AIProvider.OPENAI: "OpenAI",
    AIProvider.ANTHROPIC: "Anthropic",
    AIProvider.GEMINI: "Google Gemini",
}

AI_FEATURE_LABELS: dict[AIFeature, str] = {
    AIFeature.CHAT: "Chat Assistant",
    AIFeature.TEXT_GENERATION: "Text Generation",
    AIFeature.IMAGE_GENERATION: "Image Generation",
    AIFeature.SUMMARIZATION: "Summarization",
    AIFeature.CODE_GENERATION: "Code Generation",
}

PACKAGE_DESCRIPTIONS: dict[ExtraPackage, str] = {
    ExtraPackage.AXIOS: "HTTP client for API requests",
    ExtraPackage.REACT_ICONS: "Popular icon library",
    ExtraPackage.REACT_HOOK_FORM: "Performant forms library",
    ExtraPackage.YUP: "Schema validation library",
    ExtraPackage.FORMIK: "Form management library",
    ExtraPackage.MOMENT: "Date manipulation library",
}

# Component names offered for shadcn/ui, in prompt order.
COMPONENT_LIBRARY_CATALOG: tuple[str, ...] = (
    "button",
    "card",
    "input",
    "select",
    "textarea",
    "badge",
    "progress",
    "avatar",
)

PAYMENT_TEMPLATES: frozenset[Template] = frozenset(
    {Template.AI_SAAS, Template.ECOMMERCE, Template.LEARNING}
)

_COMPONENT_NAME_RE = re.compile(r"^[a-z][a-z0-9-]*$")
_FORBIDDEN_NAME_CHARS = ("/", "\\", "\x00")


# ---------------------------------------------------------------------------
# Answer Set
# ---------------------------------------------------------------------------

def _ordered(values: Any, enum_cls: type[Enum]) -> tuple[Any, ...]:
    """Deduplicate *values* and order them by enum declaration order."""
    if values is None:
        return ()
    if isinstance(values, (str, Enum)):
        values = [values]
    wanted = {enum_cls(v) for v in values}
    return tuple(member for member in enum_cls if member in wanted)


def _raw(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class AnswerSet(BaseModel):
    """The complete, immutable configuration gathered before generation.

    Multi-select answers have set semantics: they are deduplicated and kept
    in a canonical order so generated files are deterministic.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Directory name and display name")
    framework: Framework = Field(default=Framework.VITE)
    template: Template = Field(default=Template.BASIC)
    css_framework: CssFramework = Field(default=CssFramework.TAILWIND)
    firebase_services: tuple[FirebaseService, ...] = Field(default=())
    component_library_components: tuple[str, ...] = Field(default=())
    ai_providers: tuple[AIProvider, ...] = Field(default=())
    ai_features: tuple[AIFeature, ...] = Field(default=())
    include_payments: bool = Field(default=False)
    is_pwa: bool = Field(default=False)
    extra_packages: tuple[ExtraPackage, ...] = Field(default=())

    @model_validator(mode="before")
    @classmethod
    def _drop_meaningless_answers(cls, data: Any) -> Any:
        """Clear answers that only apply to other templates or CSS stacks."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        template = _raw(data.get("template", Template.BASIC.value))
        css = _raw(data.get("css_framework", CssFramework.TAILWIND.value))

        if css != CssFramework.TAILWIND_SHADCN.value:
            data["component_library_components"] = ()
        if template != Template.AI_SAAS.value:
            data["ai_providers"] = ()
            data["ai_features"] = ()
        if template not in {t.value for t in PAYMENT_TEMPLATES}:
            data["include_payments"] = False
        return data

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("project name must not be empty")
        if name in {".", ".."} or any(ch in name for ch in _FORBIDDEN_NAME_CHARS):
            raise ValueError(
                f"project name {value!r} must be a single directory name"
            )
        return name

    @field_validator("firebase_services", mode="before")
    @classmethod
    def _order_firebase(cls, value: Any) -> tuple[FirebaseService, ...]:
        return _ordered(value, FirebaseService)

    @field_validator("ai_providers", mode="before")
    @classmethod
    def _order_providers(cls, value: Any) -> tuple[AIProvider, ...]:
        return _ordered(value, AIProvider)

    @field_validator("ai_features", mode="before")
    @classmethod
    def _order_features(cls, value: Any) -> tuple[AIFeature, ...]:
        return _ordered(value, AIFeature)

    @field_validator("extra_packages", mode="before")
    @classmethod
    def _order_packages(cls, value: Any) -> tuple[ExtraPackage, ...]:
        return _ordered(value, ExtraPackage)

    @field_validator("component_library_components", mode="before")
    @classmethod
    def _order_components(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        names = {str(v).strip().lower() for v in value if str(v).strip()}
        for name in names:
            if not _COMPONENT_NAME_RE.match(name):
                raise ValueError(f"invalid component name: {name!r}")
        known = [c for c in COMPONENT_LIBRARY_CATALOG if c in names]
        extra = sorted(names - set(COMPONENT_LIBRARY_CATALOG))
        return tuple(known + extra)

    # -- Convenience predicates ------------------------------------------

    @property
    def uses_component_library(self) -> bool:
        return self.css_framework == CssFramework.TAILWIND_SHADCN

    @property
    def uses_tailwind(self) -> bool:
        return self.css_framework in (CssFramework.TAILWIND, CssFramework.TAILWIND_SHADCN)

    @property
    def payments_enabled(self) -> bool:
        return self.include_payments

    def has_firebase(self, service: FirebaseService) -> bool:
        return service in self.firebase_services

    def has_package(self, package: ExtraPackage) -> bool:
        return package in self.extra_packages
