"""Template composition engine.

Turns the selected feature template into page files and mounts them in the
root component.  Every ``Template`` member has exactly one branch; pages are
rendered from Jinja2 templates built out of the per-element macros in
``fragments/ui.j2``, so each element is emitted either as the component
library version or as the hand-styled version, never both.

The engine assumes the installers already ran: pages import hooks such as
``useAuth`` or ``useCheckout`` whenever the matching answer is set.
"""

from __future__ import annotations

import posixpath
from typing import Any

from pydantic import BaseModel, Field

from hyperstart.models import (
    AI_FEATURE_LABELS,
    AnswerSet,
    CssFramework,
    ExtraPackage,
    FirebaseService,
    Template,
)
from hyperstart.scaffolder.ai_saas import provider_entries
from hyperstart.scaffolder.css import BOOTSTRAP_CSS_IMPORT, bootstrap_cdn_head_jsx
from hyperstart.scaffolder.layout import ProjectLayout, ScaffoldError
from hyperstart.scaffolder.sink import FileSink
from hyperstart.scaffolder.templates import TemplateRenderer
from hyperstart.scaffolder.ui_kit import UiKit


class UnknownTemplateError(ScaffoldError):
    """Raised when a template has no composer branch."""

    def __init__(self, template: Any):
        self.template = template
        super().__init__(f"No composer branch for template {template!r}")


class Route(BaseModel):
    """One mounted page."""

    path: str = Field(..., description="URL path, e.g. '/settings'")
    component: str = Field(..., description="Page component name")
    file: str = Field(..., description="Page file relative to the project root")


class ComposeResult(BaseModel):
    """Files written and routes mounted by one composition."""

    template: Template
    files: list[str] = Field(default_factory=list)
    routes: list[Route] = Field(default_factory=list)


def relative_import(from_file: str, target_file: str) -> str:
    """Module specifier importing *target_file* from *from_file* (no extension)."""
    target = posixpath.splitext(target_file)[0]
    rel = posixpath.relpath(target, posixpath.dirname(from_file))
    return rel if rel.startswith(".") else f"./{rel}"


class TemplateComposer:
    """Writes the pages of one feature template and mounts them."""

    _BRANCHES: dict[Template, str] = {
        Template.BASIC: "_compose_basic",
        Template.DASHBOARD: "_compose_dashboard",
        Template.BLOG: "_compose_blog",
        Template.ECOMMERCE: "_compose_ecommerce",
        Template.LANDING: "_compose_landing",
        Template.AI_SAAS: "_compose_ai_saas",
        Template.SOCIAL: "_compose_social",
        Template.PROJECT_MGMT: "_compose_project_mgmt",
        Template.LEARNING: "_compose_learning",
    }

    def __init__(
        self,
        sink: FileSink,
        layout: ProjectLayout,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.sink = sink
        self.layout = layout
        self.renderer = renderer or TemplateRenderer()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def compose(self, answers: AnswerSet) -> ComposeResult:
        """Emit the pages of ``answers.template`` and mount them.

        Raises:
            UnknownTemplateError: if the template has no branch.
        """
        method_name = self._BRANCHES.get(answers.template)
        if method_name is None:
            raise UnknownTemplateError(answers.template)

        result = ComposeResult(template=answers.template)
        await getattr(self, method_name)(answers, result)
        if result.routes:
            await self._mount(answers, result)
        return result

    async def finalize(self, answers: AnswerSet) -> ComposeResult:
        """Overwrite the root component and entry point of a basic project.

        Runs after cleanup.  Other templates are left untouched.
        """
        result = ComposeResult(template=answers.template)
        if answers.template != Template.BASIC:
            return result

        root = self.layout.find_root_component(self.sink) or self.layout.root_component
        entry = self.layout.find_entry(self.sink) or self.layout.entry_file
        ctx = self.context(
            answers,
            entry_css=self._entry_css(answers, entry),
            cdn_head=bootstrap_cdn_head_jsx()
            if answers.css_framework == CssFramework.BOOTSTRAP_CDN
            else "",
            pwa_module=relative_import(root, "src/hooks/usePWA"),
            app_module=relative_import(entry, root),
        )

        kind = "vite" if self.layout.is_vite else "next"
        await self._render_page("basic/root.jsx.j2", root, answers, result, ctx)
        await self.renderer.render_to_sink(f"basic/{kind}-entry.jsx.j2", self.sink, entry, ctx)
        result.files.append(entry)
        return result

    def context(self, answers: AnswerSet, **extra: Any) -> dict[str, Any]:
        """Template context shared by every page."""
        return {
            "answers": answers,
            "project_name": answers.project_name,
            "template": answers.template.value,
            "css": answers.css_framework.value,
            "layout": self.layout,
            "header": f"{self.layout.client_directive}\n\n" if self.layout.client_directive else "",
            "env": self.layout.env_ref,
            "auth": answers.has_firebase(FirebaseService.AUTH),
            "database": answers.has_firebase(FirebaseService.DATABASE),
            "storage": answers.has_firebase(FirebaseService.STORAGE),
            "firebase_services": [s.value for s in answers.firebase_services],
            "payments": answers.payments_enabled,
            "pwa": answers.is_pwa,
            "icons": answers.has_package(ExtraPackage.REACT_ICONS),
            "axios": answers.has_package(ExtraPackage.AXIOS),
            "providers": provider_entries(answers.ai_providers),
            "features": [
                {"id": f.value, "label": AI_FEATURE_LABELS[f]} for f in answers.ai_features
            ],
            **extra,
        }

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    async def _compose_basic(self, answers: AnswerSet, result: ComposeResult) -> None:
        # Root component and entry are written by finalize() after cleanup.
        await self._ensure_dirs()

    async def _compose_dashboard(self, answers: AnswerSet, result: ComposeResult) -> None:
        await self._ensure_dirs("dashboard")
        await self._page(answers, result, "dashboard/Dashboard.jsx.j2", "Dashboard", "/")
        await self._page(answers, result, "dashboard/Settings.jsx.j2", "Settings", "/settings")

    async def _compose_blog(self, answers: AnswerSet, result: ComposeResult) -> None:
        await self._ensure_dirs("blog")
        await self._page(answers, result, "blog/Blog.jsx.j2", "Blog", "/")

    async def _compose_ecommerce(self, answers: AnswerSet, result: ComposeResult) -> None:
        await self._ensure_dirs("shop")
        await self._page(answers, result, "ecommerce/Shop.jsx.j2", "Shop", "/")

    async def _compose_landing(self, answers: AnswerSet, result: ComposeResult) -> None:
        await self._ensure_dirs("landing")
        await self._page(answers, result, "landing/Landing.jsx.j2", "Landing", "/")

    async def _compose_ai_saas(self, answers: AnswerSet, result: ComposeResult) -> None:
        await self._ensure_dirs("studio")
        await self._page(answers, result, "ai-saas/AIStudio.jsx.j2", "AIStudio", "/")
        if answers.payments_enabled:
            await self._page(answers, result, "ai-saas/Pricing.jsx.j2", "Pricing", "/pricing")

    async def _compose_social(self, answers: AnswerSet, result: ComposeResult) -> None:
        await self._ensure_dirs("feed")
        await self._page(answers, result, "social/Feed.jsx.j2", "Feed", "/")

    async def _compose_project_mgmt(self, answers: AnswerSet, result: ComposeResult) -> None:
        await self._ensure_dirs("board")
        await self._page(answers, result, "project-mgmt/Board.jsx.j2", "Board", "/")

    async def _compose_learning(self, answers: AnswerSet, result: ComposeResult) -> None:
        await self._ensure_dirs("courses")
        await self._page(answers, result, "learning/Courses.jsx.j2", "Courses", "/")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _ensure_dirs(self, component_group: str | None = None) -> None:
        await self.sink.mkdir(self.layout.pages_dir)
        await self.sink.mkdir("src/components")
        if component_group:
            await self.sink.mkdir(f"src/components/{component_group}")

    async def _page(
        self,
        answers: AnswerSet,
        result: ComposeResult,
        template: str,
        component: str,
        path: str,
    ) -> None:
        rel_path = self.layout.page_path(component)
        ctx = self.context(answers, component=component)
        await self._render_page(f"pages/{template}", rel_path, answers, result, ctx)
        result.routes.append(Route(path=path, component=component, file=rel_path))

    async def _render_page(
        self,
        template: str,
        rel_path: str,
        answers: AnswerSet,
        result: ComposeResult,
        ctx: dict[str, Any],
    ) -> None:
        """Render *template* twice: once to collect library usage, once for real."""
        kit = UiKit(answers.uses_component_library, answers.component_library_components)
        page_ctx = {**ctx, "kit": kit}
        self.renderer.render(template, page_ctx)
        kit.seal()
        await self.renderer.render_to_sink(template, self.sink, rel_path, page_ctx)
        result.files.append(rel_path)

    async def _mount(self, answers: AnswerSet, result: ComposeResult) -> None:
        if self.layout.is_vite:
            root = self.layout.find_root_component(self.sink) or self.layout.root_component
            routes = [
                {"path": r.path, "component": r.component, "module": relative_import(root, r.file)}
                for r in result.routes
            ]
            await self.renderer.render_to_sink(
                "root/App.jsx.j2",
                self.sink,
                root,
                self.context(answers, routes=routes, auth_module=relative_import(root, "src/hooks/useAuth")),
            )
            result.files.append(root)
            return

        for route in result.routes:
            target = self._next_route_file(route.path)
            ctx = self.context(
                answers,
                route={"component": route.component, "module": relative_import(target, route.file)},
                auth_module=relative_import(target, "src/hooks/useAuth"),
            )
            await self.renderer.render_to_sink("root/page.js.j2", self.sink, target, ctx)
            result.files.append(target)

    def _next_route_file(self, path: str) -> str:
        segment = path.strip("/")
        if not segment:
            return self.layout.root_component
        app_dir = posixpath.dirname(self.layout.root_component)
        return f"{app_dir}/{segment}/page.js"

    def _entry_css(self, answers: AnswerSet, entry: str) -> str:
        """Import line the basic entry point needs for the CSS framework."""
        if answers.uses_tailwind:
            sheet = relative_import(entry, self.layout.global_stylesheet)
            return f"import '{sheet}.css';"
        if answers.css_framework == CssFramework.BOOTSTRAP_PACKAGE:
            return BOOTSTRAP_CSS_IMPORT
        return ""

