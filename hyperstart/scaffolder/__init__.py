"""Hyperstart scaffolder -- installers and the template composition engine.

Everything here writes through one ``FileSink`` bound to the project root
and asks a ``ProjectLayout`` where framework-specific files live.

Quick usage::

    from hyperstart.scaffolder import FileSink, TemplateComposer, get_layout

    sink = FileSink("./my-app")
    composer = TemplateComposer(sink, get_layout(answers.framework))
    result = await composer.compose(answers)
"""

from hyperstart.scaffolder.ai_saas import AISaasInstaller
from hyperstart.scaffolder.cleanup import CleanupResult, cleanup
from hyperstart.scaffolder.component_library import ComponentLibraryInstaller
from hyperstart.scaffolder.composer import (
    ComposeResult,
    Route,
    TemplateComposer,
    UnknownTemplateError,
)
from hyperstart.scaffolder.css import CssInstaller
from hyperstart.scaffolder.extras import ExtrasInstaller
from hyperstart.scaffolder.firebase import FirebaseInstaller
from hyperstart.scaffolder.installer import InstallResult
from hyperstart.scaffolder.layout import ProjectLayout, ScaffoldError, get_layout
from hyperstart.scaffolder.payments import PaymentsInstaller
from hyperstart.scaffolder.pwa import PwaInstaller
from hyperstart.scaffolder.sink import FileSink, SinkAction, SinkReport
from hyperstart.scaffolder.templates import TemplateRenderer

__all__ = [
    "AISaasInstaller",
    "CleanupResult",
    "ComponentLibraryInstaller",
    "ComposeResult",
    "CssInstaller",
    "ExtrasInstaller",
    "FileSink",
    "FirebaseInstaller",
    "InstallResult",
    "PaymentsInstaller",
    "ProjectLayout",
    "PwaInstaller",
    "Route",
    "ScaffoldError",
    "SinkAction",
    "SinkReport",
    "TemplateComposer",
    "TemplateRenderer",
    "UnknownTemplateError",
    "cleanup",
    "get_layout",
]
