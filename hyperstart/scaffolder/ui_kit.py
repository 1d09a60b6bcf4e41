"""Per-element component-library gating for page templates.

Page templates render their UI through the macros in ``fragments/ui.j2``.
Each macro asks the kit whether the library version of its element is
available and, if so, registers the named exports it uses.  A page is
rendered twice: the first pass only collects usage, then the kit is sealed
and the second pass emits the import block for exactly those exports.
"""

from __future__ import annotations

from collections.abc import Iterable

from hyperstart.scaffolder.component_library import COMPONENT_EXPORTS, UI_IMPORT_ROOT


class UiKit:
    """Tracks which library components one page renders."""

    def __init__(self, library_active: bool = False, installed: Iterable[str] = ()) -> None:
        self.library_active = library_active
        self.installed = frozenset(installed) if library_active else frozenset()
        self._used: dict[str, set[str]] = {}
        self._sealed = False

    def active(self, component: str) -> bool:
        """True when *component* should render as the library version."""
        return component in self.installed

    def use(self, component: str, *exports: str) -> str:
        """Record that the page renders *exports* of *component*.

        Returns an empty string so templates can call it inline.
        """
        if not self.active(component):
            raise ValueError(f"Component {component!r} is not installed")
        if not self._sealed:
            known = COMPONENT_EXPORTS.get(component)
            unknown = [e for e in exports if known is not None and e not in known]
            if unknown:
                raise ValueError(f"{component!r} has no export(s) {', '.join(unknown)}")
            self._used.setdefault(component, set()).update(exports)
        return ""

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def used_components(self) -> list[str]:
        return [c for c in _component_order(self._used) if self._used[c]]

    def imports(self) -> str:
        """Import block for the recorded exports (empty until sealed)."""
        if not self._sealed:
            return ""
        lines = []
        for component in self.used_components():
            order = COMPONENT_EXPORTS.get(component, ())
            names = sorted(self._used[component], key=lambda n: (n not in order, _index(order, n), n))
            lines.append(f"import {{ {', '.join(names)} }} from '{UI_IMPORT_ROOT}/{component}';\n")
        return "".join(lines)


def _index(order: tuple[str, ...], name: str) -> int:
    return order.index(name) if name in order else len(order)


def _component_order(used: dict[str, set[str]]) -> list[str]:
    catalog = list(COMPONENT_EXPORTS)
    return sorted(used, key=lambda c: (c not in catalog, _index(tuple(catalog), c), c))
