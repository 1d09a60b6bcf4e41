"""Text patches applied to files produced by the base scaffold.

Pure functions: each takes the current file text and returns the patched
text.  A patch whose anchor is missing returns the input unchanged, and
applying a patch twice gives the same result as applying it once.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Import statements
# ---------------------------------------------------------------------------

_DIRECTIVE_RE = re.compile(r"""^\s*(['"])use (client|server)\1;?[ \t]*\r?\n""")


def _import_pattern(specifier: str) -> re.Pattern[str]:
    return re.compile(
        r"^[ \t]*import\s+(?:[\w*{}\s,]+?\s+from\s+)?(['\"])"
        + re.escape(specifier)
        + r"\1[ \t]*;?[ \t]*\r?\n?",
        re.MULTILINE,
    )


def has_import(text: str, specifier: str) -> bool:
    return _import_pattern(specifier).search(text) is not None


def remove_import(text: str, specifier: str) -> str:
    """Remove every import line whose module specifier is *specifier*.

    Matches side-effect imports (``import './App.css'``) as well as binding
    imports (``import styles from "./page.module.css";``).
    """
    return _import_pattern(specifier).sub("", text)


def add_import(text: str, statement: str) -> str:
    """Put *statement* at the top of the module unless it is already there.

    A leading ``'use client'`` directive stays the first statement.
    """
    line = statement.rstrip("\n")
    if any(existing.strip() == line.strip() for existing in text.splitlines()):
        return text
    match = _DIRECTIVE_RE.match(text)
    if match:
        head, rest = text[: match.end()], text[match.end():]
        return f"{head}{line}\n{rest}"
    return f"{line}\n{text}"


# ---------------------------------------------------------------------------
# Bundler config
# ---------------------------------------------------------------------------

_PLUGINS_RE = re.compile(r"plugins:\s*\[")
_DEFINE_CONFIG_RE = re.compile(r"defineConfig\(\{[ \t]*\r?\n?")


def add_vite_plugin(text: str, import_statement: str, plugin_call: str) -> str:
    """Import a plugin and append its call to ``plugins: [...]``.

    The call is inserted right after the opening bracket, so existing plugins
    keep working.  Configs without a ``plugins`` array are left alone.
    """
    callee = plugin_call.split("(", 1)[0].strip()
    if re.search(rf"\b{re.escape(callee)}\(", text) or not _PLUGINS_RE.search(text):
        return text
    text = _PLUGINS_RE.sub(lambda m: f"{m.group(0)}{plugin_call}, ", text, count=1)
    return add_import(text, import_statement)


def add_vite_alias(text: str, alias: str = "@", target: str = "./src") -> str:
    """Add a ``resolve.alias`` entry mapping *alias* to *target*."""
    if "resolve:" in text or not _DEFINE_CONFIG_RE.search(text):
        return text
    block = (
        "  resolve: {\n"
        "    alias: {\n"
        f"      '{alias}': path.resolve(__dirname, '{target}'),\n"
        "    },\n"
        "  },\n"
    )
    text = _DEFINE_CONFIG_RE.sub(lambda m: "defineConfig({\n" + block, text, count=1)
    return add_import(text, "import path from 'path'")


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------


def insert_before(text: str, anchor: str, snippet: str) -> str:
    """Insert *snippet* on its own line(s) before the first *anchor*."""
    if snippet.strip() in text:
        return text
    index = text.find(anchor)
    if index == -1:
        return text
    line_start = text.rfind("\n", 0, index) + 1
    indent = text[line_start:index] if text[line_start:index].isspace() else ""
    inner = indent + "  "
    block = "".join(f"{inner}{line}\n" for line in snippet.strip("\n").splitlines())
    return text[:line_start] + block + text[line_start:]


def insert_after_tag(text: str, tag_pattern: str, snippet: str) -> str:
    """Insert *snippet* right after the first opening tag matching *tag_pattern*."""
    if snippet.strip() in text:
        return text
    match = re.search(tag_pattern, text)
    if match is None:
        return text
    return text[: match.end()] + snippet + text[match.end():]
