""".env.example handling shared by all service installers.

Several installers contribute keys to the same file.  Each contribution is
merged into what is already there: existing keys and their values are kept,
new keys are appended under a comment naming the contributing service.
"""

from __future__ import annotations

import re

from hyperstart.scaffolder.sink import FileSink

ENV_EXAMPLE = ".env.example"

_KEY_RE = re.compile(r"^\s*(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=")


def parse_env_keys(text: str) -> list[str]:
    """Return the variable names defined in *text*, in file order."""
    keys: list[str] = []
    for line in text.splitlines():
        match = _KEY_RE.match(line)
        if match and match.group(1) not in keys:
            keys.append(match.group(1))
    return keys


async def merge_env_example(
    sink: FileSink,
    section: str,
    variables: dict[str, str],
) -> list[str]:
    """Merge *variables* (name -> placeholder) into ``.env.example``.

    Returns the names that were newly added.
    """
    existing_text = await sink.read_text(ENV_EXAMPLE) if sink.exists(ENV_EXAMPLE) else ""
    present = set(parse_env_keys(existing_text))
    missing = [(k, v) for k, v in variables.items() if k not in present]
    if not missing:
        return []

    lines = [f"# {section}"] + [f"{key}={value}" for key, value in missing]
    block = "\n".join(lines) + "\n"
    if existing_text:
        sep = "" if existing_text.endswith("\n") else "\n"
        await sink.patch(ENV_EXAMPLE, f"{existing_text}{sep}\n{block}")
    else:
        await sink.write(ENV_EXAMPLE, block)
    return [key for key, _ in missing]
