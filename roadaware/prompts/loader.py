from __future__ import annotations

"""Prompt loader for `.prompt.md` files.

Each file starts with YAML front-matter:

- name: unique prompt identifier
- description: short human friendly description
- arguments: list with ``name`` / ``description`` / ``required`` fields

The body is a **Jinja2** template rendered with the declared arguments.
``load_prompts`` discovers every ``*.prompt.md`` file inside a directory and
returns a ``dict`` mapping ``name → PromptTemplate``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Any
import re

import yaml  # PyYAML
from jinja2 import Template
from loguru import logger

# ---------------------------------------------------------------------------
# 📑 Models
# ---------------------------------------------------------------------------


@dataclass
class PromptArgument:
    """Metadata for a single prompt argument."""

    name: str
    description: str = ""
    required: bool = True


@dataclass
class PromptTemplate:
    """In-memory representation of a prompt file."""

    name: str
    description: str
    arguments: List[PromptArgument]
    template_source: str
    _template: Template = field(init=False, repr=False)

    def __post_init__(self) -> None:  # noqa: D401 – lifecycle hook
        self._template = Template(self.template_source, autoescape=False)

    def render(self, **kwargs: Any) -> str:
        """Render the template with the provided keyword arguments.

        Raises ``ValueError`` when a required argument is missing.
        """
        missing = [arg.name for arg in self.arguments if arg.required and arg.name not in kwargs]
        if missing:
            raise ValueError(f"Prompt '{self.name}' missing required arguments: {', '.join(missing)}")
        return self._template.render(**kwargs).strip()


# ---------------------------------------------------------------------------
# 🔍 Loader helpers
# ---------------------------------------------------------------------------

# Regex that captures YAML front-matter at the start of the file.
_FRONT_MATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)


def _parse_prompt_file(path: Path) -> PromptTemplate:  # noqa: D401 – internal fn
    """Parse a single ``.prompt.md`` file and return a ``PromptTemplate``."""

    text = path.read_text(encoding="utf-8")
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        raise ValueError("Missing YAML front-matter")

    meta = yaml.safe_load(match.group(1)) or {}

    arguments = [
        PromptArgument(
            name=arg.get("name"),
            description=arg.get("description", ""),
            required=bool(arg.get("required", True)),
        )
        for arg in meta.get("arguments", [])
    ]

    return PromptTemplate(
        name=meta.get("name") or path.name.removesuffix(".prompt.md"),
        description=meta.get("description", ""),
        arguments=arguments,
        template_source=text[match.end() :],
    )


# ---------------------------------------------------------------------------
# 🛠️  Public API
# ---------------------------------------------------------------------------


def load_prompts(directory: str | Path) -> Dict[str, PromptTemplate]:
    """Load all ``*.prompt.md`` files from *directory*.

    Returns a dict mapping **prompt name → PromptTemplate**.
    """

    dir_path = Path(directory)
    if not dir_path.exists():
        raise FileNotFoundError(f"Prompt directory '{dir_path}' does not exist.")

    prompts: Dict[str, PromptTemplate] = {}
    for file_path in sorted(dir_path.glob("*.prompt.md")):
        try:
            tmpl = _parse_prompt_file(file_path)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.warning("Skipping prompt file '{}': {}", file_path, exc)
            continue
        prompts[tmpl.name] = tmpl

    return prompts
