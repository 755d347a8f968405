"""Prompt registry.

Prompts live as ``*.prompt.md`` files in the ``templates`` subdirectory and
are loaded once at import time.
"""

from pathlib import Path
from typing import Dict, List, Optional, Any

from .loader import load_prompts, PromptTemplate

_PROMPTS_PATH = Path(__file__).parent / "templates"
_prompt_cache: Dict[str, PromptTemplate] = load_prompts(_PROMPTS_PATH)

POTHOLE_ANALYSIS = "pothole_analysis"


def list_prompts() -> List[PromptTemplate]:  # noqa: D401 – simple helper
    """Return all loaded prompts as a list."""
    return list(_prompt_cache.values())


def get_prompt(name: str) -> PromptTemplate:
    """Return *PromptTemplate* by *name*.

    Raises ``KeyError`` if the prompt does not exist.
    """
    return _prompt_cache[name]


def render_prompt(name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
    """Render a prompt by *name* with the supplied *arguments*.

    Example::
        text = render_prompt("pothole_analysis")
    """
    return get_prompt(name).render(**(arguments or {}))


def refresh() -> None:  # noqa: D401 – simple helper
    """Reload prompt files from disk."""
    global _prompt_cache
    _prompt_cache = load_prompts(_PROMPTS_PATH)


__all__ = ["POTHOLE_ANALYSIS", "PromptTemplate", "list_prompts", "get_prompt", "render_prompt", "refresh"]
