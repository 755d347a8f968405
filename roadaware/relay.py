"""Server-sent-event relay: provider ``data:`` lines in, text deltas out."""

from __future__ import annotations

import json
from typing import AsyncIterable, AsyncIterator, Optional

from loguru import logger

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

stream_log = logger.bind(tag="STREAM")


def parse_delta(payload: str) -> Optional[str]:
    """Return ``choices[0].delta.content`` from one chunk, or ``None``."""
    try:
        chunk = json.loads(payload)
    except ValueError:
        stream_log.warning("Skipping malformed chunk: {!r}", payload[:200])
        return None
    try:
        content = chunk["choices"][0]["delta"].get("content")
    except (KeyError, IndexError, TypeError, AttributeError):
        return None
    return content if isinstance(content, str) else None


async def relay_deltas(lines: AsyncIterable[str]) -> AsyncIterator[str]:
    """Yield each non-empty content delta as soon as its line arrives.

    Lines without the ``data: `` prefix are ignored; ``data: [DONE]`` stops
    the relay even if more lines follow.
    """
    async for line in lines:
        if not line.startswith(DATA_PREFIX):
            continue
        payload = line[len(DATA_PREFIX):]
        if payload == DONE_SENTINEL:
            stream_log.info("Stream finished.")
            return
        content = parse_delta(payload)
        if content:
            yield content
