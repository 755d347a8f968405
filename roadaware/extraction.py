"""Best-effort extraction of structured data from model answers.

The model is asked for an HTML table, but answers sometimes embed a JSON
array or object as well. The first such span is kept in a single-slot store
for later prioritisation.
"""

from __future__ import annotations

import json
import re
import threading
from typing import Optional

from loguru import logger

# Non-greedy: the first closing bracket ends the match, newlines included.
_JSON_SPAN_RE = re.compile(r"(\[.*?\]|\{.*?\})", re.DOTALL)

DEFAULT_PRIORITY_RECORD = (
    '[{"Id":1,"Depth":"Deep","Wide":"Wide","Hazardous":"Damaging",'
    '"Reason for Hazard":"Main road","Multiple potholes or one only":"One only",'
    '"Type of Road":"A","Location":"Middle of main road"}]'
)


def _message_content(response_body: str | bytes) -> Optional[str]:
    try:
        document = json.loads(response_body)
    except (TypeError, ValueError):
        return None
    try:
        content = document["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


def extract_json_from_response(response_body: str | bytes) -> Optional[str]:
    """Return the first ``[...]`` or ``{...}`` span in the answer text.

    *response_body* is the raw non-streaming provider response. ``None`` is
    returned when the body is not JSON, has no ``choices[0].message.content``
    string, the content is blank, or no span is found.
    """
    content = _message_content(response_body)
    if content is None or not content.strip():
        return None
    match = _JSON_SPAN_RE.search(content)
    return match.group(0) if match else None


class PriorityRecordStore:
    """Single-slot, last-write-wins holder for the latest extracted record.

    Concurrent analyses race on ``set``; whichever finishes last wins. The
    lock only makes each read and write atomic.
    """

    def __init__(self, initial: Optional[str] = DEFAULT_PRIORITY_RECORD) -> None:
        self._lock = threading.Lock()
        self._value = initial

    def get(self) -> Optional[str]:
        with self._lock:
            return self._value

    def set(self, value: str) -> None:
        with self._lock:
            self._value = value

    def update_from_response(self, response_body: str | bytes) -> Optional[str]:
        """Extract from *response_body* and store the span when one is found."""
        extracted = extract_json_from_response(response_body)
        if extracted is None:
            logger.debug("No JSON span found in provider answer; priority record unchanged")
            return None
        self.set(extracted)
        logger.debug("Priority record updated ({} chars)", len(extracted))
        return extracted


_store = PriorityRecordStore()


def get_priority_store() -> PriorityRecordStore:
    """Return the process-wide store (FastAPI dependency)."""
    return _store
