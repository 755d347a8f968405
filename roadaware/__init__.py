from .extraction import PriorityRecordStore, extract_json_from_response  # noqa: F401
from .provider import ProviderClient  # noqa: F401
from .relay import relay_deltas  # noqa: F401
from .settings import settings  # noqa: F401

__all__ = [
    "PriorityRecordStore",
    "ProviderClient",
    "extract_json_from_response",
    "relay_deltas",
    "settings",
]
