"""Canonical cache keys for hotel queries."""

import hashlib
import json
from collections.abc import Mapping
from typing import Any

from hotel_discovery.entities import SearchParams


def fingerprint(params: SearchParams | Mapping[str, Any]) -> str:
    """Derive a stable cache key from a query.

    None-valued fields are dropped and the remaining keys are serialized in
    sorted order, so equivalent queries map to the same key regardless of
    insertion order or omitted optional filters.

    Args:
        params: SearchParams or a plain mapping of query fields

    Returns:
        32-character hex MD5 digest of the canonical JSON
    """
    if isinstance(params, SearchParams):
        canonical = params.to_query_dict()
    else:
        canonical = {key: value for key, value in params.items() if value is not None}

    payload = json.dumps(canonical, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.md5(payload.encode("utf-8")).hexdigest()
