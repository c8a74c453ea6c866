"""Base shared constants for the client protocol layer.

Central location for wire sentinels, content types and synthesized error
codes so that providers and the normalizer agree on the same literals.
"""
from __future__ import annotations

# SSE completion sentinel payload
SSE_DONE_SENTINEL = "[DONE]"

# SSE data line prefix (a single optional space may follow the colon)
SSE_DATA_PREFIX = "data:"

# Synthesized error code for unclassified exceptions
INTERNAL_ERROR_CODE = "INTERNAL_ERROR"

# Prefix for HTTP-status based error codes (e.g. ``HTTP_404``)
HTTP_CODE_PREFIX = "HTTP_"

# Content types
JSON_CONTENT_TYPE = "application/json"
NDJSON_CONTENT_TYPE = "application/x-ndjson"
SSE_CONTENT_TYPE = "text/event-stream"

# Status used when an error carries no HTTP-derived status
DEFAULT_ERROR_STATUS = 500

# Message used when a stream body ends without a terminal unit
STREAM_TRUNCATED_MESSAGE = "stream ended before terminal chunk"

__all__ = [
    "SSE_DONE_SENTINEL",
    "SSE_DATA_PREFIX",
    "INTERNAL_ERROR_CODE",
    "HTTP_CODE_PREFIX",
    "JSON_CONTENT_TYPE",
    "NDJSON_CONTENT_TYPE",
    "SSE_CONTENT_TYPE",
    "DEFAULT_ERROR_STATUS",
    "STREAM_TRUNCATED_MESSAGE",
]
