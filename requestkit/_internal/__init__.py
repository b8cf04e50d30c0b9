"""Internal modules for requestkit.

These back the public API in `requestkit` and may change without notice.

Modules:
    decode - JSON decoding into caller-owned targets
    handlers - Default response classification
    http - Transport capability and the default httpx transport
    redaction - Header redaction for debug output
"""
