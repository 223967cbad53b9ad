"""Shared API key utilities."""


def mask_api_key(api_key: str | None, visible: int = 8) -> str:
    """Return a log-safe form of an API key: a short prefix, or MISSING."""
    if not api_key:
        return "MISSING"
    if len(api_key) <= visible:
        return "***"
    return api_key[:visible] + "..."
