"""Tool to describe the active HTML sanitization policy."""

from ..security import DEFAULT_POLICY


def get_sanitize_policy() -> dict:
    """Return the allow-lists applied to rendered HTML."""
    return {
        "allowed_tags": list(DEFAULT_POLICY.tags),
        "allowed_attributes": list(DEFAULT_POLICY.attributes),
        "allowed_protocols": list(DEFAULT_POLICY.protocols),
        "forbidden_tags": sorted(DEFAULT_POLICY.forbidden_tags),
    }
