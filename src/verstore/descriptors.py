"""Change descriptor computation."""

from __future__ import annotations

from verstore.base import ChangeDescriptor


def compare(old: str, new: str) -> ChangeDescriptor:
    """Describe the change from ``old`` to ``new``.

    Equality is exact; no whitespace or case normalization is applied.

    Args:
        old: Content before the change.
        new: Content after the change.

    Returns:
        ``NO_CHANGE`` if both are equal, otherwise ``MODIFIED`` carrying
        both contents in full.
    """
    if old == new:
        return ChangeDescriptor.no_change()
    return ChangeDescriptor.modified(old, new)
