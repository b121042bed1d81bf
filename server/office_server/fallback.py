"""
Ordered fallback chains for multi-source configuration values.
"""

from typing import Callable, Iterable, Optional, Tuple, TypeVar

T = TypeVar("T")

# (source label, zero-argument probe returning the value or None)
Candidate = Tuple[str, Callable[[], Optional[T]]]


def first_present(candidates: Iterable[Candidate]) -> Optional[Tuple[T, str]]:
    """
    Try candidates in order and return (value, source) for the first one
    whose probe yields a non-empty value.

    Probes are called lazily, so later sources are never touched once an
    earlier one wins. Falsy values ("" and None) count as absent.
    """
    for source, probe in candidates:
        value = probe()
        if value:
            return value, source
    return None
