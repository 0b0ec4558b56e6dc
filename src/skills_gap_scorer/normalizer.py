"""Key Normalizer and Fuzzy Key Matcher.

Reconciles human-entered department labels against the loosely formatted
keys of the knowledge resource. Labels are compared as canonical tokens:
lower-cased with everything outside ``[a-z0-9]`` removed.
"""

import logging
import re
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_key(label: Optional[str]) -> str:
    """Canonicalize a label into a comparable token.

    >>> normalize_key("Ops & Logistics")
    'opslogistics'
    """
    if not label:
        return ""
    return _NON_ALNUM.sub("", label.lower())


class KeyMatcher:
    """Approximate lookup of a label among a fixed set of candidate keys.

    Candidate tokens are computed once at construction and kept in source
    order. Matching precedence:

    1. Exact token equality (first in source order)
    2. Containment in either direction (first in source order)

    First match wins. A short label such as "IT" will resolve to whichever
    containing key comes first ("IT Security" before "IT Operations").
    """

    def __init__(self, keys: Iterable[str]):
        self._index: list[tuple[str, str]] = [(key, normalize_key(key)) for key in keys]
        self._exact: dict[str, str] = {}
        for key, token in self._index:
            if token and token not in self._exact:
                self._exact[token] = key

    @property
    def keys(self) -> list[str]:
        return [key for key, _ in self._index]

    def __len__(self) -> int:
        return len(self._index)

    def match(self, label: Optional[str]) -> Optional[str]:
        """Find the best candidate key for a label.

        Returns:
            The matching key as it appears in the source, or None.
        """
        token = normalize_key(label)
        if not token:
            return None

        exact = self._exact.get(token)
        if exact is not None:
            return exact

        matches = [
            key for key, candidate in self._index
            if candidate and (token in candidate or candidate in token)
        ]
        if not matches:
            return None
        if len(matches) > 1:
            logger.debug(
                "Ambiguous key match for %r: %s (using %r)", label, matches, matches[0]
            )
        return matches[0]


def match_key(label: Optional[str], keys: Iterable[str]) -> Optional[str]:
    """One-off fuzzy match of a label against candidate keys."""
    return KeyMatcher(keys).match(label)
