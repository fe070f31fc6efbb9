"""Player and team name reconciliation across inconsistent exports."""

from __future__ import annotations

import logging
import re
import unicodedata
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional

from clubstats.config import PLAYER_ALIASES


logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_identity(name: str) -> str:
    """Lowercase, trim, collapse whitespace and strip diacritics."""

    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", stripped).strip().lower()


class IdentityResolver:
    """Map any known spelling of a name onto its canonical identity.

    ``canonical`` is the set of names a lookup table is keyed by;
    ``aliases`` maps a canonical name to the variants seen in exports.
    Names that resolve to nothing are counted in ``unresolved``.
    """

    def __init__(
        self,
        canonical: Iterable[str],
        aliases: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self._lookup: Dict[str, str] = {}
        for name in canonical:
            self._lookup.setdefault(normalize_identity(name), name)
        for name, variants in (aliases or {}).items():
            self._lookup.setdefault(normalize_identity(name), name)
            for variant in variants:
                key = normalize_identity(variant)
                existing = self._lookup.get(key)
                if existing is not None and existing != name:
                    logger.warning(
                        "Alias %r for %r already maps to %r; keeping the first", variant, name, existing
                    )
                    continue
                self._lookup[key] = name
        self.unresolved: Counter[str] = Counter()

    def resolve(self, name: str) -> Optional[str]:
        key = normalize_identity(name)
        if not key:
            return None
        canonical = self._lookup.get(key)
        if canonical is None:
            if key not in self.unresolved:
                logger.warning("Unresolved identity %r", name)
            self.unresolved[key] += 1
        return canonical

    def unresolved_names(self) -> List[str]:
        return sorted(self.unresolved)


def player_resolver(
    canonical: Iterable[str],
    extra_aliases: Mapping[str, Iterable[str]] | None = None,
) -> IdentityResolver:
    """Resolver over ``canonical`` using the built-in player alias table."""

    aliases: Dict[str, List[str]] = {name: list(variants) for name, variants in PLAYER_ALIASES.items()}
    for name, variants in (extra_aliases or {}).items():
        aliases.setdefault(name, []).extend(variants)
    return IdentityResolver(canonical, aliases)
