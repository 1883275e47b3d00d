"""Parse requested platform tokens into a deterministic platform selection."""

from __future__ import annotations

from collections.abc import Iterable

from xcforge.catalog import CATALOG, LogicalPlatform, known_platforms
from xcforge.errors import HelpRequested, InvalidPlatform

HELP_TOKENS = frozenset({"-h", "--help"})


def select_platforms(tokens: Iterable[str]) -> tuple[LogicalPlatform, ...]:
    """Validate *tokens* and return the sorted, deduplicated platform set.

    No tokens selects every known platform; empty strings are ignored.
    Tokens are checked in input order, so the first unknown token (or help
    token) wins.
    """
    requested: set[str] = set()
    seen_any = False
    for token in tokens:
        if not token:
            continue
        seen_any = True
        if token in HELP_TOKENS:
            raise HelpRequested(token)
        if token not in CATALOG:
            raise InvalidPlatform(
                f"Unknown platform '{token}'.",
                hint=f"Choose from: {', '.join(known_platforms())}.",
                context={"stage": "select", "platform": token},
            )
        requested.add(token)

    if not seen_any:
        return known_platforms()
    return tuple(sorted(requested))  # type: ignore[arg-type]
