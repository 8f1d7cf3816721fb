"""Near-miss suggestions for unknown command names."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import Iterable, List

# Minimum SequenceMatcher ratio for a candidate to be suggested.
DEFAULT_CUTOFF = 0.5


@dataclass(frozen=True, slots=True)
class Suggestion:
    name: str
    score: float


def suggest(
    token: str,
    candidates: Iterable[str],
    *,
    cutoff: float = DEFAULT_CUTOFF,
    limit: int | None = None,
) -> List[Suggestion]:
    """
    Return candidates similar to ``token``, most similar first.

    Ties keep the order of ``candidates``. An empty list means nothing cleared
    ``cutoff``.
    """

    matcher = difflib.SequenceMatcher()
    matcher.set_seq2(token)

    scored: List[Suggestion] = []
    for name in dict.fromkeys(candidates):
        matcher.set_seq1(name)
        if (
            matcher.real_quick_ratio() >= cutoff
            and matcher.quick_ratio() >= cutoff
            and matcher.ratio() >= cutoff
        ):
            scored.append(Suggestion(name=name, score=matcher.ratio()))

    scored.sort(key=lambda s: s.score, reverse=True)
    if limit is not None:
        scored = scored[:limit]
    return scored


__all__ = ["DEFAULT_CUTOFF", "Suggestion", "suggest"]
