"""
Ranker

Ranks scored candidates and selects a geographically diverse set of paths.
"""

import logging
from typing import List, Set

from .constants import PATH_COUNT, UNCONSTRAINED_SLOTS
from .contracts import ScoredCandidate

logger = logging.getLogger(__name__)


def rank_candidates(
    scored_candidates: List[ScoredCandidate]
) -> List[ScoredCandidate]:
    """
    Rank candidates by overall fit score (descending).

    The sort is stable, so equal scores keep catalog order.
    """
    return sorted(
        scored_candidates,
        key=lambda x: x.fit_score.overall,
        reverse=True
    )


def select_diverse(
    ranked: List[ScoredCandidate],
    count: int = PATH_COUNT,
    unconstrained_slots: int = UNCONSTRAINED_SLOTS
) -> List[ScoredCandidate]:
    """
    Pick `count` candidates, avoiding repeated countries after the leading slots.

    The first `unconstrained_slots` picks are simply the best scores. After that a
    candidate is skipped if its country is already represented. If that leaves
    slots open, the best remaining candidates fill them regardless of country.
    Never pads: fewer candidates than `count` means fewer results.

    Args:
        ranked: Candidates sorted by score, best first
        count: Number of paths to return
        unconstrained_slots: Leading picks exempt from the country rule

    Returns:
        Selected candidates in selection order
    """
    selected: List[ScoredCandidate] = []
    picked: Set[int] = set()
    countries: Set[str] = set()

    for index, scored in enumerate(ranked):
        if len(selected) >= count:
            break
        country = scored.university.country
        if len(selected) < unconstrained_slots or country not in countries:
            selected.append(scored)
            picked.add(index)
            countries.add(country)

    # Backfill remaining slots with the next best, ignoring country
    if len(selected) < count:
        for index, scored in enumerate(ranked):
            if len(selected) >= count:
                break
            if index in picked:
                continue
            logger.debug(f"Backfilling slot {len(selected) + 1} with {scored.university.id} (repeat country)")
            selected.append(scored)
            picked.add(index)

    logger.info(f"🏆 Selected {len(selected)} of {len(ranked)} ranked candidates across {len(countries)} countries")
    return selected
