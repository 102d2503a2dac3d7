"""Picking questions and learning resources the user has not seen yet.

Both draws work the same way: filter the pool by role (and difficulty, when
given), skip ids already used, and when fewer than ``count`` unseen items
remain, drop this pool's ids from the used set and make the whole pool
eligible again. Pass a seeded ``random.Random`` to make the draw reproducible.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

QUESTIONS_PER_INTERVIEW = 5
RESOURCES_PER_PAGE = 5


class NoQuestionsAvailable(LookupError):
    pass


@dataclass(frozen=True)
class Selection:
    items: Tuple[dict, ...]
    used_ids: Tuple[str, ...]

    @property
    def questions(self) -> Tuple[dict, ...]:
        return self.items


def _rotate(
    pool: List[dict],
    used_ids: Iterable[str],
    count: int,
    rng: Optional[random.Random],
) -> Selection:
    rng = rng or random.Random()
    used: List[str] = list(used_ids)
    available = [x for x in pool if x.get("id") not in used]
    if len(available) < count:
        pool_ids = {x.get("id") for x in pool}
        logger.info("recycling a pool of %d items", len(pool))
        used = [i for i in used if i not in pool_ids]
        available = pool

    shuffled = list(available)
    rng.shuffle(shuffled)
    chosen = tuple(shuffled[:count])
    return Selection(items=chosen, used_ids=tuple(used + [x.get("id") for x in chosen]))


def _filter(rows: Iterable[dict], role: str, difficulty: Optional[str]) -> List[dict]:
    return [r for r in rows
            if r.get("role") == role and (difficulty is None or r.get("difficulty") == difficulty)]


def select_questions(
    bank: Iterable[dict],
    role: str,
    difficulty: str,
    used_ids: Iterable[str] = (),
    count: int = QUESTIONS_PER_INTERVIEW,
    rng: Optional[random.Random] = None,
) -> Selection:
    pool = _filter(bank, role, difficulty)
    if not pool:
        raise NoQuestionsAvailable(f"No questions available for {role!r} / {difficulty!r}")
    return _rotate(pool, used_ids, count, rng)


def select_resources(
    resources: Iterable[dict],
    role: str,
    difficulty: Optional[str] = None,
    used_ids: Iterable[str] = (),
    limit: int = RESOURCES_PER_PAGE,
    rng: Optional[random.Random] = None,
) -> Selection:
    """Like ``select_questions`` but difficulty is optional and an empty pool yields nothing."""
    return _rotate(_filter(resources, role, difficulty), used_ids, limit, rng)
