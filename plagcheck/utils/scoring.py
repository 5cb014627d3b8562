import math
from typing import List, Sequence, TypeVar

from plagcheck.config import SCORE_MATCH_CAP, SCORE_SCALE
from plagcheck.schemas.plagiarism_schemas import Match

M = TypeVar("M", bound=Match)


def calculate_overall_similarity(matches: Sequence[Match]) -> float:
    """
    Combine matches from every source into one document score.

    sqrt(sum of similarities * min(count, 5)) * 0.8, capped at 100. The
    square root keeps many weak matches from adding up past a few strong ones.
    """
    if not matches:
        return 0.0
    total = sum(m.similarity for m in matches)
    score = math.sqrt(total * min(len(matches), SCORE_MATCH_CAP)) * SCORE_SCALE
    return max(0.0, min(score, 100.0))


def rank_matches(matches: Sequence[M]) -> List[M]:
    # ties: earlier position in the original first
    return sorted(matches, key=lambda m: (-m.similarity, m.token_start))
