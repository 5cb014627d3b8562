"""
Phrase overlap detection between an original text and one source text.

Windows of 15 down to 4 words are slid over the original, longest first.
Each window is looked up as a substring of the normalized source; a hit is
extended forward word by word for as long as both texts keep agreeing, and
the covered span of the original is then closed to every later window.
"""

from bisect import bisect_right
from typing import List, NamedTuple, Tuple

from plagcheck.config import (
    MATCH_CONTEXT_CHARS,
    MAX_WINDOW_SIZE,
    MIN_MATCH_SIMILARITY,
    MIN_WINDOW_SIZE,
)
from plagcheck.schemas.plagiarism_schemas import Match, SimilarityReport
from plagcheck.utils.scoring import rank_matches
from plagcheck.utils.text_utils import NormalizedText, normalize


class CoveredRange(NamedTuple):
    start: int
    end: int  # inclusive

    @property
    def length(self) -> int:
        return self.end - self.start + 1


def _clamp(pct: float) -> float:
    return max(0.0, min(pct, 100.0))


def _token_starts(words: List[str]) -> List[int]:
    """Character offset of every word inside ``" ".join(words)``."""
    starts, pos = [], 0
    for w in words:
        starts.append(pos)
        pos += len(w) + 1
    return starts


def _extend(
    o_words: List[str],
    s_words: List[str],
    covered: List[bool],
    end: int,
    s_next: int,
) -> int:
    """Push ``end`` forward while original and source agree word for word."""
    while (
        end < len(o_words)
        and s_next < len(s_words)
        and not covered[end]
        and o_words[end] == s_words[s_next]
    ):
        end += 1
        s_next += 1
    return end


def _excerpt(original: NormalizedText, phrase: str, token_start: int) -> Tuple[str, int]:
    raw = original.raw_text
    lowered = raw.lower()
    # lower() may change the length of some characters; offsets would drift
    if len(lowered) == len(raw):
        pos = lowered.find(phrase)
        if pos >= 0:
            return raw[pos:pos + len(phrase) + MATCH_CONTEXT_CHARS], pos
    return phrase, original.tokens[token_start].offset


def find_all_similarities(original_text: str, source_text: str) -> SimilarityReport:
    original = normalize(original_text)
    source = normalize(source_text)

    o_words = original.words
    s_words = source.words
    total = len(o_words)
    if total == 0 or not s_words:
        return SimilarityReport(overall_similarity=0.0, matches=[])

    s_joined = " ".join(s_words)
    s_starts = _token_starts(s_words)

    covered = [False] * total
    ranges: List[CoveredRange] = []
    matches: List[Match] = []

    for window in range(min(MAX_WINDOW_SIZE, total), MIN_WINDOW_SIZE - 1, -1):
        for i in range(total - window + 1):
            if any(covered[i:i + window]):
                continue

            phrase = " ".join(o_words[i:i + window])
            source_index = s_joined.find(phrase)
            if source_index < 0:
                continue

            # source word holding the last character of the hit
            last = bisect_right(s_starts, source_index + len(phrase) - 1) - 1
            end = _extend(o_words, s_words, covered, i + window, last + 1)

            similarity = _clamp((end - i) / total * 100)
            if similarity <= MIN_MATCH_SIMILARITY:
                continue

            extended = " ".join(o_words[i:end])
            matched_text, original_index = _excerpt(original, extended, i)

            matches.append(Match(
                similarity=similarity,
                matched_text=matched_text,
                original_index=original_index,
                source_index=source_index,
                token_start=i,
                token_end=end - 1,
            ))
            ranges.append(CoveredRange(i, end - 1))
            for k in range(i, end):
                covered[k] = True

    overall = _clamp(sum(r.length for r in ranges) / total * 100)
    return SimilarityReport(overall_similarity=overall, matches=rank_matches(matches))
