"""
Document-level plagiarism check.

Every candidate source is compared with the original on its own worker.
Sources whose coverage does not exceed MIN_SOURCE_COVERAGE are dropped; the
matches of the rest are tagged with their source, ranked together and
scored as one document.
"""

from typing import List, Optional, Sequence
import logging
from concurrent.futures import ThreadPoolExecutor

from plagcheck.config import MAX_COMPARE_WORKERS, MIN_SOURCE_COVERAGE, SOURCE_EXCERPT_CHARS
from plagcheck.schemas.plagiarism_schemas import (
    PlagiarismMatch,
    PlagiarismResult,
    SimilarityReport,
    SourceDocument,
)
from plagcheck.utils.phrase_matcher import find_all_similarities
from plagcheck.utils.scoring import calculate_overall_similarity, rank_matches
from plagcheck.utils.wiki_utils import fetch_reference_sources

logger = logging.getLogger("plagcheck.checker")

_EMPTY = SimilarityReport(overall_similarity=0.0, matches=[])


def source_excerpt(text: str) -> str:
    return text[:SOURCE_EXCERPT_CHARS] + "..."


def _compare(original_text: str, source: SourceDocument, log_sink) -> SimilarityReport:
    try:
        return find_all_similarities(original_text, source.text)
    except Exception as e:
        log_sink.warning(f"Comparison against '{source.title}' failed: {e}")
        return _EMPTY


def _tag(report: SimilarityReport, source: SourceDocument) -> List[PlagiarismMatch]:
    excerpt = source_excerpt(source.text)
    return [
        PlagiarismMatch(
            **m.model_dump(),
            source=source.title,
            source_text=excerpt,
            source_url=source.source_url,
        )
        for m in report.matches
    ]


def check_sources(
    original_text: str,
    sources: Sequence[SourceDocument],
    log_sink: Optional[logging.Logger] = None,
) -> PlagiarismResult:
    log_sink = log_sink or logger
    if not sources:
        return PlagiarismResult(overall_similarity=0.0, matches=[])

    workers = min(len(sources), MAX_COMPARE_WORKERS)
    with ThreadPoolExecutor(max_workers=workers) as ex:
        reports = list(ex.map(lambda s: _compare(original_text, s, log_sink), sources))

    matches: List[PlagiarismMatch] = []
    for source, report in zip(sources, reports):
        retained = report.overall_similarity > MIN_SOURCE_COVERAGE
        log_sink.info(
            f"Compared '{source.title}': coverage={report.overall_similarity:.1f}% "
            f"matches={len(report.matches)} retained={retained}"
        )
        if retained:
            matches.extend(_tag(report, source))

    ranked = rank_matches(matches)
    return PlagiarismResult(
        overall_similarity=calculate_overall_similarity(ranked),
        matches=ranked,
    )


def check_plagiarism(text: str, log_sink: Optional[logging.Logger] = None) -> PlagiarismResult:
    sources = fetch_reference_sources(text)
    (log_sink or logger).info(f"Checking text against {len(sources)} reference sources")
    return check_sources(text, sources, log_sink=log_sink)
