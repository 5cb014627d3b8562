from typing import Dict, List, NamedTuple, Optional
import logging
from functools import lru_cache
from concurrent.futures import ThreadPoolExecutor

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from plagcheck.config import (
    MAX_SOURCES,
    REQUEST_TIMEOUT,
    WIKI_API_URL,
    WIKI_ARTICLE_URL,
    WIKI_SEARCH_LIMIT,
)
from plagcheck.schemas.plagiarism_schemas import SourceDocument
from plagcheck.utils.text_utils import extract_search_terms

logger = logging.getLogger("plagcheck.wiki")


class WikiSearchResult(NamedTuple):
    title: str
    snippet: str
    pageid: int


# ---- Session ----
def _make_session() -> requests.Session:
    s = requests.Session()
    retries = Retry(
        total=2,
        backoff_factor=0.2,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
    )
    adapter = HTTPAdapter(max_retries=retries, pool_connections=10, pool_maxsize=10)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update({
        "User-Agent": "plagcheck/1.0 (phrase overlap checker)",
        "Accept": "application/json",
    })
    return s

_SESSION = _make_session()


def article_url(title: str) -> str:
    return WIKI_ARTICLE_URL + title.replace(" ", "_")


# ---- Search ----
@lru_cache(maxsize=256)
def _search(term: str, limit: int) -> tuple:
    params = {
        "action": "query",
        "list": "search",
        "srsearch": term,
        "srlimit": limit,
        "format": "json",
    }
    r = _SESSION.get(WIKI_API_URL, params=params, timeout=REQUEST_TIMEOUT)
    r.raise_for_status()
    hits = (r.json().get("query") or {}).get("search") or []
    return tuple(
        WikiSearchResult(h.get("title", ""), h.get("snippet", ""), int(h["pageid"]))
        for h in hits if h.get("pageid") is not None
    )


def search_wikipedia(term: str, limit: int = WIKI_SEARCH_LIMIT) -> List[WikiSearchResult]:
    term = (term or "").strip()
    if not term:
        return []
    try:
        results = list(_search(term, limit))
        logger.info(f"search_wikipedia: {len(results)} hits for '{term[:60]}'")
        return results
    except (requests.RequestException, ValueError, KeyError) as e:
        logger.warning(f"search_wikipedia failed for '{term[:60]}': {e}")
        return []


# ---- Extracts ----
def get_wikipedia_content(pageid: int, title: str) -> Optional[SourceDocument]:
    """Fetch the plain-text intro of an article, or None when there is none."""
    params = {
        "action": "query",
        "prop": "extracts",
        "exintro": 1,
        "explaintext": 1,
        "titles": title,
        "format": "json",
    }
    try:
        r = _SESSION.get(WIKI_API_URL, params=params, timeout=REQUEST_TIMEOUT)
        r.raise_for_status()
        pages = (r.json().get("query") or {}).get("pages") or {}
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"get_wikipedia_content failed for '{title}': {e}")
        return None

    page = pages.get(str(pageid))
    if not page or not page.get("extract"):
        logger.debug(f"No extract for '{title}' ({pageid})")
        return None

    page_title = page.get("title", title)
    return SourceDocument(
        title=page_title,
        text=page["extract"],
        source_url=article_url(page_title),
    )


def fetch_reference_sources(text: str, max_sources: int = MAX_SOURCES) -> List[SourceDocument]:
    terms = extract_search_terms(text)
    logger.info(f"Searching Wikipedia for {len(terms)} terms")

    with ThreadPoolExecutor(max_workers=max(1, len(terms))) as ex:
        per_term = list(ex.map(search_wikipedia, terms))

    unique: Dict[int, WikiSearchResult] = {}
    for hits in per_term:
        for hit in hits:
            unique.setdefault(hit.pageid, hit)
    candidates = list(unique.values())[:max_sources]
    logger.info(f"Found {len(candidates)} candidate articles")

    if not candidates:
        return []

    with ThreadPoolExecutor(max_workers=len(candidates)) as ex:
        docs = list(ex.map(lambda c: get_wikipedia_content(c.pageid, c.title), candidates))

    return [d for d in docs if d is not None]
