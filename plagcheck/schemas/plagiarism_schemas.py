from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class Match(BaseModel):
    model_config = ConfigDict(frozen=True)

    similarity: float = Field(ge=0, le=100)  # percent of original tokens
    matched_text: str       # excerpt of the original text, case preserved
    original_index: int     # code-point (str index) offset into the original text, not bytes
    source_index: int       # code-point offset into the normalized source
    token_start: int        # first covered original token
    token_end: int          # last covered original token (inclusive)


class SimilarityReport(BaseModel):
    """Outcome of comparing one original text against one source text."""
    model_config = ConfigDict(frozen=True)

    overall_similarity: float = Field(ge=0, le=100)  # token coverage percent
    matches: List[Match] = Field(default_factory=list)


class SourceDocument(BaseModel):
    title: str
    text: str
    source_url: Optional[str] = None


class PlagiarismMatch(Match):
    source: str
    source_text: str
    source_url: Optional[str] = None


class PlagiarismResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_similarity: float = Field(ge=0, le=100)
    matches: List[PlagiarismMatch] = Field(default_factory=list)


# ---- Requests ----

class CheckTextRequest(BaseModel):
    text: str


class CompareRequest(BaseModel):
    original_text: str
    sources: List[SourceDocument] = Field(default_factory=list)
