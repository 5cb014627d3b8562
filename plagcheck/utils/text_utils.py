import re
from typing import List, NamedTuple

_WORD_RE = re.compile(r"\S+")
_STRIP_RE = re.compile(r"[^\w\s]|_")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


class Token(NamedTuple):
    text: str       # normalized word
    index: int      # position in the token sequence
    offset: int     # character offset of the source word in the raw text


class NormalizedText(NamedTuple):
    tokens: List[Token]
    raw_text: str

    @property
    def words(self) -> List[str]:
        return [t.text for t in self.tokens]

    @property
    def text(self) -> str:
        """Tokens joined by single spaces (the comparable rendering)."""
        return " ".join(t.text for t in self.tokens)


def normalize(text: str) -> NormalizedText:
    """
    Lowercase, strip everything that is not alphanumeric or whitespace and
    split on whitespace. Each token remembers where its word started in the
    raw text. Words made only of punctuation vanish.
    """
    if not text:
        return NormalizedText([], text or "")

    tokens: List[Token] = []
    for m in _WORD_RE.finditer(text):
        word = _STRIP_RE.sub("", m.group().lower())
        if word:
            tokens.append(Token(word, len(tokens), m.start()))
    return NormalizedText(tokens, text)


def extract_search_terms(text: str) -> List[str]:
    """Pick a few representative sentences to query reference sources with."""
    text = text or ""
    sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(text)]
    sentences = [s for s in sentences if len(s) > 15 and len(s.split(" ")) > 5]

    if len(sentences) > 3:
        return [sentences[0], sentences[len(sentences) // 2], sentences[-1]]

    return sentences if sentences else [text[:100]]
