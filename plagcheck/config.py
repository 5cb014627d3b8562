import os
from dotenv import load_dotenv

load_dotenv()

# ───── Phrase matching ─────
MIN_WINDOW_SIZE = 4
MAX_WINDOW_SIZE = 15
MATCH_CONTEXT_CHARS = 20
MIN_MATCH_SIMILARITY = 5.0

# ───── Aggregation ─────
MIN_SOURCE_COVERAGE = 10.0
SCORE_MATCH_CAP = 5
SCORE_SCALE = 0.8
SOURCE_EXCERPT_CHARS = 200

# ───── Wikipedia ─────
WIKI_API_URL = os.getenv("WIKI_API_URL", "https://en.wikipedia.org/w/api.php")
WIKI_ARTICLE_URL = os.getenv("WIKI_ARTICLE_URL", "https://en.wikipedia.org/wiki/")
WIKI_SEARCH_LIMIT = int(os.getenv("WIKI_SEARCH_LIMIT", "5"))
MAX_SOURCES = int(os.getenv("MAX_SOURCES", "5"))
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "6"))
MAX_COMPARE_WORKERS = int(os.getenv("MAX_COMPARE_WORKERS", "8"))

# ───── Input ─────
MIN_TEXT_LENGTH = int(os.getenv("MIN_TEXT_LENGTH", "50"))
ALLOWED_EXTENSIONS = {"txt", "pdf", "docx"}
MAX_FILE_WORDS = int(os.getenv("MAX_FILE_WORDS", "5000"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "")
