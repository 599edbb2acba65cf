"""Application-wide constants.

Contains configuration constants used across the codebase to avoid magic numbers
and maintain consistency.
"""

# Article identity
ARTICLE_ID_LENGTH = 16  # Length of the hex id derived from title+source+link

# Source fetching
DEFAULT_FETCH_TIMEOUT_SECONDS = 10  # Per-source timeout
DEFAULT_MAX_CONCURRENT_SOURCES = 8  # Upper cap for the fetch worker pool
DEFAULT_MAX_ARTICLES_PER_SOURCE = 10  # Articles kept from each scraped page
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_PUBLISHED_AT = "Recently"
NO_SUMMARY_PLACEHOLDER = "No summary available"

# Deduplication
DEFAULT_TITLE_SIMILARITY_THRESHOLD = 0.75
DEFAULT_TIME_PROXIMITY_HOURS = 6

# Search
MIN_SEMANTIC_SCORE = 20  # Semantic results below this are discarded
MIN_SIMILAR_SCORE = 30  # Find-similar results below this are discarded
DEFAULT_SIMILAR_LIMIT = 8
MAX_SEARCH_SUGGESTIONS = 8
MAX_DISCLOSED_MATCHES = 5  # Matched terms attached to a result
MIN_PARTIAL_MATCH_LENGTH = 4  # Shorter words never count as partial overlaps

# Enrichment
OVERVIEW_MAX_WORDS = 30
MAX_KEY_POINTS = 4
QUICK_SUMMARY_MIN_LENGTH = 50  # Shorter scraped summaries get a canned sentence
DEFAULT_BATCH_MAX_ARTICLES = 20
DEFAULT_RATE_LIMIT_DELAY_MS = 1000
CACHE_STATS_SAMPLE_SIZE = 10

# LLM Configuration
DEFAULT_LLM_MODEL = "gemini-2.5-flash-lite"
DEFAULT_LLM_TEMPERATURE = 0.3
DEFAULT_LLM_MAX_TOKENS = 300
DEFAULT_LLM_MAX_RETRIES = 3
DEFAULT_RETRY_MIN_WAIT = 2  # Minimum wait time between retries (seconds)
DEFAULT_RETRY_MAX_WAIT = 10  # Maximum wait time between retries (seconds)

# Words ignored when comparing titles and extracting query concepts
STOP_WORDS = frozenset(
    {
        "a", "an", "the", "in", "on", "at", "to", "for", "of", "and", "or",
        "is", "are", "was", "were", "be", "been", "has", "have", "had",
        "with", "from", "by", "its", "it", "this", "that", "how", "what",
        "why", "who", "will", "can", "may", "could", "would", "should",
        "not", "no", "but", "if", "as", "up", "out", "about", "after",
        "into", "over", "says", "said", "now", "new",
    }
)
