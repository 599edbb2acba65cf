"""Hashing utilities for article identity."""

import hashlib

from news_aggregator.constants import ARTICLE_ID_LENGTH


def generate_article_id(title: str, source: str, link: str) -> str:
    """
    Derive the stable identifier of an article.

    The id depends on title, source and link only, so it survives refreshes
    (externally stored saved/read flags keep matching) and differs for two
    articles that share a title and source but point at different pages.

    Args:
        title: Article title
        source: Source name
        link: Absolute article URL

    Returns:
        Lowercase hex string of ARTICLE_ID_LENGTH characters

    Examples:
        >>> generate_article_id("Patch Tuesday", "Neowin", "https://neowin.net/a")
        '3f1c...'
    """
    # Separator keeps ("ab", "c") and ("a", "bc") apart
    combined = "\x1f".join(field.strip() for field in (title, source, link))
    return hashlib.sha256(combined.encode("utf-8")).hexdigest()[:ARTICLE_ID_LENGTH]
