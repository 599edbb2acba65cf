"""Scrapers for the built-in news sites."""

from news_aggregator.sources.base import HtmlScraperSource


class BleepingComputerSource(HtmlScraperSource):
    kind = "bleepingcomputer"
    item_selector = ".bc_latest_news_text"
    title_selector = "h4 a"
    summary_selector = "p"
    date_selector = ".bc_news_date"


class CybersecurityNewsSource(HtmlScraperSource):
    kind = "cybersecuritynews"
    item_selector = ".jeg_post"
    title_selector = ".jeg_post_title a"
    summary_selector = ".jeg_post_excerpt p"
    date_selector = ".jeg_meta_date a"


class NeowinSource(HtmlScraperSource):
    kind = "neowin"
    item_selector = ".news-item, .featured-story"
    title_selector = "h2 a, h3 a, .title a"
    summary_selector = ".summary, .excerpt, p"
    date_selector = ".date, .time, time"


class AskWoodySource(HtmlScraperSource):
    kind = "askwoody"
    item_selector = ".post, article"
    title_selector = "h2 a, h3 a, .entry-title a"
    summary_selector = ".entry-content p, .excerpt p, p"
    date_selector = ".date, .entry-date, time"
