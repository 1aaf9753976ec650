"""Dorman Products - 키워드 검색 페이지"""

from urllib.parse import quote

from partscout.crawlers.extraction import ExtractionScript

SITE_ID = "dorman"
SETTLE_MS = 5000
TIMEOUT_MS = 45000

SCRIPT = ExtractionScript(
    card_selectors=(".searchItems", ".search-item", '[class*="product"]', "article", ".item"),
    link_selector='a[href*="p-"], a[href*="product"]',
    title_selector="span.item-name, .name, h4, h3",
    price_selector=None,
    image_selector=None,
)


def build_url(keyword: str) -> str:
    return (
        "https://www.dormanproducts.com/gsearch.aspx?type=keyword&origin=keyword"
        f"&q={quote(keyword, safe='')}"
    )
