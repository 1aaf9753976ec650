"""AUTODOC - 검색 결과 리스팅"""

from urllib.parse import quote

from partscout.crawlers.extraction import ExtractionScript

SITE_ID = "autodoc"
SETTLE_MS = 4000
TIMEOUT_MS = 45000

SCRIPT = ExtractionScript(
    card_selectors=(
        "[data-listing-products] .listing-item",
        ".listing-item",
        ".product-item",
        '[class*="product"]',
        "article",
    ),
    link_selector='a[href*="/car-parts/"], a[class*="name"], a[class*="title"]',
    title_selector='[class*="name"], [class*="title"], h2, h3, h4',
    price_selector=None,
    image_selector=None,
)


def build_url(keyword: str) -> str:
    return f"https://www.autodoc.parts/search?keyword={quote(keyword, safe='')}"
