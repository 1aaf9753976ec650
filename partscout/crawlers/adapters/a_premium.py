"""A-Premium - 검색 결과 페이지 (클라이언트 렌더링, 브라우저 필요)"""

from urllib.parse import quote

from partscout.crawlers.extraction import ExtractionScript

SITE_ID = "a-premium"
SETTLE_MS = 3000

SCRIPT = ExtractionScript(
    card_selectors=(
        '[class*="ProductCard"]',
        '[class*="product-card"]',
        ".product-item",
        "[data-product-card]",
    ),
    link_selector='a[href*="/product/"]',
    title_selector='[class*="title"], [class*="name"], h2, h3, h4',
    price_selector='[class*="price"], [class*="Price"]',
    image_selector="img",
)


def build_url(keyword: str) -> str:
    return f"https://a-premium.com/search?keyword={quote(keyword, safe='')}"
