"""Sixity Auto - Searchspring 검색 API (JSON)"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from partscout.core.exceptions import ParseMismatchException
from partscout.crawlers.result import RawRecord

SITE_ID = "sixity"
SEARCHSPRING_SITE_ID = "hzbon8"
SEARCH_API_URL = f"https://{SEARCHSPRING_SITE_ID}.a.searchspring.io/api/search/search.json"
SEARCH_PAGE_URL = "https://www.sixityauto.com/search?q="


def build_url(keyword: str) -> str:
    domain = SEARCH_PAGE_URL + quote(keyword, safe="")
    return (
        f"{SEARCH_API_URL}?ajaxCatalog=v3&resultsFormat=native&siteId={SEARCHSPRING_SITE_ID}"
        f"&domain={quote(domain, safe='')}&q={quote(keyword, safe='')}&noBeacon=true"
    )


def _format_price(value: Any) -> str:
    if not value:
        return ""
    return f"${value}"


def parse_results(payload: Any) -> list[RawRecord]:
    """`results[] {name, url, price, thumbnailImageUrl}` 구조에서 레코드 추출"""
    if not isinstance(payload, dict):
        raise ParseMismatchException("payload is not an object")
    results = payload.get("results")
    if not isinstance(results, list):
        raise ParseMismatchException("'results' is missing or not a list")

    records: list[RawRecord] = []
    for r in results:
        if not isinstance(r, dict):
            continue
        records.append(
            RawRecord(
                title=str(r.get("name") or ""),
                href=str(r.get("url") or ""),
                price=_format_price(r.get("price")),
                image=str(r.get("thumbnailImageUrl") or ""),
            )
        )
    return records
