"""RawRecord → NormalizedItem 정규화

- 제목: 공백 정리 후 120자 절단, 비어 있으면 버림
- URL: base_url 기준 절대 URL로 해석, 실패하거나 http/https가 아니면 버림
- 절대 URL 기준 중복 제거 (먼저 나온 것 유지), 최대 12개
"""

from __future__ import annotations

from typing import Iterable

from partscout.crawlers.result import RawRecord
from partscout.schemas.scrape_schema import NormalizedItem
from partscout.utils.text import clean_title, collapse_whitespace
from partscout.utils.url import resolve_url

MAX_ITEMS = 12
MAX_TITLE_LENGTH = 120


def normalize_records(
    records: Iterable[RawRecord],
    base_url: str,
    *,
    limit: int = MAX_ITEMS,
) -> list[NormalizedItem]:
    items: list[NormalizedItem] = []
    seen: set[str] = set()

    for rec in records:
        if len(items) >= limit:
            break

        title = clean_title(rec.title, MAX_TITLE_LENGTH)
        if not title:
            continue

        url = resolve_url(rec.href, base_url)
        if not url or url in seen:
            continue
        seen.add(url)

        image = resolve_url(rec.image, base_url) or ""
        items.append(
            NormalizedItem(
                title=title,
                url=url,
                price=collapse_whitespace(rec.price),
                image=image,
            )
        )

    return items
