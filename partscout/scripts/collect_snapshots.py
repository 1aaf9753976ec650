"""스냅샷 수집 스크립트

모든(또는 지정한) 사이트 어댑터로 모든(또는 지정한) 키워드를 검색해
<data_dir>/<site.folder>/<slug>.json 으로 저장합니다.

    partscout-collect --site sixity --keyword "Oxygen Sensor"
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from partscout.core.catalog import KEYWORDS, SITES, find_keyword
from partscout.core.config import get_settings
from partscout.core.context import AppContext, build_context
from partscout.core.exceptions import PartScoutException


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Collect search snapshots for every site/keyword pair")
    parser.add_argument(
        "--site",
        action="append",
        choices=[s.id for s in SITES],
        help="site id to collect (repeatable, default: all)",
    )
    parser.add_argument(
        "--keyword",
        action="append",
        help="keyword (English name or slug, repeatable, default: all)",
    )
    return parser.parse_args(argv)


async def collect(ctx: AppContext, site_ids: Sequence[str], keywords: Sequence[str]) -> int:
    """수집 실행, 실패한 (사이트, 키워드) 쌍의 수를 반환"""
    failures = 0
    for site_id in site_ids:
        adapter = ctx.adapter_for(site_id)
        if adapter is None:
            ctx.logger.error(f"No adapter for site={site_id}")
            failures += len(keywords)
            continue

        for keyword in keywords:
            try:
                result = await adapter.search(keyword)
                ctx.snapshots.save(site_id, keyword, result)
            except PartScoutException as e:
                failures += 1
                ctx.logger.error(f"Collect failed: site={site_id}, keyword='{keyword}': {e}")

    ctx.logger.info(f"Collection finished: pairs={len(site_ids) * len(keywords)}, failures={failures}")
    return failures


async def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    site_ids = args.site or [s.id for s in SITES]

    keywords: list[str] = []
    for raw in args.keyword or [k.en for k in KEYWORDS]:
        kw = find_keyword(raw)
        if kw is None:
            print(f"Unknown keyword: {raw}", file=sys.stderr)
            return 2
        keywords.append(kw.en)

    ctx = build_context(get_settings())
    try:
        failures = await collect(ctx, site_ids, keywords)
    finally:
        await ctx.aclose()
    return 1 if failures else 0


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
