"""사전 수집된 스냅샷 JSON 저장소

파일 레이아웃: <data_dir>/<site.folder>/<keyword.slug>.json
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from partscout.core.catalog import KEYWORDS, SITES, KeywordConfig, SiteConfig, find_keyword, find_site
from partscout.core.exceptions import InternalException, NotFoundException
from partscout.crawlers.result import SearchResult


class SnapshotRepository:
    def __init__(self, data_dir: str | Path, logger: logging.Logger) -> None:
        self.data_dir = Path(data_dir)
        self.logger = logger

    def _resolve(self, site_id: str, keyword: str) -> tuple[SiteConfig, KeywordConfig]:
        site = find_site(site_id)
        if site is None:
            raise NotFoundException("Unknown site", details={"site": site_id})
        kw = find_keyword(keyword)
        if kw is None:
            raise NotFoundException("Unknown keyword", details={"keyword": keyword})
        return site, kw

    def path_for(self, site: SiteConfig, keyword: KeywordConfig) -> Path:
        return self.data_dir / site.folder / f"{keyword.slug}.json"

    def load(self, site_id: str, keyword: str) -> dict[str, Any]:
        """스냅샷 로드

        Raises:
            NotFoundException: 사이트/키워드 미등록 또는 파일 없음
            InternalException: JSON 손상
        """
        site, kw = self._resolve(site_id, keyword)
        path = self.path_for(site, kw)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            self.logger.warning(f"Snapshot not found: site={site.id}, keyword={kw.slug}")
            raise NotFoundException(
                "Snapshot not collected yet, run the collector first",
                details={"site": site.id, "keyword": kw.slug},
            ) from e
        except json.JSONDecodeError as e:
            self.logger.error(f"Snapshot is not valid JSON: {path}: {e}")
            raise InternalException("Failed to read snapshot", details={"path": str(path)}) from e

        items = data.get("items") if isinstance(data, dict) else None
        self.logger.info(
            f"Loaded snapshot: site={site.id}, keyword={kw.slug}, itemCount={len(items) if isinstance(items, list) else 0}"
        )
        return data

    def list_available(self) -> dict[str, Any]:
        sites: dict[str, Any] = {}
        for site in SITES:
            site_dir = self.data_dir / site.folder
            slugs = sorted(p.stem for p in site_dir.glob("*.json")) if site_dir.is_dir() else []
            sites[site.id] = {
                "name": site.name,
                "availableKeywords": slugs,
                "count": len(slugs),
            }
        return {
            "sites": sites,
            "totalKeywords": len(KEYWORDS),
            "keywords": [{"en": k.en, "zh": k.zh, "slug": k.slug} for k in KEYWORDS],
        }

    def save(self, site_id: str, keyword: str, result: SearchResult) -> Path:
        site, kw = self._resolve(site_id, keyword)
        path = self.path_for(site, kw)
        path.parent.mkdir(parents=True, exist_ok=True)

        payload = {
            "site": site.id,
            "keyword": kw.en,
            "collectedAt": datetime.now(timezone.utc).isoformat(),
            "metaTitle": result.meta_title,
            "source": result.source,
            "items": [item.model_dump() for item in result.items],
        }
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        self.logger.info(f"Snapshot saved: {path} ({len(result.items)} items)")
        return path
