"""선택자 기반 레코드 추출 스펙

브라우저 컨텍스트에서 실행되는 코드는 프로세스 경계를 넘기 때문에 일반 함수로 다루지 않습니다.
대신 직렬화 가능한 `ExtractionScript`(선택자 스펙)를 고정된 JS 함수에 인자로 넘기고,
결과는 plain data(list[dict])로만 돌려받습니다.

같은 스펙을 selectolax로 원본 HTML에 직접 적용할 수도 있습니다 (http 렌더링 백엔드/테스트).

카드 선택자는 순서 있는 폴백 체인입니다: 하나 이상 매칭되는 첫 번째 선택자만 사용하며,
여러 선택자의 합집합을 만들지 않습니다.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional

from selectolax.parser import HTMLParser, Node

from partscout.crawlers.result import RawRecord


@dataclass(frozen=True)
class ExtractionScript:
    card_selectors: tuple[str, ...]
    link_selector: str
    title_selector: str
    price_selector: Optional[str] = None
    image_selector: Optional[str] = "img"

    def to_payload(self) -> dict[str, Any]:
        """page.evaluate 인자로 보낼 JSON 직렬화 가능한 형태"""
        payload = asdict(self)
        payload["card_selectors"] = list(self.card_selectors)
        return payload


# page.evaluate(EXTRACT_RECORDS_JS, script.to_payload()) 로 실행
EXTRACT_RECORDS_JS = """
(script) => {
  let cards = [];
  for (const sel of script.card_selectors) {
    cards = document.querySelectorAll(sel);
    if (cards.length > 0) break;
  }
  const records = [];
  cards.forEach((card) => {
    const link = card.querySelector(script.link_selector);
    const titleEl = card.querySelector(script.title_selector);
    if (!link || !titleEl) return;
    const priceEl = script.price_selector ? card.querySelector(script.price_selector) : null;
    const imgEl = script.image_selector ? card.querySelector(script.image_selector) : null;
    records.push({
      title: titleEl.textContent || '',
      href: link.href || link.getAttribute('href') || '',
      price: priceEl ? (priceEl.textContent || '') : '',
      image: imgEl ? (imgEl.src || imgEl.getAttribute('data-src') || '') : '',
    });
  });
  return records;
}
"""


def select_first_matching(root: HTMLParser | Node, selectors: tuple[str, ...] | list[str]) -> list[Node]:
    """하나 이상 매칭되는 첫 번째 선택자의 결과 (없으면 빈 리스트)"""
    for sel in selectors:
        nodes = root.css(sel)
        if nodes:
            return nodes
    return []


def _node_text(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return node.text(deep=True, separator=" ") or ""


def extract_records_from_html(html: str, script: ExtractionScript) -> list[RawRecord]:
    """EXTRACT_RECORDS_JS와 같은 규칙을 selectolax로 적용"""
    if not html:
        return []

    tree = HTMLParser(html)
    records: list[RawRecord] = []

    for card in select_first_matching(tree, script.card_selectors):
        link = card.css_first(script.link_selector)
        title_el = card.css_first(script.title_selector)
        if link is None or title_el is None:
            continue

        price_el = card.css_first(script.price_selector) if script.price_selector else None
        img_el = card.css_first(script.image_selector) if script.image_selector else None
        image = ""
        if img_el is not None:
            image = img_el.attributes.get("src") or img_el.attributes.get("data-src") or ""

        records.append(
            RawRecord(
                title=_node_text(title_el),
                href=link.attributes.get("href") or "",
                price=_node_text(price_el),
                image=image,
            )
        )

    return records


def records_from_payload(payload: Any) -> list[RawRecord]:
    """page.evaluate 반환값(plain data)을 RawRecord 목록으로 변환"""
    if not isinstance(payload, list):
        return []
    return [RawRecord.from_dict(r) for r in payload if isinstance(r, dict)]
