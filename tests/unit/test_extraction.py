"""선택자 기반 추출 스펙 단위 테스트 (selectolax 경로)"""

from partscout.crawlers.adapters import a_premium, dorman
from partscout.crawlers.extraction import (
    EXTRACT_RECORDS_JS,
    ExtractionScript,
    extract_records_from_html,
    records_from_payload,
)
from partscout.crawlers.result import RawRecord

SCRIPT = ExtractionScript(
    card_selectors=(".primary", ".secondary"),
    link_selector="a",
    title_selector=".name",
    price_selector=".price",
)


def test_fallback_chain_uses_first_matching_selector_only():
    html = """
    <div class="primary"><a href="/p/1"><span class="name">Primary 1</span></a></div>
    <div class="secondary"><a href="/p/2"><span class="name">Secondary</span></a></div>
    <div class="primary"><a href="/p/3"><span class="name">Primary 2</span></a></div>
    """
    records = extract_records_from_html(html, SCRIPT)
    assert [r.title for r in records] == ["Primary 1", "Primary 2"]


def test_falls_back_when_earlier_selector_has_no_match():
    html = '<div class="secondary"><a href="/p/2"><span class="name">Secondary</span></a></div>'
    records = extract_records_from_html(html, SCRIPT)
    assert [r.href for r in records] == ["/p/2"]


def test_cards_without_link_or_title_are_skipped():
    html = """
    <div class="primary"><span class="name">No link</span></div>
    <div class="primary"><a href="/p/1">No title</a></div>
    <div class="primary"><a href="/p/2"><span class="name">Ok</span></a><span class="price">$5</span></div>
    """
    records = extract_records_from_html(html, SCRIPT)
    assert records == [RawRecord(title="Ok", href="/p/2", price="$5", image="")]


def test_image_falls_back_to_data_src():
    html = """
    <div class="primary"><a href="/p/1"><span class="name">Lazy</span></a>
      <img data-src="/lazy.jpg"></div>
    """
    assert extract_records_from_html(html, SCRIPT)[0].image == "/lazy.jpg"


def test_empty_html_yields_nothing():
    assert extract_records_from_html("", SCRIPT) == []


def test_a_premium_script_on_product_card_markup():
    html = """
    <div class="ProductCard_root">
      <a href="/product/oxygen-sensor-123"><h3 class="ProductCard_title">Upstream Oxygen Sensor</h3></a>
      <div class="ProductCard_price">$29.99</div>
      <img src="https://cdn.a-premium.com/o2.jpg">
    </div>
    """
    records = extract_records_from_html(html, a_premium.SCRIPT)
    assert len(records) == 1
    assert records[0].title == "Upstream Oxygen Sensor"
    assert records[0].href == "/product/oxygen-sensor-123"
    assert records[0].price == "$29.99"


def test_dorman_script_has_no_price_selector():
    assert dorman.SCRIPT.price_selector is None


def test_payload_is_plain_serializable_data():
    payload = SCRIPT.to_payload()
    assert payload["card_selectors"] == [".primary", ".secondary"]
    assert payload["link_selector"] == "a"
    assert "(script) =>" in EXTRACT_RECORDS_JS


def test_records_from_payload_ignores_garbage():
    assert records_from_payload(None) == []
    assert records_from_payload({"title": "x"}) == []
    records = records_from_payload([{"title": "A", "href": "/a", "price": None}, "junk"])
    assert records == [RawRecord(title="A", href="/a", price="", image="")]
