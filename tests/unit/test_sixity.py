"""Sixity Auto (Searchspring JSON) 파서 / URL 단위 테스트"""

from urllib.parse import parse_qs, urlparse

import pytest

from partscout.core.exceptions import ParseMismatchException
from partscout.crawlers.adapters import sixity


def test_build_url_targets_searchspring_with_encoded_keyword():
    url = sixity.build_url("Oxygen Sensor")
    parsed = urlparse(url)
    query = parse_qs(parsed.query)

    assert parsed.hostname == "hzbon8.a.searchspring.io"
    assert parsed.path == "/api/search/search.json"
    assert query["q"] == ["Oxygen Sensor"]
    assert query["siteId"] == ["hzbon8"]
    assert query["resultsFormat"] == ["native"]
    assert query["domain"] == ["https://www.sixityauto.com/search?q=Oxygen%20Sensor"]


def test_parse_results_maps_fields():
    payload = {
        "results": [
            {"name": "O2 Sensor", "url": "/products/o2", "price": "19.99", "thumbnailImageUrl": "https://cdn/x.jpg"},
            {"name": "No price", "url": "/products/np"},
        ]
    }
    records = sixity.parse_results(payload)

    assert records[0].title == "O2 Sensor"
    assert records[0].href == "/products/o2"
    assert records[0].price == "$19.99"
    assert records[0].image == "https://cdn/x.jpg"
    assert records[1].price == ""
    assert records[1].image == ""


def test_parse_results_skips_non_object_entries():
    assert len(sixity.parse_results({"results": [None, "x", {"name": "A", "url": "/a"}]})) == 1


def test_empty_results_is_valid():
    assert sixity.parse_results({"results": []}) == []


@pytest.mark.parametrize("payload", [[], "text", {"pagination": {}}, {"results": {"name": "x"}}])
def test_unexpected_shape_raises_parse_mismatch(payload):
    with pytest.raises(ParseMismatchException):
        sixity.parse_results(payload)


@pytest.mark.parametrize("price", [0, 0.0, "", None])
def test_falsy_price_renders_empty(price):
    records = sixity.parse_results({"results": [{"name": "A", "url": "/a", "price": price}]})
    assert records[0].price == ""
