"""지원 사이트와 부품 키워드 카탈로그 (프로세스 수명 동안 불변)"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SiteConfig:
    id: str
    name: str
    folder: str
    base_url: str
    hosts: tuple[str, ...]

    def matches(self, hostname: str) -> bool:
        """호스트명이 등록된 도메인이거나 그 하위 도메인이면 True"""
        host = (hostname or "").lower().rstrip(".")
        if not host:
            return False
        return any(host == h or host.endswith("." + h) for h in self.hosts)


@dataclass(frozen=True)
class KeywordConfig:
    en: str
    zh: str
    slug: str


SITES: tuple[SiteConfig, ...] = (
    SiteConfig("a-premium", "A-Premium", "a-premium", "https://a-premium.com/", ("a-premium.com",)),
    SiteConfig("sixity", "Sixity Auto", "sixity-auto", "https://www.sixityauto.com/", ("sixityauto.com",)),
    SiteConfig("dorman", "Dorman Products", "dorman", "https://www.dormanproducts.com/", ("dormanproducts.com",)),
    SiteConfig("autodoc", "AUTODOC", "autodoc", "https://www.autodoc.parts/", ("autodoc.parts",)),
)

KEYWORDS: tuple[KeywordConfig, ...] = (
    KeywordConfig("Oil Level Sensor", "机油液位传感器", "oil-level-sensor"),
    KeywordConfig("Diesel Glow Plug Controller", "预热控制模块", "diesel-glow-plug-controller"),
    KeywordConfig("Steering Angle sensor", "方向盘转角传感器", "steering-angle-sensor"),
    KeywordConfig("MAP Sensor", "压力传感器", "map-sensor"),
    KeywordConfig(
        "Exhaust Gas PDF Differential Pressure Sensor",
        "排气压力传感器/压差传感器",
        "exhaust-gas-pdf-differential-pressure-sensor",
    ),
    KeywordConfig("EGTS Sensor", "尾气温度传感器", "egts-sensor"),
    KeywordConfig("Ride Height Level Sensor", "水平高度传感器", "ride-height-level-sensor"),
    KeywordConfig("air flow meter", "空气流量传感器", "air-flow-meter"),
    KeywordConfig("Oxygen Sensor", "氧传感器", "oxygen-sensor"),
    KeywordConfig("Throttle Position Sensor", "节气门位置传感器", "throttle-position-sensor"),
    KeywordConfig("Knock Sensor", "爆震传感器", "knock-sensor"),
    KeywordConfig("clock spring", "气囊游丝", "clock-spring"),
    KeywordConfig("Ignition Coils", "点火线圈", "ignition-coils"),
    KeywordConfig("Windshield Fluid Washer Pump", "清洗泵", "windshield-fluid-washer-pump"),
)


SITES_BY_ID: dict[str, SiteConfig] = {s.id: s for s in SITES}


def find_site(site_id: str) -> Optional[SiteConfig]:
    return SITES_BY_ID.get(site_id)


def find_keyword(keyword: str) -> Optional[KeywordConfig]:
    """영문 키워드(대소문자 무시) 또는 slug로 조회"""
    if not keyword:
        return None
    folded = keyword.strip().casefold()
    for k in KEYWORDS:
        if k.en.casefold() == folded or k.slug == folded:
            return k
    return None
