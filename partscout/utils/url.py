"""URL 파싱 유틸리티"""
from typing import Optional
from urllib.parse import urljoin, urlparse

ALLOWED_SCHEMES = ("http", "https")


def is_http_url(url: str) -> bool:
    """http/https 스킴과 호스트가 있는 절대 URL인지 확인"""
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme.lower() in ALLOWED_SCHEMES and bool(parsed.hostname)


def resolve_url(href: str, base_url: str) -> Optional[str]:
    """상대/프로토콜-상대 href를 base_url 기준 절대 URL로 정규화합니다.

    - "//host/path" -> "https://host/path" (base 스킴 따름)
    - "/path" -> "{base_url 호스트}/path"
    - "http(s)://..." -> 그대로
    - javascript:, mailto:, 해석 불가 -> None
    """
    if not href:
        return None

    h = href.strip()
    if not h or h.startswith("#"):
        return None

    try:
        absolute = urljoin(base_url, h)
    except ValueError:
        return None

    return absolute if is_http_url(absolute) else None


def extract_hostname(url: str) -> Optional[str]:
    """URL에서 소문자 호스트명 추출 (실패 시 None)"""
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    return host.lower() if host else None
