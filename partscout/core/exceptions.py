"""커스텀 예외 정의 (Structured Exception Hierarchy)

HTTP 경계에서는 status_code로 변환되고, 재시도 여부는 클래스 계층으로 결정됩니다.
- InvalidInputException: 재시도 금지, 400
- UpstreamUnavailableException (+ ParseMismatchException): 재시도 대상, 502
- NotFoundException: 404
- InternalException: 500
"""
from typing import Any, Optional


class PartScoutException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""

    status_code: int = 500

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 입력 검증
class InvalidInputException(PartScoutException):
    """잘못된 URL/누락된 파라미터"""

    status_code = 400

    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Invalid '{field}': {reason}"
        super().__init__(message, "INVALID_INPUT", details or {"field": field, "reason": reason})


# 업스트림(외부 사이트) 관련 예외
class UpstreamUnavailableException(PartScoutException):
    """네트워크 실패 또는 비정상 응답 - 재시도 대상"""

    status_code = 502

    def __init__(self, message: str, error_code: str = "UPSTREAM_UNAVAILABLE", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "UPSTREAM_UNAVAILABLE", details)


class UpstreamStatusException(UpstreamUnavailableException):
    """2xx가 아닌 HTTP 상태"""

    def __init__(self, url: str, status: int, details: Optional[dict[str, Any]] = None):
        message = f"Upstream returned HTTP {status}"
        super().__init__(message, "UPSTREAM_STATUS", details or {"url": url, "status": status})
        self.url = url
        self.status = status


class NetworkTimeoutException(UpstreamUnavailableException):
    """네트워크 타임아웃 예외"""

    def __init__(self, operation: str, timeout_ms: int, details: Optional[dict[str, Any]] = None):
        message = f"Network timeout during '{operation}' after {timeout_ms}ms"
        super().__init__(message, "NETWORK_TIMEOUT",
                         details or {"operation": operation, "timeout_ms": timeout_ms})


class BrowserException(UpstreamUnavailableException):
    """브라우저 실행/탐색 오류"""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "BROWSER_ERROR", details)


class ParseMismatchException(UpstreamUnavailableException):
    """구조화 응답이 기대한 형태가 아님 (API/마크업 변경) - 재시도 대상"""

    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Unexpected response shape: {reason}"
        super().__init__(message, "PARSE_MISMATCH", details or {"reason": reason})


# 조회 실패
class NotFoundException(PartScoutException):
    """사이트/키워드/스냅샷 없음"""

    status_code = 404

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "NOT_FOUND", details)


class InternalException(PartScoutException):
    """그 외 예상치 못한 오류"""

    status_code = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "INTERNAL_ERROR", details)
