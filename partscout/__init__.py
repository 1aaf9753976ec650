"""partscout - 자동차 부품 검색 결과 수집/제공 서버"""

__version__ = "1.0.0"
