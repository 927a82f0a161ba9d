"""
키워드 리서치 예외 정의
"""

from typing import Any


class ResearchError(Exception):
    """키워드 리서치 기본 예외"""

    pass


class InvalidCredentials(ResearchError):
    """Client ID / Secret 누락 (네트워크 호출 전 검증)"""

    def __init__(self, missing: list[str] | None = None):
        self.missing = missing or []
        super().__init__(
            f"Missing credentials: {', '.join(self.missing) if self.missing else 'client_id, client_secret'}"
        )


class AuthRejected(ResearchError):
    """토큰 엔드포인트가 인증을 거부함"""

    def __init__(self, status_code: int, detail: str | None = None):
        self.status_code = status_code
        self.detail = detail
        msg = f"Spotify auth failed (status: {status_code})"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class MissingToken(ResearchError):
    """액세스 토큰 없이 검색 시도"""

    def __init__(self):
        super().__init__("Please request an access token first")


class NoKeywords(ResearchError):
    """유효한 키워드가 하나도 없음"""

    def __init__(self):
        super().__init__("Please enter at least one keyword")


class TokenExpired(ResearchError):
    """검색 도중 토큰 만료 (401) - 파이프라인 중단"""

    def __init__(self, outcome: Any = None):
        # 중단 시점까지의 RunOutcome
        self.outcome = outcome
        super().__init__("Token expired. Request a new one.")


class KeywordFetchFailed(ResearchError):
    """개별 키워드 검색 실패 (파이프라인은 계속 진행)"""

    def __init__(self, keyword: str, status_code: int, detail: str | None = None):
        self.keyword = keyword
        self.status_code = status_code
        self.detail = detail
        if detail:
            msg = detail
        else:
            msg = f"API error: {status_code}"
        super().__init__(msg)
