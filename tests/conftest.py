"""
pytest 설정 및 공통 픽스처 모음
테스트 전체에서 사용되는 재사용 가능한 픽스처 정의
"""

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from models.keyword_result import KeywordResult, RunSnapshot


def make_response(status: int = 200, payload=None, text: str | None = None) -> dict:
    """AsyncHTTPClient 응답 형식의 딕셔너리 생성"""
    if text is None:
        text = json.dumps(payload if payload is not None else {})
    return {
        "status": status,
        "text": text,
        "url": "https://api.spotify.com/v1/search",
        "headers": {},
    }


def search_payload(total: int, popularities: list) -> dict:
    """Spotify 검색 응답 (audiobooks 섹션) 생성. None은 popularity 필드 없음"""
    items = []
    for i, popularity in enumerate(popularities):
        item = {"id": f"book{i}", "name": f"Book {i}"}
        if popularity is not None:
            item["popularity"] = popularity
        items.append(item)
    return {"audiobooks": {"total": total, "items": items}}


@pytest.fixture
def mock_http_client():
    """
    HTTP 클라이언트 모킹
    네트워크 요청 없이 테스트 수행
    """
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    return client


@pytest.fixture
def capture_date():
    return date(2026, 10, 17)


@pytest.fixture
def sample_snapshot(capture_date):
    """
    테스트용 스냅샷
    성공 2개 + 실패 1개
    """
    return RunSnapshot([
        KeywordResult(
            keyword="mystery",
            item_count=499,
            avg_popularity_score=62,
            estimated_demand_score=99,
            popularity_delta=5,
            supply_delta=-3,
            captured_at=capture_date,
        ),
        KeywordResult.failed("romance", "API error: 500", captured_at=capture_date),
        KeywordResult(
            keyword="stoicism",
            item_count=0,
            avg_popularity_score=50,
            estimated_demand_score=0,
            captured_at=capture_date,
        ),
    ])
