"""
리서치 세션 테스트
ResearchSession 기능 테스트
"""

from datetime import datetime, timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from modules.researcher import ResearchSession
from models.keyword_result import AccessToken, KeywordResult, RunOutcome, RunSnapshot
from utils.exceptions import MissingToken, TokenExpired


def _outcome(keywords: list[str], token_expired: bool = False, total: int | None = None) -> RunOutcome:
    snapshot = RunSnapshot([KeywordResult(k, item_count=1) for k in keywords])
    total = total or len(keywords)
    return RunOutcome(
        snapshot=snapshot,
        keyword_count=total,
        progress=len(keywords) / total,
        token_expired=token_expired,
    )


class TestResearchSession:
    """ResearchSession 클래스 테스트"""

    @pytest.fixture
    def session(self):
        acquirer = MagicMock()
        acquirer.request_token = AsyncMock(return_value=AccessToken("tok", 3600))
        pipeline = MagicMock()
        pipeline.run = AsyncMock()
        return ResearchSession("id", "secret", acquirer=acquirer, pipeline=pipeline)

    @pytest.mark.asyncio
    async def test_request_token_stores_token(self, session):
        token = await session.request_token()

        assert session.token is token
        assert session.has_token
        session.acquirer.request_token.assert_awaited_once_with("id", "secret")

    @pytest.mark.asyncio
    async def test_research_without_token(self, session):
        with pytest.raises(MissingToken):
            await session.research("mystery")
        session.pipeline.run.assert_not_called()

    @pytest.mark.asyncio
    async def test_snapshot_becomes_previous_for_next_run(self, session):
        """이전 실행 스냅샷을 다음 실행에 전달하고 교체"""
        first = _outcome(["a", "b"])
        second = _outcome(["b"])
        session.pipeline.run.side_effect = [first, second]
        await session.request_token()

        await session.research("a\nb")
        assert session.previous is first.snapshot

        await session.research("b")
        _, kwargs = session.pipeline.run.call_args
        assert kwargs["previous"] is first.snapshot
        assert session.previous is second.snapshot

    @pytest.mark.asyncio
    async def test_token_expiry_clears_token(self, session):
        """401 중단 시 토큰 폐기 + 부분 스냅샷 보관"""
        partial = _outcome(["a"], token_expired=True, total=3)
        session.pipeline.run.return_value = partial
        await session.request_token()

        with pytest.raises(TokenExpired) as exc_info:
            await session.research("a\nb\nc")

        assert exc_info.value.outcome is partial
        assert session.token is None
        assert not session.has_token
        assert session.previous is partial.snapshot

    @pytest.mark.asyncio
    async def test_locally_expired_token_is_not_sent(self, session):
        """만료 시각이 지난 토큰으로는 검색 요청을 보내지 않음"""
        session.token = AccessToken("old", 60, issued_at=datetime.now() - timedelta(minutes=5))

        with pytest.raises(MissingToken):
            await session.research("mystery")

        session.pipeline.run.assert_not_called()
