"""
키워드 리서치 결과 모델
KeywordResult / RunSnapshot / AccessToken / RunOutcome 데이터 클래스
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterator, List, Optional


def round_half_up(value: float) -> int:
    """0.5는 올림 처리하는 반올림 (round()의 은행가 반올림 대신 사용)"""
    return int(math.floor(value + 0.5))


@dataclass
class KeywordResult:
    """키워드 1개에 대한 검색 결과"""

    keyword: str
    item_count: int  # 실패 시 -1
    avg_popularity_score: int = 0
    estimated_demand_score: int = 0
    popularity_delta: int = 0
    supply_delta: int = 0
    error_message: Optional[str] = None
    captured_at: date = field(default_factory=date.today)

    @classmethod
    def failed(cls, keyword: str, error_message: str, captured_at: Optional[date] = None) -> "KeywordResult":
        """실패 결과 생성 (item_count=-1, 나머지 수치는 0)"""
        return cls(
            keyword=keyword,
            item_count=-1,
            error_message=error_message,
            captured_at=captured_at or date.today(),
        )

    @property
    def is_ok(self) -> bool:
        return self.error_message is None

    def to_dict(self) -> dict:
        """KeywordResult를 딕셔너리로 변환"""
        return {
            "keyword": self.keyword,
            "item_count": self.item_count,
            "avg_popularity_score": self.avg_popularity_score,
            "estimated_demand_score": self.estimated_demand_score,
            "popularity_delta": self.popularity_delta,
            "supply_delta": self.supply_delta,
            "error_message": self.error_message,
            "captured_at": self.captured_at.isoformat(),
        }


@dataclass
class RunSnapshot:
    """파이프라인 1회 실행의 순서 있는 결과 집합"""

    results: List[KeywordResult] = field(default_factory=list)

    def append(self, result: KeywordResult) -> None:
        self.results.append(result)

    def find(self, keyword: str) -> Optional[KeywordResult]:
        """같은 키워드(완전 일치)의 결과 조회"""
        for result in self.results:
            if result.keyword == keyword:
                return result
        return None

    @property
    def keywords(self) -> List[str]:
        return [r.keyword for r in self.results]

    def __iter__(self) -> Iterator[KeywordResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, index: int) -> KeywordResult:
        return self.results[index]


@dataclass
class AccessToken:
    """client credentials 방식으로 발급된 Bearer 토큰"""

    access_token: str
    expires_in: int  # 초
    token_type: str = "Bearer"
    issued_at: datetime = field(default_factory=datetime.now)

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + timedelta(seconds=self.expires_in)

    @property
    def expires_in_minutes(self) -> int:
        return round_half_up(self.expires_in / 60)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now()) >= self.expires_at


@dataclass
class RunOutcome:
    """파이프라인 실행 결과 (스냅샷 + 최종 진행률)"""

    snapshot: RunSnapshot
    keyword_count: int
    progress: float = 0.0  # 0.0 ~ 1.0
    token_expired: bool = False

    @property
    def completed(self) -> bool:
        return not self.token_expired and len(self.snapshot) == self.keyword_count

    @property
    def progress_percent(self) -> int:
        return round_half_up(self.progress * 100)
