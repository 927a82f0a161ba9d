"""
Analyzer 모듈
리서치 결과 요약 통계와 기회 점수 랭킹
"""

from .opportunity_ranker import (
    RunSummary,
    opportunity_matrix,
    opportunity_score,
    rank_by_opportunity,
    summarize,
    top_opportunities,
)

__all__ = [
    "RunSummary",
    "opportunity_matrix",
    "opportunity_score",
    "rank_by_opportunity",
    "summarize",
    "top_opportunities",
]
