"""
Researcher 모듈
Spotify 검색 API 기반 키워드 리서치 파이프라인
"""

from .keyword_pipeline import KeywordResearchPipeline, parse_keywords
from .session import ResearchSession

__all__ = [
    "KeywordResearchPipeline",
    "ResearchSession",
    "parse_keywords",
]
