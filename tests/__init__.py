"""
AudiobookResearch 테스트 패키지

테스트 모듈:
- test_token_acquirer: 토큰 발급 테스트
- test_pipeline: 키워드 리서치 파이프라인 테스트
- test_session: 리서치 세션 테스트
- test_analyzer: 기회 점수/요약 통계 테스트
- test_exporter: CSV 내보내기 테스트

공통 픽스처:
- conftest.py: 공유 픽스처 및 설정

실행 방법:
    pytest tests/                          # 모든 테스트 실행
    pytest tests/test_pipeline.py          # 특정 모듈만
    pytest tests/ -v                       # 상세 출력
"""

__version__ = "1.0.0"
__author__ = "AudiobookResearch"
