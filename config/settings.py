"""
AudiobookResearch 설정 관리
환경변수(.env)에서 설정값을 로드합니다.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# 프로젝트 루트 경로
BASE_DIR = Path(__file__).resolve().parent.parent

# .env 로드
load_dotenv(BASE_DIR / ".env", override=True)


class Settings:
    """전역 설정"""

    # === 프로젝트 경로 ===
    BASE_DIR: Path = BASE_DIR
    OUTPUT_DIR: Path = Path(os.getenv("OUTPUT_DIR", str(BASE_DIR / "output")))

    # === Spotify 인증 (client credentials) ===
    SPOTIFY_CLIENT_ID: str = os.getenv("SPOTIFY_CLIENT_ID", "")
    SPOTIFY_CLIENT_SECRET: str = os.getenv("SPOTIFY_CLIENT_SECRET", "")
    SPOTIFY_TOKEN_URL: str = os.getenv("SPOTIFY_TOKEN_URL", "https://accounts.spotify.com/api/token")

    # === Spotify 검색 API ===
    SPOTIFY_SEARCH_URL: str = os.getenv("SPOTIFY_SEARCH_URL", "https://api.spotify.com/v1/search")
    SEARCH_TYPE: str = os.getenv("SEARCH_TYPE", "audiobook")
    SEARCH_LIMIT: int = int(os.getenv("SEARCH_LIMIT", "50"))  # 키워드당 최대 아이템 수

    # === 요청 설정 ===
    THROTTLE_DELAY: float = float(os.getenv("THROTTLE_DELAY", "0.1"))  # 키워드 간 딜레이 (초)
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))  # 요청 타임아웃 (초)

    # === 분석 설정 ===
    TOP_OPPORTUNITIES: int = int(os.getenv("TOP_OPPORTUNITIES", "10"))

    # === 로깅 ===
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))

    # === HTTP 클라이언트 ===
    USER_AGENT: str = "AudiobookResearch/1.0"

    @classmethod
    def validate(cls, client_id: str | None = None, client_secret: str | None = None) -> list[str]:
        """필수 설정값 검증 (인자로 받은 값 우선). 누락된 항목 리스트 반환."""
        client_id = client_id or cls.SPOTIFY_CLIENT_ID
        client_secret = client_secret or cls.SPOTIFY_CLIENT_SECRET
        missing = []
        if not client_id.strip():
            missing.append("SPOTIFY_CLIENT_ID")
        if not client_secret.strip():
            missing.append("SPOTIFY_CLIENT_SECRET")
        return missing

    @classmethod
    def ensure_dirs(cls):
        """필요한 디렉토리 생성"""
        cls.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
