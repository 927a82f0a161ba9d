"""
로깅 설정 (loguru 기반)
콘솔 출력 + 일별 로그 파일 (logs/research_YYYY-MM-DD.log)
"""

import sys
from pathlib import Path

from loguru import logger as _loguru_logger

_initialized = False

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{module}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {module}:{function}:{line} - {message}"


def normalize_level(log_level: str) -> str:
    """LOG_LEVEL 값 검증 (대소문자 무시). 알 수 없는 레벨이면 ValueError"""
    level = (log_level or "INFO").strip().upper()
    _loguru_logger.level(level)
    return level


def setup_logger(log_level: str = "INFO", log_dir: Path | None = None):
    """로거 초기화"""
    global _initialized
    if _initialized:
        return get_logger()

    level = normalize_level(log_level)

    _loguru_logger.remove()
    _loguru_logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)
    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        # 리서치 실행 기록은 2주 보관
        _loguru_logger.add(
            str(log_dir / "research_{time:YYYY-MM-DD}.log"),
            level=level,
            format=FILE_FORMAT,
            rotation="00:00",
            retention="14 days",
            encoding="utf-8",
        )

    _initialized = True
    return get_logger()


def get_logger():
    """로거 인스턴스 반환"""
    return _loguru_logger
