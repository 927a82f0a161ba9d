#!/usr/bin/env python3
"""
AudiobookResearch - 메인 CLI 엔트리포인트

사용법:
    python main.py token                                  # 토큰 발급 확인
    python main.py research --keywords-file keywords.txt  # 키워드 리서치
    python main.py research --previous output/audiobook-research-2026-10-01.csv
"""

import asyncio
import sys
import argparse
from pathlib import Path

from config.settings import settings
from models.keyword_result import round_half_up
from utils.exceptions import ResearchError, TokenExpired
from utils.logger import setup_logger, get_logger


def _credentials(args) -> tuple[str, str]:
    """CLI 인자 우선, 없으면 환경변수"""
    client_id = args.client_id or settings.SPOTIFY_CLIENT_ID
    client_secret = args.client_secret or settings.SPOTIFY_CLIENT_SECRET
    return client_id, client_secret


def _read_keywords(args) -> str:
    """키워드 파일 또는 표준입력에서 키워드 읽기"""
    if args.keywords_file:
        with open(args.keywords_file, "r", encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


# ============================================================
# CLI 명령어 핸들러
# ============================================================

def cmd_token(args) -> int:
    """토큰 발급 테스트"""
    from modules.auth import TokenAcquirer

    logger = get_logger()
    client_id, client_secret = _credentials(args)

    try:
        token = asyncio.run(TokenAcquirer().request_token(client_id, client_secret))
    except ResearchError as e:
        logger.error(f"토큰 발급 실패: {e}")
        print(f"❌ {e}")
        return 1

    print(f"✓ Token active (expires in {token.expires_in_minutes} minutes)")
    return 0


def cmd_research(args) -> int:
    """키워드 리서치 → 요약 → CSV 저장"""
    from modules.analyzer import opportunity_score, summarize, top_opportunities
    from modules.exporter import CsvExporter
    from modules.researcher import ResearchSession

    logger = get_logger()
    client_id, client_secret = _credentials(args)
    exporter = CsvExporter(Path(args.output) if args.output else None)

    try:
        previous = exporter.load_csv(Path(args.previous)) if args.previous else None
    except (OSError, ValueError) as e:
        logger.error(f"이전 결과 로드 실패: {e}")
        print(f"❌ {e}")
        return 1

    session = ResearchSession(client_id, client_secret, previous=previous)
    keywords = _read_keywords(args)

    def show_progress(progress, snapshot):
        last = snapshot[-1]
        status = "OK" if last.is_ok else f"Error - {last.error_message}"
        print(f"  [{round_half_up(progress * 100):3d}%] {last.keyword}: {status}")

    async def run_research():
        await session.request_token()
        print(f"🔑 Token active (expires in {session.token.expires_in_minutes} minutes)")
        return await session.research(keywords, on_progress=show_progress)

    print("🔍 키워드 리서치 시작...")
    try:
        outcome = asyncio.run(run_research())
    except TokenExpired as e:
        print(f"❌ {e}")
        if e.outcome is not None and len(e.outcome.snapshot):
            path = exporter.write_csv(e.outcome.snapshot)
            print(f"  💾 중단 전까지의 결과 저장: {path}")
        return 1
    except ResearchError as e:
        logger.error(f"리서치 실패: {e}")
        print(f"❌ {e}")
        return 1

    snapshot = outcome.snapshot
    summary = summarize(snapshot)
    print(f"\n📊 키워드 {summary.keyword_count}개 (유효 {summary.valid_count}개)")
    print(f"  총 오디오북 수: {summary.total_supply:,}")
    print(f"  평균 인기도: {summary.avg_popularity}")

    top = top_opportunities(snapshot, args.top)
    if top:
        print(f"\n🏆 상위 기회 키워드 {len(top)}개")
        for rank, result in enumerate(top, 1):
            print(
                f"  {rank:2d}. {result.keyword} - 기회 점수 {opportunity_score(result)} "
                f"(공급 {result.item_count}, 수요 {result.estimated_demand_score})"
            )

    path = exporter.write_csv(snapshot)
    print(f"\n✅ CSV 저장 완료: {path}")
    return 0


def main():
    """CLI 엔트리포인트"""
    # 환경 설정
    settings.ensure_dirs()
    setup_logger(settings.LOG_LEVEL, settings.LOG_DIR)

    parser = argparse.ArgumentParser(
        description="AudiobookResearch - Spotify 오디오북 키워드 시장 조사",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  python main.py token                                   # 토큰 발급 확인
  python main.py research --keywords-file keywords.txt   # 리서치 실행
  cat keywords.txt | python main.py research --top 5     # 표준입력 사용
        """,
    )
    parser.add_argument("--client-id", type=str, default=None, help="Spotify Client ID (기본: SPOTIFY_CLIENT_ID)")
    parser.add_argument("--client-secret", type=str, default=None, help="Spotify Client Secret (기본: SPOTIFY_CLIENT_SECRET)")

    subparsers = parser.add_subparsers(dest="command", help="실행할 명령")

    # token
    subparsers.add_parser("token", help="토큰 발급 확인")

    # research
    research_parser = subparsers.add_parser("research", help="키워드 리서치")
    research_parser.add_argument("--keywords-file", type=str, default=None, help="키워드 파일 (한 줄에 하나, 없으면 표준입력)")
    research_parser.add_argument("--previous", type=str, default=None, help="이전 실행 CSV (트렌드 비교용)")
    research_parser.add_argument("--output", type=str, default=None, help="CSV 저장 디렉토리")
    research_parser.add_argument("--top", type=int, default=settings.TOP_OPPORTUNITIES, help="상위 기회 키워드 수")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    # 자격 증명 검증 (CLI 인자 + 환경변수 조합 기준)
    missing = settings.validate(*_credentials(args))
    if missing:
        print(f"⚠️  필수 자격 증명 누락: {', '.join(missing)}")
        print(f"   .env 파일 또는 --client-id/--client-secret 인자를 확인하세요.")
        sys.exit(1)

    # 명령 실행
    commands = {
        "token": cmd_token,
        "research": cmd_research,
    }

    cmd_func = commands.get(args.command)
    sys.exit(cmd_func(args))


if __name__ == "__main__":
    main()
