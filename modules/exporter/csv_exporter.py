"""
CSV 내보내기 모듈
RunSnapshot을 CSV로 변환/저장하고, 저장된 CSV를 다시 스냅샷으로 읽어옵니다.
"""

import csv
import io
import re
from datetime import date
from pathlib import Path
from typing import Optional

from models.keyword_result import KeywordResult, RunSnapshot
from utils.logger import get_logger
from config.settings import settings

logger = get_logger()

CSV_HEADERS = [
    "Keyword",
    "Audiobooks Found",
    "Avg Popularity",
    "Estimated Trends Interest",
    "Popularity Trend",
    "Supply Trend",
    "Status",
]

FILENAME_PREFIX = "audiobook-research"
_FILENAME_DATE = re.compile(r"(\d{4}-\d{2}-\d{2})")


def format_trend(delta: int) -> str:
    """양수는 '+' 접두사, 음수/0은 그대로"""
    return f"+{delta}" if delta > 0 else str(delta)


def export_filename(day: Optional[date] = None) -> str:
    """audiobook-research-YYYY-MM-DD.csv"""
    return f"{FILENAME_PREFIX}-{(day or date.today()).isoformat()}.csv"


class CsvExporter:
    """리서치 결과 CSV 내보내기 클래스"""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir or settings.OUTPUT_DIR)

    def to_rows(self, snapshot: RunSnapshot) -> list[list[str]]:
        """스냅샷 → CSV 행 목록 (실패 행은 '-' 표시)"""
        rows = []
        for r in snapshot:
            if r.is_ok:
                rows.append([
                    r.keyword,
                    str(r.item_count),
                    str(r.avg_popularity_score),
                    str(r.estimated_demand_score),
                    format_trend(r.popularity_delta),
                    format_trend(r.supply_delta),
                    "OK",
                ])
            else:
                rows.append([r.keyword, "Error", "-", "-", "-", "-", r.error_message])
        return rows

    def to_csv(self, snapshot: RunSnapshot) -> str:
        """스냅샷 → CSV 텍스트 (모든 셀 큰따옴표)"""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        writer.writerows(self.to_rows(snapshot))
        return buffer.getvalue()

    def write_csv(self, snapshot: RunSnapshot, day: Optional[date] = None) -> Path:
        """CSV 파일 저장 후 경로 반환"""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path = self.output_dir / export_filename(day)

            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(self.to_csv(snapshot))

            logger.info(f"CSV 저장 완료: {path} ({len(snapshot)}개 행)")
            return path

        except OSError as e:
            logger.error(f"CSV 저장 실패: {e}")
            raise

    def load_csv(self, path: Path) -> RunSnapshot:
        """이전에 내보낸 CSV를 스냅샷으로 복원 (다음 실행의 변화량 계산용)"""
        path = Path(path)
        match = _FILENAME_DATE.search(path.name)
        captured_at = date.fromisoformat(match.group(1)) if match else date.today()

        snapshot = RunSnapshot()
        with open(path, "r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            missing = [h for h in CSV_HEADERS if h not in (reader.fieldnames or [])]
            if missing:
                raise ValueError(f"CSV 헤더 누락: {', '.join(missing)} ({path})")

            for row in reader:
                snapshot.append(self._parse_row(row, captured_at))

        logger.info(f"이전 결과 로드: {path} ({len(snapshot)}개 키워드)")
        return snapshot

    def _parse_row(self, row: dict, captured_at: date) -> KeywordResult:
        """CSV 행 → KeywordResult"""
        keyword = (row.get("Keyword") or "").strip()
        if row.get("Audiobooks Found") == "Error":
            return KeywordResult.failed(keyword, row.get("Status") or "Error", captured_at=captured_at)

        try:
            return KeywordResult(
                keyword=keyword,
                item_count=int(row["Audiobooks Found"]),
                avg_popularity_score=int(row["Avg Popularity"]),
                estimated_demand_score=int(row["Estimated Trends Interest"]),
                popularity_delta=int(row["Popularity Trend"]),
                supply_delta=int(row["Supply Trend"]),
                captured_at=captured_at,
            )
        except ValueError as e:
            raise ValueError(f"CSV 행 파싱 실패 ('{keyword}'): {e}") from e
