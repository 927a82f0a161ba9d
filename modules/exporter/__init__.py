"""
Exporter 모듈
리서치 결과 CSV 내보내기/불러오기
"""

from .csv_exporter import CSV_HEADERS, CsvExporter, export_filename, format_trend

__all__ = [
    "CSV_HEADERS",
    "CsvExporter",
    "export_filename",
    "format_trend",
]
