"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들
"""

import json
import logging
import platform
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

# botocore 노이즈 로그 제한
logging.getLogger("botocore.httpchecksum").setLevel(logging.WARNING)
logging.getLogger("botocore.credentials").setLevel(logging.WARNING)
logging.getLogger("botocore.loaders").setLevel(logging.WARNING)
logging.getLogger("botocore.session").setLevel(logging.WARNING)


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=True,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()
err_console = get_console(stderr=True)


def get_logger(name: str = "rich", level: int = logging.INFO) -> logging.Logger:
    """Rich 핸들러가 설정된 logger를 반환합니다.

    Args:
        name: logger 이름 (기본값: "rich")
        level: 로그 레벨

    Returns:
        logging.Logger: 설정된 logger 인스턴스
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 이미 핸들러가 설정되어 있으면 반환
    if logger.handlers:
        return logger

    handler = RichHandler(console=err_console, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger


# =============================================================================
# 표준 출력 스타일
# =============================================================================

SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)"""
    err_console.print(f"[red]{SYMBOL_ERROR} {message}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    err_console.print(f"[yellow]{SYMBOL_WARNING} {message}[/yellow]")


def format_cell(value: Any) -> str:
    """테이블 셀 표시 문자열 (dict/list는 JSON)"""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def print_table(
    title: str,
    columns: list[str],
    rows: list[dict[str, Any]],
) -> None:
    """행(dict) 목록을 테이블 형식으로 출력합니다.

    Args:
        title: 테이블 제목
        columns: 출력할 컬럼 이름 (순서 유지)
        rows: 행 데이터
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for column in columns:
        table.add_column(column)

    for row in rows:
        table.add_row(*[format_cell(row.get(column)) for column in columns])

    console.print(table)
