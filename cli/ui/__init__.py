# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

CLI 전용 출력 유틸리티 (테이블 렌더링, 상태 메시지, Rich 로깅)
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_WARNING,
    console,
    err_console,
    format_cell,
    get_console,
    get_logger,
    print_error,
    print_table,
    print_warning,
)

__all__: list[str] = [
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    "console",
    "err_console",
    "format_cell",
    "get_console",
    "get_logger",
    "print_error",
    "print_table",
    "print_warning",
]
