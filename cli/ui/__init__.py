# cli/ui - 콘솔 출력 (rich)
"""
콘솔 출력 모듈

CLI 전용 출력 헬퍼 (메시지, 테이블, 태그 diff, 로깅 핸들러)
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    console,
    get_console,
    print_error,
    print_info,
    print_success,
    print_table,
    print_tag_diff,
    print_tags,
    print_warning,
    setup_logging,
)

__all__: list[str] = [
    "console",
    "get_console",
    "setup_logging",
    # 심볼
    "SYMBOL_SUCCESS",
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    "SYMBOL_INFO",
    # 출력
    "print_success",
    "print_error",
    "print_warning",
    "print_info",
    "print_table",
    "print_tags",
    "print_tag_diff",
]
