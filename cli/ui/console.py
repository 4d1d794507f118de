"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들
"""

from __future__ import annotations

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from core.config import LogConfig
from core.tags import KeyValueTags

# botocore 노이즈 로그 제한
logging.getLogger("botocore.httpchecksum").setLevel(logging.WARNING)
logging.getLogger("botocore.credentials").setLevel(logging.WARNING)
logging.getLogger("botocore.loaders").setLevel(logging.WARNING)
logging.getLogger("botocore.session").setLevel(logging.WARNING)


def get_console() -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        color_system="auto",
        highlight=True,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()


def setup_logging(verbose: bool = False) -> None:
    """루트 logger에 Rich 핸들러 설정

    Args:
        verbose: True이면 DEBUG, 아니면 LOG_LEVEL 환경변수 (기본 WARNING)
    """
    config = LogConfig.from_env()
    level = logging.DEBUG if verbose else getattr(logging, config.level, logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)

    # 이미 Rich 핸들러가 있으면 레벨만 갱신
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=verbose)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

# 상태 심볼
SYMBOL_SUCCESS = "✓"  # 완료
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고
SYMBOL_INFO = "•"  # 정보


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[green]{SYMBOL_SUCCESS} {message}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[red]{SYMBOL_ERROR} {message}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {message}[/yellow]")


def print_info(message: str) -> None:
    console.print(f"[dim]{SYMBOL_INFO} {message}[/dim]")


def print_table(
    title: str,
    columns: list[str],
    rows: list[list],
) -> None:
    """테이블 형식으로 데이터를 출력합니다.

    Args:
        title: 테이블 제목
        columns: 컬럼 헤더 리스트
        rows: 행 데이터 리스트
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for column in columns:
        table.add_column(column)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    console.print(table)


def print_tags(title: str, tags: KeyValueTags) -> None:
    """태그 목록 테이블 (키 정렬)"""
    print_table(title, ["Key", "Value"], [[k, v] for k, v in zip(tags.keys(), tags.values())])


def print_tag_diff(old: KeyValueTags, removed: KeyValueTags, updated: KeyValueTags) -> None:
    """태그 변경 내역 테이블

    Args:
        old: 현재 태그
        removed: 제거될 태그
        updated: 추가/변경될 태그
    """
    table = Table(title="태그 변경 내역", show_header=True, header_style="bold magenta")
    table.add_column("")
    table.add_column("Key", style="cyan")
    table.add_column("현재 값")
    table.add_column("새 값")

    for key in removed.keys():
        table.add_row("[red]-[/red]", key, old.key_value(key) or "", "")
    for key in updated.keys():
        marker = "[yellow]~[/yellow]" if old.key_exists(key) else "[green]+[/green]"
        table.add_row(marker, key, old.key_value(key) or "", updated.key_value(key) or "")

    console.print(table)
