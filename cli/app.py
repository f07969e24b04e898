"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
plugins/* 에서 발견한 테이블을 조회하는 쿼리 호스트 역할을 합니다.

명령어 구조:
    aq --version                        # 버전 표시
    aq tables                           # 등록된 테이블 목록
    aq columns aws_vpc_subnet           # 테이블 스키마
    aq query aws_vpc_subnet [옵션]      # 테이블 조회

    예시:
    aq query aws_vpc_subnet -r ap-northeast-2 -w vpc_id=vpc-0123 -l 10
    aq query aws_vpc_subnet -w subnet_id=subnet-0abc -f json

Usage:
    # 명령줄에서 직접 실행
    $ aq tables

    # 모듈로 실행
    $ python -m cli.app
"""

import json
import logging
import sys
from functools import lru_cache
from typing import Any

import click
from botocore.exceptions import BotoCoreError, ClientError

from cli.qualifiers import parse_where
from cli.ui import console, get_logger, print_error, print_table, print_warning
from core.config import LogConfig, get_default_profile, get_default_region, get_version
from core.exceptions import AQError, ConfigError, ValidationError, format_error_for_user
from core.table import QueryStatus, TableRegistry, discover_tables

VERSION = get_version()

# --verbose 시 Rich 핸들러로 DEBUG 로그를 출력할 패키지
VERBOSE_LOGGERS = ("core", "plugins", "cli")


@lru_cache(maxsize=1)
def _load_registry() -> TableRegistry:
    """플러그인 테이블 발견 (프로세스당 1회)"""
    return discover_tables()


def _configure_logging() -> None:
    """LOG_LEVEL 등 환경변수로 기본 로깅 설정

    알 수 없는 값이면 경고를 출력하고 기본값(WARNING)을 사용합니다.
    """
    try:
        log_config = LogConfig.from_env()
    except ConfigError as e:
        print_warning(f"{e} - 기본값을 사용합니다")
        log_config = LogConfig()

    logging.basicConfig(
        level=log_config.level,
        format=log_config.format,
        datefmt=log_config.date_format,
    )


def _configure_verbose_logging() -> None:
    for name in VERBOSE_LOGGERS:
        logger = get_logger(name, level=logging.DEBUG)
        logger.propagate = False


def _get_table_or_exit(name: str):
    try:
        return _load_registry().get(name)
    except AQError as e:
        print_error(str(e))
        available = e.details.get("available")
        if available:
            print_warning(f"사용 가능한 테이블: {', '.join(available)}")
        raise SystemExit(1) from None


@click.group()
@click.version_option(VERSION, prog_name="aq")
@click.option("-v", "--verbose", is_flag=True, help="DEBUG 로그 출력")
def cli(verbose: bool) -> None:
    """AWS 리소스를 테이블처럼 조회합니다."""
    _configure_logging()
    if verbose:
        _configure_verbose_logging()


@cli.command("tables")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
def tables_command(as_json: bool) -> None:
    """등록된 테이블 목록

    \b
    Examples:
        aq tables
        aq tables --json
    """
    registry = _load_registry()
    rows = [
        {
            "name": table.name,
            "description": table.description,
            "key_columns": ", ".join(table.key_column_names),
        }
        for table in registry
    ]

    if as_json:
        click.echo(json.dumps(rows, ensure_ascii=False, indent=2))
        return

    print_table("Tables", ["name", "description", "key_columns"], rows)


@cli.command("columns")
@click.argument("table_name")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
def columns_command(table_name: str, as_json: bool) -> None:
    """테이블 컬럼 목록

    \b
    Examples:
        aq columns aws_vpc_subnet
    """
    table = _get_table_or_exit(table_name)
    key_columns = set(table.key_column_names)
    rows = [
        {
            "name": column.name,
            "type": column.type.value,
            "filterable": column.name in key_columns,
            "description": column.description,
        }
        for column in table.columns
    ]

    if as_json:
        click.echo(json.dumps(rows, ensure_ascii=False, indent=2))
        return

    print_table(table.name, ["name", "type", "filterable", "description"], rows)


@cli.command("query")
@click.argument("table_name")
@click.option("-r", "--region", default=None, help="리전 (기본: AWS_REGION 또는 ap-northeast-2)")
@click.option("-p", "--profile", default=None, help="AWS 프로파일")
@click.option("-w", "--where", "where", multiple=True, help="컬럼=값 조건 (다중 가능, 쉼표로 IN 조건)")
@click.option("-l", "--limit", type=click.IntRange(min=0), default=None, help="최대 행 수")
@click.option("-c", "--columns", "columns", default=None, help="출력할 컬럼 (쉼표 구분)")
@click.option("-f", "--format", "output_format", type=click.Choice(["table", "json"]), default="table")
def query_command(
    table_name: str,
    region: str | None,
    profile: str | None,
    where: tuple[str, ...],
    limit: int | None,
    columns: str | None,
    output_format: str,
) -> None:
    """테이블 조회

    \b
    Examples:
        aq query aws_vpc_subnet -w vpc_id=vpc-0123 -l 10
        aq query aws_vpc_subnet -w subnet_id=subnet-0abc -f json
        aq query aws_vpc_subnet -w cidr_block=10.0.1.0/24 -c subnet_id,title
    """
    from core.client import create_session

    table = _get_table_or_exit(table_name)

    try:
        qualifiers = [parse_where(expr, table) for expr in where]
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--where") from None

    selected = _select_columns(table.column_names, columns)
    region = region or get_default_region()
    session = create_session(profile_name=profile or get_default_profile(), region_name=region)

    rows: list[dict[str, Any]] = []

    def sink(row: dict[str, Any]) -> None:
        projected = {name: row.get(name) for name in selected}
        if output_format == "json":
            click.echo(json.dumps(projected, ensure_ascii=False, default=str))
        else:
            rows.append(projected)

    status = QueryStatus(limit)
    error: Exception | None = None
    try:
        table.execute(sink=sink, session=session, region=region, qualifiers=qualifiers, status=status)
    except KeyboardInterrupt:
        status.cancel()
        print_warning("사용자가 취소했습니다")
    except (ClientError, BotoCoreError) as e:
        error = e

    if output_format == "table":
        print_table(f"{table.name} ({region})", selected, rows)
        console.print(f"[dim]{status.rows_streamed} rows[/dim]")

    if error is not None:
        print_error(format_error_for_user(error))
        sys.exit(1)


def _select_columns(all_columns: list[str], columns: str | None) -> list[str]:
    if not columns:
        return all_columns

    selected = [c.strip() for c in columns.split(",") if c.strip()]
    unknown = [c for c in selected if c not in all_columns]
    if unknown:
        raise click.BadParameter(f"알 수 없는 컬럼: {', '.join(unknown)}", param_hint="--columns")
    return selected


if __name__ == "__main__":
    cli()
