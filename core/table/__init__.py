"""
core/table - 리소스 테이블 프레임워크

원격 페이지네이션 목록 API를 조건 pushdown, 행 제한, 단건 조회,
합성 컬럼을 지원하는 행 스트림으로 변환합니다.

주요 구성 요소:
- Table / ListConfig / GetConfig: 테이블 선언과 실행
- FilterKey / build_filters: 컬럼 조건 → 업스트림 필터 변환
- QueryData / QueryStatus: 행 제한, 취소, 행 스트리밍
- Column / ColumnType: 컬럼 선언
- ListResult / GetResult / HydrateResults: 조회 경로 variant
- TableRegistry / discover_tables: 테이블 발견 및 등록 시점 검증

Example:
    from core.table import Qualifier, discover_tables

    registry = discover_tables()
    rows = list(
        registry.get("aws_vpc_subnet").fetch_rows(
            session=session,
            region="ap-northeast-2",
            qualifiers=[Qualifier("vpc_id", "vpc-0123")],
            limit=20,
        )
    )
"""

from .columns import Column, ColumnType, aws_regional_columns
from .filters import FilterKey, FilterValueType, Qualifier, build_filters, qualifier_map
from .hydrate import FetchOperation, GetResult, HydrateResults, ListResult, TransformData
from .query import QueryContext, QueryData, QueryStatus, RowSink
from .registry import TableRegistry, discover_tables
from .table import GetConfig, ListConfig, Table, is_not_found_error

__all__: list[str] = [
    # Table
    "Table",
    "ListConfig",
    "GetConfig",
    "is_not_found_error",
    # Columns
    "Column",
    "ColumnType",
    "aws_regional_columns",
    # Filters
    "FilterKey",
    "FilterValueType",
    "Qualifier",
    "build_filters",
    "qualifier_map",
    # Query
    "QueryContext",
    "QueryData",
    "QueryStatus",
    "RowSink",
    # Hydrate
    "FetchOperation",
    "ListResult",
    "GetResult",
    "HydrateResults",
    "TransformData",
    # Registry
    "TableRegistry",
    "discover_tables",
]
