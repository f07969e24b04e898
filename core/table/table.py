"""
core/table/table.py - 리소스 테이블 정의와 실행

Table은 컬럼, list/get 설정, 필터 매핑을 선언하고 쿼리를 실행합니다.

실행 흐름:
    1. get 키 컬럼에 등호 조건이 모두 있으면 get 경로 (키 값마다 단건 조회)
    2. 그 외에는 list 경로 (필터 pushdown + 페이지네이션)
    3. 조회된 레코드는 QueryData.stream_*_item()으로 행이 되어 sink로 전달

에러 정책:
    - hydrate 함수는 에러를 삼키지 않고 그대로 전파합니다.
    - get 경로에서 GetConfig.should_ignore_error가 True를 반환한 에러만
      "행 없음"으로 재분류합니다.

Usage:
    from core.table import Qualifier
    from plugins.vpc.subnet import table

    rows = list(table().fetch_rows(client=ec2, region="ap-northeast-2",
                                   qualifiers=[Qualifier("vpc_id", "vpc-123")], limit=10))
"""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.client import get_client
from core.config import settings
from core.exceptions import TableDefinitionError, get_error_code
from core.types.aliases import AWSRecord, Row

from .columns import Column, ColumnType
from .filters import FilterKey, QualMap, Qualifier, qualifier_map, validate_filter_keys
from .hydrate import HydrateResults
from .query import QueryContext, QueryData, QueryStatus, RowSink

logger = logging.getLogger(__name__)

ShouldIgnoreError = Callable[[Exception], bool]
ListHydrate = Callable[[QueryData], None]
GetHydrate = Callable[[QueryData], "AWSRecord | None"]


def is_not_found_error(codes: Iterable[str]) -> ShouldIgnoreError:
    """지정한 AWS 에러 코드를 "행 없음"으로 취급하는 정책 함수 생성

    Args:
        codes: 무시할 에러 코드 (예: "InvalidSubnetID.NotFound")

    Returns:
        ClientError이고 코드가 목록에 있으면 True를 반환하는 함수
    """
    code_set = frozenset(codes)

    def should_ignore(error: Exception) -> bool:
        return isinstance(error, ClientError) and get_error_code(error) in code_set

    return should_ignore


@dataclass(frozen=True)
class GetConfig:
    """단건 조회 설정

    Attributes:
        key_columns: 단건 조회에 필요한 키 컬럼
        hydrate: QueryData를 받아 레코드 또는 None을 반환
        should_ignore_error: "행 없음"으로 재분류할 에러 판별 함수
    """

    key_columns: tuple[str, ...]
    hydrate: GetHydrate
    should_ignore_error: ShouldIgnoreError | None = None


@dataclass(frozen=True)
class ListConfig:
    """목록 조회 설정

    Attributes:
        hydrate: QueryData를 받아 레코드를 스트리밍
        filter_keys: pushdown 가능한 컬럼 매핑 테이블
        max_results: 기본 페이지 크기
    """

    hydrate: ListHydrate
    filter_keys: tuple[FilterKey, ...] = ()
    max_results: int = settings.DEFAULT_PAGE_SIZE


@dataclass
class Table:
    """리소스 테이블

    Attributes:
        name: 테이블 이름 (예: "aws_vpc_subnet")
        description: 설명
        columns: 컬럼 목록 (선언 순서가 행의 컬럼 순서)
        list_config: 목록 조회 설정
        get_config: 단건 조회 설정
        service: boto3 서비스 이름
    """

    name: str
    description: str
    columns: list[Column]
    list_config: ListConfig
    get_config: GetConfig | None = None
    service: str = "ec2"
    _columns_by_name: dict[str, Column] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self._columns_by_name = {c.name: c for c in self.columns}

    # ------------------------------------------------------------------
    # 정의 검증
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """테이블 정의 검증

        Raises:
            TableDefinitionError: 정의 결함이 있는 경우
        """
        names = [c.name for c in self.columns]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise TableDefinitionError(self.name, f"중복 컬럼: {duplicates}")

        for column in self.columns:
            if not isinstance(column.type, ColumnType):
                raise TableDefinitionError(self.name, f"컬럼 '{column.name}'의 타입이 ColumnType이 아닙니다")

        validate_filter_keys(self.name, self.list_config.filter_keys, names)

        if self.list_config.max_results < settings.MIN_PAGE_SIZE:
            raise TableDefinitionError(
                self.name, f"max_results는 {settings.MIN_PAGE_SIZE} 이상이어야 합니다"
            )

        if self.get_config is not None:
            if not self.get_config.key_columns:
                raise TableDefinitionError(self.name, "get 키 컬럼이 비어 있습니다")
            for key in self.get_config.key_columns:
                if key not in self._columns_by_name:
                    raise TableDefinitionError(self.name, f"get 키 컬럼 '{key}'이(가) 컬럼 목록에 없습니다")

    # ------------------------------------------------------------------
    # 스키마
    # ------------------------------------------------------------------

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def get_column(self, name: str) -> Column | None:
        return self._columns_by_name.get(name)

    @property
    def key_column_names(self) -> list[str]:
        """조건을 받을 수 있는 컬럼 (get 키 + 필터 매핑)"""
        names = list(self.get_config.key_columns) if self.get_config else []
        names.extend(k.column_name for k in self.list_config.filter_keys if k.column_name not in names)
        return names

    # ------------------------------------------------------------------
    # 행 생성
    # ------------------------------------------------------------------

    def build_row(self, results: HydrateResults, region: str) -> Row:
        """조회 결과로부터 선언 순서대로 행 생성"""
        return {column.name: column.resolve(results, region) for column in self.columns}

    def row_matches(self, row: Row, quals: QualMap) -> bool:
        """행이 등호 조건을 모두 만족하는지 확인

        테이블에 없는 컬럼, 등호가 아닌 조건은 확인하지 않습니다.
        """
        for column_name, column_quals in quals.items():
            column = self._columns_by_name.get(column_name)
            if column is None:
                continue
            for qual in column_quals:
                if not qual.is_equality or qual.value is None:
                    continue
                if not any(_values_equal(column.type, row.get(column_name), v) for v in qual.values):
                    return False
        return True

    # ------------------------------------------------------------------
    # 실행
    # ------------------------------------------------------------------

    def execute(
        self,
        sink: RowSink,
        region: str,
        client: Any = None,
        session: Any = None,
        qualifiers: Iterable[Qualifier] | QualMap = (),
        limit: int | None = None,
        status: QueryStatus | None = None,
    ) -> QueryStatus:
        """쿼리 실행

        Args:
            sink: 행을 받을 함수
            region: 대상 리전
            client: 미리 만든 boto3 client (없으면 session으로 생성)
            session: boto3 Session
            qualifiers: 컬럼 조건 (Qualifier 목록 또는 컬럼별 dict)
            limit: 최대 행 수
            status: 외부에서 취소할 수 있도록 미리 만든 QueryStatus (지정하면 limit 대신 status.limit 사용)

        Returns:
            실행에 사용된 QueryStatus

        Raises:
            ClientError: AWS API 호출 실패 (무시 정책에 해당하지 않는 경우)
        """
        if client is None:
            if session is None:
                raise ValueError("client 또는 session 중 하나는 필요합니다")
            client = get_client(session, self.service, region_name=region)

        quals = qualifiers if isinstance(qualifiers, Mapping) else qualifier_map(qualifiers)
        status = status or QueryStatus(limit)
        d = QueryData(
            table=self,
            client=client,
            region=region,
            quals=quals,
            query_context=QueryContext(limit=status.limit),
            query_status=status,
            sink=sink,
        )

        key_sets = self._get_key_sets(quals)
        if key_sets is not None:
            logger.debug("%s: get 경로 (%d건)", self.name, len(key_sets))
            self._execute_get(d, key_sets)
        else:
            logger.debug("%s: list 경로", self.name)
            self.list_config.hydrate(d)

        return status

    def fetch_rows(self, **kwargs: Any) -> Iterator[Row]:
        """execute()를 실행하고 수집된 행을 순서대로 반환

        에러가 발생하면 그 전까지 수집된 행을 먼저 돌려준 뒤 에러를 전파합니다.
        """
        rows: list[Row] = []
        error: Exception | None = None
        try:
            self.execute(sink=rows.append, **kwargs)
        except (ClientError, BotoCoreError) as e:
            error = e

        yield from rows
        if error is not None:
            raise error

    def _get_key_sets(self, quals: QualMap) -> list[dict[str, Any]] | None:
        """get 경로로 실행할 키 값 조합 (조건이 부족하면 None)"""
        if self.get_config is None:
            return None

        key_sets: list[dict[str, Any]] = [{}]
        for key in self.get_config.key_columns:
            equals = [q for q in quals.get(key, []) if q.is_equality and q.value is not None]
            if len(equals) != 1:
                return None
            key_sets = [{**ks, key: value} for ks in key_sets for value in equals[0].values]
        return key_sets

    def _execute_get(self, d: QueryData, key_sets: list[dict[str, Any]]) -> None:
        assert self.get_config is not None
        hydrate = self.get_config.hydrate
        should_ignore = self.get_config.should_ignore_error

        for key_values in key_sets:
            if d.query_status.rows_remaining() == 0:
                return
            try:
                item = hydrate(d.for_keys(key_values))
            except ClientError as e:
                if should_ignore is not None and should_ignore(e):
                    logger.debug("%s: 무시 대상 에러 %s (%s)", self.name, get_error_code(e), key_values)
                    continue
                raise
            if item is None:
                continue
            d.stream_get_item(item, hydrate=getattr(hydrate, "__name__", "get"))


def _values_equal(column_type: ColumnType, actual: Any, expected: Any) -> bool:
    if actual is None:
        return False
    if column_type == ColumnType.CIDR:
        try:
            return ipaddress.ip_network(str(actual), strict=False) == ipaddress.ip_network(str(expected), strict=False)
        except ValueError:
            return str(actual) == str(expected)
    if column_type == ColumnType.BOOL and isinstance(expected, str):
        return actual is (expected.strip().lower() == "true")
    if column_type == ColumnType.INT and not isinstance(expected, bool):
        try:
            return int(actual) == int(expected)
        except (TypeError, ValueError):
            return False
    # 필터 pushdown과 같은 문자열 비교 (Qualifier("owner_id", 123456789012) 등)
    if column_type == ColumnType.STRING:
        return str(actual) == str(expected)
    return actual == expected
