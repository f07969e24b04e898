"""
core/table/query.py - 쿼리 실행 상태

QueryStatus는 행 제한(row budget)과 취소 신호를 관리하고,
QueryData는 hydrate 함수가 사용하는 쿼리 단위 컨텍스트
(client, 리전, 조건, 행 제한, 행 sink)를 묶습니다.

Example:
    status = QueryStatus(limit=10)
    status.rows_remaining()  # 10
    status.cancel()
    status.rows_remaining()  # 0
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from core.config import settings
from core.types.aliases import AWSRecord, RegionName, Row

from .filters import QualMap
from .hydrate import FetchResult, GetResult, HydrateResults, ListResult

if TYPE_CHECKING:
    from .table import Table

logger = logging.getLogger(__name__)

RowSink = Callable[[Row], None]

UNLIMITED = sys.maxsize


@dataclass(frozen=True)
class QueryContext:
    """호출자가 지정한 쿼리 옵션

    Attributes:
        limit: 전체 쿼리에서 내보낼 최대 행 수 (None이면 제한 없음)
    """

    limit: int | None = None


class QueryStatus:
    """행 제한과 취소 상태 (스레드 세이프)

    cancel()은 다른 스레드(호스트의 sink 스레드 등)에서 호출해도 안전합니다.
    """

    def __init__(self, limit: int | None = None):
        self._limit = limit
        self._rows_streamed = 0
        self._cancelled = threading.Event()
        self._lock = threading.Lock()

    @property
    def limit(self) -> int | None:
        return self._limit

    @property
    def rows_streamed(self) -> int:
        return self._rows_streamed

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """쿼리 취소. 이후 rows_remaining()은 0을 반환"""
        self._cancelled.set()

    def rows_remaining(self) -> int:
        """남은 행 수 (취소되었거나 제한에 도달하면 0)"""
        if self._cancelled.is_set():
            return 0
        if self._limit is None:
            return UNLIMITED
        return max(0, self._limit - self._rows_streamed)

    def record_row(self) -> None:
        with self._lock:
            self._rows_streamed += 1


@dataclass
class QueryData:
    """hydrate 함수에 전달되는 쿼리 단위 컨텍스트

    Attributes:
        table: 실행 중인 테이블
        client: 리전 단위 boto3 client (쿼리당 1회 생성)
        region: 대상 리전
        quals: 컬럼별 조건
        query_context: 행 제한 등 호출자 옵션
        query_status: 행 제한/취소 상태
        sink: 행을 받을 함수
        key_column_quals: get 경로에서 이번 호출의 키 컬럼 값
    """

    table: Table
    client: Any
    region: RegionName
    quals: QualMap
    query_context: QueryContext
    query_status: QueryStatus
    sink: RowSink
    key_column_quals: dict[str, Any] = field(default_factory=dict)

    def for_keys(self, key_values: dict[str, Any]) -> QueryData:
        """get 호출 한 번을 위한 복사본 (상태와 sink는 공유)"""
        return replace(self, key_column_quals=dict(key_values))

    def key_column_qual_string(self, column: str) -> str | None:
        value = self.key_column_quals.get(column)
        return None if value is None else str(value)

    def page_size(self, default: int) -> int:
        """행 제한을 반영한 요청 페이지 크기

        제한이 default보다 작으면 max(MIN_PAGE_SIZE, limit)로 줄입니다.
        """
        limit = self.query_context.limit
        if limit is None or limit >= default:
            return default
        return max(settings.MIN_PAGE_SIZE, limit)

    def stream_list_item(self, item: AWSRecord, hydrate: str = "") -> None:
        """list 경로 레코드를 행으로 변환하여 sink에 전달"""
        self._stream(ListResult(item=item, hydrate=hydrate))

    def stream_get_item(self, item: AWSRecord, hydrate: str = "") -> None:
        """get 경로 레코드를 행으로 변환하여 sink에 전달"""
        self._stream(GetResult(item=item, hydrate=hydrate))

    def _stream(self, result: FetchResult) -> None:
        if self.query_status.rows_remaining() == 0:
            return

        row = self.table.build_row(HydrateResults.from_result(result), self.region)
        if not self.table.row_matches(row, self.quals):
            logger.debug("%s: 조건 불일치 행 제외 (%s)", self.table.name, result.hydrate)
            return

        self.sink(row)
        self.query_status.record_row()
