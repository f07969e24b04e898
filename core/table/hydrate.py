"""
core/table/hydrate.py - 조회 결과 variant 정의

한 행(row)이 어떤 조회 경로(list / get)에서 만들어졌는지를 값 자체로 표현합니다.
title처럼 "실제로 실행된 조회 결과"에서 값을 읽어야 하는 transform은
문자열 키 조회 대신 이 variant를 isinstance로 분기합니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from core.types.aliases import AWSRecord, RegionName


class FetchOperation(str, Enum):
    """조회 경로"""

    LIST = "list"
    GET = "get"


@dataclass(frozen=True)
class FetchResult:
    """조회 경로 하나가 반환한 원본 레코드

    Attributes:
        item: boto3 응답의 리소스 항목 (변경하지 않음)
        hydrate: 레코드를 반환한 hydrate 함수 이름 (예: "list_vpc_subnets")
    """

    item: AWSRecord
    hydrate: str = ""

    operation: ClassVar[FetchOperation]


@dataclass(frozen=True)
class ListResult(FetchResult):
    """목록(페이지네이션) 경로 결과"""

    operation: ClassVar[FetchOperation] = FetchOperation.LIST


@dataclass(frozen=True)
class GetResult(FetchResult):
    """단건 조회 경로 결과"""

    operation: ClassVar[FetchOperation] = FetchOperation.GET


@dataclass(frozen=True)
class HydrateResults:
    """한 행에 대해 지금까지 채워진 조회 결과

    list 경로로 스트리밍된 행은 list_result만, get 경로로 만들어진 행은
    get_result만 채워집니다.
    """

    list_result: ListResult | None = None
    get_result: GetResult | None = None

    @classmethod
    def from_result(cls, result: FetchResult) -> HydrateResults:
        operation = getattr(result, "operation", None)
        if operation is FetchOperation.GET:
            return cls(get_result=result)  # type: ignore[arg-type]
        if operation is FetchOperation.LIST:
            return cls(list_result=result)  # type: ignore[arg-type]
        raise TypeError(f"지원하지 않는 조회 결과 타입: {type(result).__name__}")

    @property
    def origin(self) -> FetchResult:
        """행을 스트리밍한 조회 결과 (get 우선)"""
        result = self.get_result or self.list_result
        if result is None:
            raise ValueError("조회 결과가 비어 있습니다")
        return result

    @property
    def item(self) -> AWSRecord:
        return self.origin.item


@dataclass(frozen=True)
class TransformData:
    """컬럼 transform 입력

    Attributes:
        hydrate_results: 행의 조회 결과
        region: 쿼리 대상 리전
        value: 컬럼에 field가 지정된 경우 해당 필드 값
    """

    hydrate_results: HydrateResults
    region: RegionName
    value: Any = None

    @property
    def hydrate_item(self) -> AWSRecord:
        return self.hydrate_results.item
