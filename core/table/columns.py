"""
core/table/columns.py - 컬럼 선언

Column은 이름, 의미 타입, 값을 꺼내는 방법(field / transform)을 선언합니다.
field와 transform이 모두 없으면 컬럼명을 CamelCase로 바꾼 응답 필드를 읽습니다.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .hydrate import HydrateResults, TransformData
from .transforms import account_id_transform, from_camel, partition_column, region_column


class ColumnType(str, Enum):
    """컬럼 의미 타입"""

    STRING = "string"
    INT = "int"
    DOUBLE = "double"
    BOOL = "bool"
    JSON = "json"
    CIDR = "cidr"
    IPADDR = "ipaddr"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class Column:
    """테이블 컬럼

    Attributes:
        name: 컬럼 이름 (snake_case)
        type: 의미 타입
        description: 설명
        field: 값을 읽을 응답 필드 (None이면 컬럼명에서 유도)
        transform: TransformData를 받아 값을 계산하는 함수.
            field가 지정되면 해당 필드 값이 d.value로 전달됩니다.
    """

    name: str
    type: ColumnType
    description: str = ""
    field: str | None = None
    transform: Callable[[TransformData], Any] | None = None

    @property
    def source_field(self) -> str | None:
        if self.field:
            return self.field
        if self.transform is None:
            return from_camel(self.name)
        return None

    def resolve(self, results: HydrateResults, region: str) -> Any:
        """조회 결과로부터 컬럼 값 계산"""
        source = self.source_field
        value = results.item.get(source) if source else None
        if self.transform is None:
            return value
        return self.transform(
            TransformData(hydrate_results=results, region=region, value=value)
        )


def aws_regional_columns(columns: list[Column], arn_field: str) -> list[Column]:
    """리전 단위 리소스 테이블 공통 컬럼(partition, region, account_id)을 덧붙임"""
    return [
        *columns,
        Column(
            name="partition",
            type=ColumnType.STRING,
            description="The AWS partition in which the resource is located (aws, aws-cn, or aws-us-gov).",
            transform=partition_column,
        ),
        Column(
            name="region",
            type=ColumnType.STRING,
            description="The AWS Region in which the resource is located.",
            transform=region_column,
        ),
        Column(
            name="account_id",
            type=ColumnType.STRING,
            description="The AWS Account ID in which the resource is located.",
            transform=account_id_transform(arn_field),
        ),
    ]
