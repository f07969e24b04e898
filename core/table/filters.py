"""
core/table/filters.py - 컬럼 조건(qualifier) → EC2 Filter 변환

선언적 매핑 테이블(컬럼 → 업스트림 필터 이름 → 값 타입)을 사용하여
호출자가 준 컬럼 조건을 boto3 Filters 파라미터로 변환합니다.

Usage:
    from core.table.filters import FilterKey, Qualifier, build_filters, qualifier_map

    keys = [FilterKey("vpc_id", "vpc-id", "string")]
    quals = qualifier_map([Qualifier("vpc_id", "vpc-123")])
    build_filters(quals, keys)
    # [{"Name": "vpc-id", "Values": ["vpc-123"]}]
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.exceptions import TableDefinitionError

EQUALS = "="

QualMap = Mapping[str, list["Qualifier"]]


@dataclass(frozen=True)
class Qualifier:
    """컬럼 조건

    Attributes:
        column: 컬럼 이름
        value: 비교 값. list/tuple/set이면 IN 조건으로 취급
        operator: 비교 연산자 (업스트림으로 내려가는 것은 "=" 뿐)
    """

    column: str
    value: Any
    operator: str = EQUALS

    @property
    def values(self) -> list[Any]:
        if isinstance(self.value, (list, tuple, set, frozenset)):
            return list(self.value)
        return [self.value]

    @property
    def is_equality(self) -> bool:
        return self.operator == EQUALS


def qualifier_map(qualifiers: Iterable[Qualifier]) -> dict[str, list[Qualifier]]:
    """Qualifier 목록을 컬럼별로 묶음 (입력 순서 유지)"""
    result: dict[str, list[Qualifier]] = {}
    for qual in qualifiers:
        result.setdefault(qual.column, []).append(qual)
    return result


# =============================================================================
# 필터 값 타입
# =============================================================================


def _coerce_string(value: Any) -> str:
    return str(value)


def _coerce_int64(value: Any) -> str:
    return str(int(value))


def _coerce_boolean(value: Any) -> str:
    if isinstance(value, str):
        return "true" if value.strip().lower() == "true" else "false"
    return "true" if value else "false"


def _coerce_cidr(value: Any) -> str:
    # ipaddress.IPv4Network 등도 문자열 표현을 그대로 사용
    return str(value)


class FilterValueType(str, Enum):
    """업스트림 필터 값 타입"""

    STRING = "string"
    INT64 = "int64"
    BOOLEAN = "boolean"
    CIDR = "cidr"

    def coerce(self, value: Any) -> str:
        """조건 값을 EC2 Filter 값 문자열로 변환"""
        return _COERCERS[self](value)


_COERCERS: dict[FilterValueType, Callable[[Any], str]] = {
    FilterValueType.STRING: _coerce_string,
    FilterValueType.INT64: _coerce_int64,
    FilterValueType.BOOLEAN: _coerce_boolean,
    FilterValueType.CIDR: _coerce_cidr,
}


@dataclass(frozen=True)
class FilterKey:
    """컬럼 → 업스트림 필터 매핑 항목

    value_type에 문자열을 주면 생성 시점에 FilterValueType으로 변환하며,
    알 수 없는 타입이면 TableDefinitionError가 발생합니다.
    """

    column_name: str
    filter_name: str
    value_type: FilterValueType = FilterValueType.STRING

    def __post_init__(self) -> None:
        if isinstance(self.value_type, FilterValueType):
            return
        try:
            object.__setattr__(self, "value_type", FilterValueType(self.value_type))
        except ValueError as e:
            raise TableDefinitionError(
                self.column_name,
                f"알 수 없는 필터 값 타입 '{self.value_type}' (허용: {[t.value for t in FilterValueType]})",
                cause=e,
            ) from e


def validate_filter_keys(table_name: str, filter_keys: Iterable[FilterKey], columns: Iterable[str]) -> None:
    """매핑 테이블 검증 (테이블 등록 시점)

    Raises:
        TableDefinitionError: 선언되지 않은 컬럼, 중복 컬럼, 변환 함수가 없는 값 타입
    """
    declared = set(columns)
    seen: set[str] = set()
    for key in filter_keys:
        if key.column_name not in declared:
            raise TableDefinitionError(table_name, f"필터 컬럼 '{key.column_name}'이(가) 컬럼 목록에 없습니다")
        if key.column_name in seen:
            raise TableDefinitionError(table_name, f"필터 컬럼 '{key.column_name}'이(가) 중복 선언되었습니다")
        if not isinstance(key.value_type, FilterValueType) or key.value_type not in _COERCERS:
            raise TableDefinitionError(table_name, f"필터 컬럼 '{key.column_name}'의 값 타입을 변환할 수 없습니다")
        seen.add(key.column_name)


def build_filters(quals: QualMap, filter_keys: Iterable[FilterKey]) -> list[dict[str, Any]]:
    """컬럼 조건을 EC2 Filters 파라미터로 변환

    매핑 테이블 순서대로, 조건이 있는 컬럼마다 등호 조건 하나당 필터 하나를 만듭니다.
    매핑에 없는 컬럼, 등호가 아닌 조건, 값이 None인 조건은 무시합니다.

    Args:
        quals: 컬럼별 조건 목록
        filter_keys: 매핑 테이블

    Returns:
        [{"Name": "vpc-id", "Values": ["vpc-123"]}, ...]
    """
    filters: list[dict[str, Any]] = []
    for key in filter_keys:
        for qual in quals.get(key.column_name, []):
            if not qual.is_equality or qual.value is None:
                continue
            values = [key.value_type.coerce(v) for v in qual.values if v is not None]
            if not values:
                continue
            filters.append({"Name": key.filter_name, "Values": values})
    return filters
