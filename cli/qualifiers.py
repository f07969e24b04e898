"""
cli/qualifiers.py - --where 옵션 파싱

"컬럼=값" 문자열을 테이블 컬럼 타입에 맞는 Qualifier로 변환합니다.
값에 쉼표가 있으면 IN 조건(값 목록)으로 취급합니다.

Example:
    parse_where("vpc_id=vpc-1,vpc-2", table)
    # Qualifier(column="vpc_id", value=["vpc-1", "vpc-2"])
"""

from __future__ import annotations

import ipaddress
from typing import Any

from core.exceptions import ValidationError
from core.table import ColumnType, Qualifier, Table

_BOOL_VALUES = {"true": True, "false": False}


def coerce_value(column_name: str, column_type: ColumnType, raw: str) -> Any:
    """문자열 값을 컬럼 타입으로 변환

    Raises:
        ValidationError: 타입에 맞지 않는 값
    """
    text = raw.strip()

    if column_type == ColumnType.INT:
        try:
            return int(text)
        except ValueError as e:
            raise ValidationError(column_name, raw, "정수", cause=e) from e

    if column_type == ColumnType.BOOL:
        try:
            return _BOOL_VALUES[text.lower()]
        except KeyError:
            raise ValidationError(column_name, raw, "true 또는 false") from None

    if column_type == ColumnType.CIDR:
        try:
            return str(ipaddress.ip_network(text, strict=False))
        except ValueError as e:
            raise ValidationError(column_name, raw, "CIDR (예: 10.0.0.0/24)", cause=e) from e

    return text


def parse_where(expression: str, table: Table) -> Qualifier:
    """--where 표현식을 Qualifier로 변환

    Args:
        expression: "컬럼=값" 또는 "컬럼=값1,값2"
        table: 대상 테이블 (조건을 받을 수 있는 컬럼만 허용)

    Raises:
        ValidationError: 형식 오류, 조건을 받을 수 없는 컬럼, 타입 불일치
    """
    column_name, sep, raw_value = expression.partition("=")
    column_name = column_name.strip()
    if not sep or not column_name or not raw_value.strip():
        raise ValidationError("where", expression, "컬럼=값")

    allowed = table.key_column_names
    column = table.get_column(column_name)
    if column is None or column_name not in allowed:
        raise ValidationError("where", column_name, f"다음 중 하나: {', '.join(allowed)}")

    values = [coerce_value(column_name, column.type, part) for part in raw_value.split(",") if part.strip()]
    if len(values) == 1:
        return Qualifier(column_name, values[0])
    return Qualifier(column_name, values)
