"""
core/table/registry.py - 테이블 발견 및 등록

plugins/<category>/__init__.py의 TABLES 메타데이터를 읽어
각 테이블 모듈의 table() 팩토리를 호출하고, 등록 시점에 정의를 검증합니다.

plugins/<category>/__init__.py 예시:
    CATEGORY = {"name": "vpc", "display_name": "VPC", ...}
    TABLES = [
        {"name": "aws_vpc_subnet", "module": "subnet", "description": "AWS VPC Subnet"},
    ]

Usage:
    from core.table.registry import discover_tables

    registry = discover_tables()
    subnet_table = registry.get("aws_vpc_subnet")
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from collections.abc import Iterator

from core.exceptions import TableDefinitionError, TableNotFoundError

from .table import Table

logger = logging.getLogger(__name__)

TABLE_REQUIRED_FIELDS = ("name", "module")


class TableRegistry:
    """등록된 테이블 모음"""

    def __init__(self) -> None:
        self._tables: dict[str, Table] = {}

    def register(self, table: Table) -> Table:
        """테이블 정의를 검증한 뒤 등록

        Raises:
            TableDefinitionError: 정의 결함 또는 이름 중복
        """
        table.validate()
        if table.name in self._tables:
            raise TableDefinitionError(table.name, "이미 등록된 테이블 이름입니다")
        self._tables[table.name] = table
        logger.debug("테이블 등록: %s (%d columns)", table.name, len(table.columns))
        return table

    def get(self, name: str) -> Table:
        try:
            return self._tables[name]
        except KeyError:
            raise TableNotFoundError(name, available=list(self._tables)) from None

    def names(self) -> list[str]:
        return sorted(self._tables)

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[Table]:
        return iter(self._tables[name] for name in self.names())

    def __len__(self) -> int:
        return len(self._tables)


def discover_tables(package_name: str = "plugins") -> TableRegistry:
    """플러그인 패키지에서 테이블을 찾아 등록

    Args:
        package_name: 카테고리 패키지들을 담은 최상위 패키지

    Returns:
        검증된 테이블이 등록된 TableRegistry

    Raises:
        TableDefinitionError: 메타데이터 누락 또는 테이블 정의 결함
    """
    registry = TableRegistry()
    package = importlib.import_module(package_name)

    for module_info in sorted(pkgutil.iter_modules(package.__path__), key=lambda m: m.name):
        if not module_info.ispkg:
            continue
        category = importlib.import_module(f"{package_name}.{module_info.name}")
        for meta in getattr(category, "TABLES", []):
            missing = [f for f in TABLE_REQUIRED_FIELDS if not meta.get(f)]
            if missing:
                raise TableDefinitionError(
                    meta.get("name", f"{module_info.name}/?"), f"메타데이터 필수 필드 누락: {missing}"
                )
            module = importlib.import_module(f"{category.__name__}.{meta['module']}")
            table = module.table()
            if table.name != meta["name"]:
                raise TableDefinitionError(
                    meta["name"], f"메타데이터 이름과 테이블 이름이 다릅니다 ({table.name})"
                )
            registry.register(table)

    return registry
