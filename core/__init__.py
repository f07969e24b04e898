# core/__init__.py
"""
core - aws-query 인프라

테이블 프레임워크, 설정, 예외, boto3 client 헬퍼를 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── table/          # 리소스 테이블 프레임워크 (filter, list/get, transform)
    ├── types/          # AWS 식별자 타입 별칭
    ├── client.py       # boto3 session/client 생성
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 설정 사용
    from core.config import settings, get_default_region
    region = get_default_region()  # "ap-northeast-2"

    # 테이블 조회
    from core.table import Qualifier, discover_tables
    table = discover_tables().get("aws_vpc_subnet")
"""

from core import client, config, exceptions, table

__all__: list[str] = [
    # 서브패키지
    "table",
    # 모듈
    "client",
    "config",
    "exceptions",
]
