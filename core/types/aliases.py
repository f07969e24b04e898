"""
core/types/aliases.py - 타입 별칭 정의

AWS 리소스 식별자에 대한 별칭을 정의합니다.

Usage:
    from core.types.aliases import RegionName, SubnetId

    def get_subnet(region: RegionName, subnet_id: SubnetId) -> dict: ...
"""

from __future__ import annotations

from typing import Any, NewType, TypeAlias

# =============================================================================
# AWS 식별자 타입
# =============================================================================

# 계정 식별자 (12자리 숫자 문자열)
AccountId = NewType("AccountId", str)

# 리전 이름 (예: ap-northeast-2)
RegionName = NewType("RegionName", str)

# ARN (Amazon Resource Name)
Arn = NewType("Arn", str)

# 서브넷
SubnetId = NewType("SubnetId", str)

# =============================================================================
# 응답 타입
# =============================================================================

# boto3 응답의 리소스 항목 (예: Subnets[0])
AWSRecord: TypeAlias = dict[str, Any]

# 테이블 행 (컬럼 이름 → 값)
Row: TypeAlias = dict[str, Any]
