"""
core/table/transforms.py - 컬럼 transform 함수

조회가 끝난 메모리 상의 레코드로부터 합성 컬럼(tags, title, akas, 리전 컬럼)을
계산합니다. 모든 함수는 I/O 없는 순수 함수입니다.

Usage:
    from core.table.transforms import tags_to_map, arn_to_akas

    tags_to_map([{"Key": "Name", "Value": "a"}])  # {"Name": "a"}
    arn_to_akas("arn:aws:ec2:ap-northeast-2:123456789012:subnet/subnet-1")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from core.types.aliases import AccountId, Arn

from .hydrate import HydrateResults, TransformData

NAME_TAG_KEY = "Name"

# 리전 접두어 → 파티션 (긴 접두어 우선)
_PARTITION_PREFIXES: list[tuple[str, str]] = [
    ("us-isob-", "aws-iso-b"),
    ("us-iso-", "aws-iso"),
    ("us-gov-", "aws-us-gov"),
    ("cn-", "aws-cn"),
]


def from_camel(column_name: str) -> str:
    """snake_case 컬럼명을 boto3 응답 필드명(CamelCase)으로 변환

    Example:
        from_camel("available_ip_address_count")  # "AvailableIpAddressCount"
    """
    return "".join(part[:1].upper() + part[1:] for part in column_name.split("_"))


def tags_to_map(tags: list[dict[str, str]] | None) -> dict[str, str]:
    """AWS 태그 리스트를 dict로 변환

    같은 키가 여러 번 나오면 리스트 순서상 마지막 값이 남습니다.

    Args:
        tags: [{"Key": "Name", "Value": "my-subnet"}, ...]

    Returns:
        {"Name": "my-subnet", ...} (태그가 없으면 빈 dict)
    """
    if not tags:
        return {}

    result = {}
    for tag in tags:
        result[tag.get("Key", "")] = tag.get("Value", "")
    return result


def identifier_from_results(results: HydrateResults, id_field: str) -> str:
    """실제로 실행된 조회 결과에서 식별자 필드를 읽음

    get 경로 결과가 있으면 그 레코드에서, 없으면 list 경로 레코드에서 읽습니다.
    """
    if results.get_result is None and results.list_result is None:
        return ""
    return results.origin.item.get(id_field) or ""


def resolve_title(results: HydrateResults, id_field: str) -> str:
    """Name 태그 → 식별자 순서로 title 결정

    Name 태그가 여러 개면 마지막 값을 사용합니다 (tags_to_map과 동일).
    Name 태그가 없거나 값이 빈 문자열이면 식별자로 대체합니다.
    """
    title = tags_to_map(results.item.get("Tags")).get(NAME_TAG_KEY, "")
    if title:
        return title
    return identifier_from_results(results, id_field)


def arn_to_akas(arn: Arn | None) -> list[Arn]:
    """ARN을 외부 참조용 별칭(akas) 목록으로 변환

    ARN이 없으면 빈 리스트를 반환합니다.
    """
    if not arn:
        return []
    return [arn]


def partition_for_region(region: str) -> str:
    """리전 코드로부터 AWS 파티션 결정"""
    for prefix, partition in _PARTITION_PREFIXES:
        if region.startswith(prefix):
            return partition
    return "aws"


def account_id_from_arn(arn: Arn | None) -> AccountId | str:
    """ARN의 다섯 번째 구성요소(계정 ID) 추출

    arn:partition:service:region:account-id:resource
    """
    if not arn:
        return ""
    parts = arn.split(":", 5)
    if len(parts) < 6 or parts[0] != "arn":
        return ""
    return AccountId(parts[4])


# =============================================================================
# TransformData 어댑터 (Column.transform 용)
# =============================================================================


def akas_from_value(d: TransformData) -> list[str]:
    return arn_to_akas(d.value)


def region_column(d: TransformData) -> str:
    return d.region


def partition_column(d: TransformData) -> str:
    return partition_for_region(d.region)


def account_id_transform(arn_field: str, owner_field: str = "OwnerId") -> Callable[[TransformData], str]:
    """레코드 ARN에서 계정 ID를 읽는 transform 생성

    ARN이 없거나 형식이 다르면 owner_field 값을 사용합니다.
    """

    def account_id_column(d: TransformData) -> str:
        item: dict[str, Any] = d.hydrate_item
        return account_id_from_arn(item.get(arn_field)) or item.get(owner_field) or ""

    return account_id_column
