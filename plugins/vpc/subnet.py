"""
plugins/vpc/subnet.py - aws_vpc_subnet 테이블

EC2 DescribeSubnets를 조건 pushdown, 행 제한, 단건 조회를 지원하는 테이블로 노출합니다.

조회 경로:
    - subnet_id 등호 조건이 있으면 get (describe_subnets(SubnetIds=[...]))
    - 그 외에는 list (describe_subnets 페이지네이터 + Filters)

Usage:
    from core.table import Qualifier
    from plugins.vpc.subnet import table

    for row in table().fetch_rows(session=session, region="ap-northeast-2",
                                  qualifiers=[Qualifier("vpc_id", "vpc-0123")]):
        print(row["subnet_id"], row["title"])
"""

from __future__ import annotations

import logging
from typing import Any

from core.config import settings
from core.table import (
    Column,
    ColumnType,
    FilterKey,
    GetConfig,
    ListConfig,
    QueryData,
    Table,
    TransformData,
    aws_regional_columns,
    build_filters,
    is_not_found_error,
)
from core.table.transforms import akas_from_value, resolve_title, tags_to_map
from core.types.aliases import AWSRecord, SubnetId

logger = logging.getLogger(__name__)

TABLE_NAME = "aws_vpc_subnet"

# get 경로에서 "행 없음"으로 취급할 에러 코드
IGNORED_GET_ERROR_CODES = ("InvalidSubnetID.Malformed", "InvalidSubnetID.NotFound")

FILTER_KEYS: tuple[FilterKey, ...] = (
    FilterKey("availability_zone", "availability-zone", "string"),
    FilterKey("availability_zone_id", "availability-zone-id", "string"),
    FilterKey("available_ip_address_count", "available-ip-address-count", "int64"),
    FilterKey("cidr_block", "cidr-block", "cidr"),
    FilterKey("default_for_az", "default-for-az", "boolean"),
    FilterKey("outpost_arn", "outpost-arn", "string"),
    FilterKey("owner_id", "owner-id", "string"),
    FilterKey("state", "state", "string"),
    FilterKey("subnet_arn", "subnet-arn", "string"),
    FilterKey("vpc_id", "vpc-id", "string"),
)


# =============================================================================
# LIST / GET
# =============================================================================


def list_vpc_subnets(d: QueryData) -> None:
    """Subnet 목록을 페이지 단위로 조회하여 스트리밍

    행 제한에 도달하거나 취소되면 현재 페이지 중간이라도 즉시 멈추고
    다음 페이지를 요청하지 않습니다. API 에러는 그대로 전파됩니다.
    """
    filters = build_filters(d.quals, d.table.list_config.filter_keys)
    page_size = d.page_size(d.table.list_config.max_results)
    logger.debug("list_vpc_subnets: region=%s filters=%s page_size=%d", d.region, filters, page_size)

    if d.query_status.rows_remaining() == 0:
        return

    params: dict[str, Any] = {"PaginationConfig": {"PageSize": page_size}}
    if filters:
        params["Filters"] = filters

    paginator = d.client.get_paginator("describe_subnets")
    for page in paginator.paginate(**params):
        for subnet in page.get("Subnets", []):
            d.stream_list_item(subnet, hydrate="list_vpc_subnets")

            # 수동 취소 또는 행 제한 도달
            if d.query_status.rows_remaining() == 0:
                return

        if d.query_status.rows_remaining() == 0:
            return


def get_vpc_subnet(d: QueryData) -> AWSRecord | None:
    """subnet_id로 Subnet 단건 조회 (페이지네이션 없음)

    Returns:
        Subnet 레코드, 결과가 비어 있으면 None
    """
    subnet_id = SubnetId(d.key_column_qual_string("subnet_id") or "")
    logger.debug("get_vpc_subnet: region=%s subnet_id=%s", d.region, subnet_id)

    try:
        response = d.client.describe_subnets(SubnetIds=[subnet_id])
    except Exception as e:
        logger.debug("get_vpc_subnet: %s 조회 실패 - %s", subnet_id, e)
        raise

    subnets = response.get("Subnets") or []
    if subnets:
        return subnets[0]
    return None


# =============================================================================
# TRANSFORM
# =============================================================================


def get_vpc_subnet_tags(d: TransformData) -> dict[str, str]:
    return tags_to_map(d.hydrate_item.get("Tags"))


def get_subnet_title(d: TransformData) -> str:
    """Name 태그, 없으면 실제로 실행된 조회 결과의 SubnetId"""
    return resolve_title(d.hydrate_results, "SubnetId")


# =============================================================================
# TABLE
# =============================================================================


def table() -> Table:
    """aws_vpc_subnet 테이블 정의"""
    return Table(
        name=TABLE_NAME,
        description="AWS VPC Subnet",
        service="ec2",
        get_config=GetConfig(
            key_columns=("subnet_id",),
            hydrate=get_vpc_subnet,
            should_ignore_error=is_not_found_error(IGNORED_GET_ERROR_CODES),
        ),
        list_config=ListConfig(
            hydrate=list_vpc_subnets,
            filter_keys=FILTER_KEYS,
            max_results=settings.DEFAULT_PAGE_SIZE,
        ),
        columns=aws_regional_columns(
            [
                Column(
                    name="subnet_id",
                    type=ColumnType.STRING,
                    description="Contains the unique ID to specify a subnet.",
                ),
                Column(
                    name="subnet_arn",
                    type=ColumnType.STRING,
                    description="Contains the Amazon Resource Name (ARN) of the subnet.",
                ),
                Column(
                    name="vpc_id",
                    type=ColumnType.STRING,
                    description="ID of the VPC, the subnet is in.",
                ),
                Column(
                    name="cidr_block",
                    type=ColumnType.CIDR,
                    description="Contains the IPv4 CIDR block assigned to the subnet.",
                ),
                Column(
                    name="state",
                    type=ColumnType.STRING,
                    description="Current state of the subnet.",
                ),
                Column(
                    name="owner_id",
                    type=ColumnType.STRING,
                    description="Contains the AWS account that own the subnet.",
                ),
                Column(
                    name="assign_ipv6_address_on_creation",
                    type=ColumnType.BOOL,
                    description="Indicates whether a network interface created in this subnet "
                    "(including a network interface created by RunInstances) receives an IPv6 address.",
                ),
                Column(
                    name="available_ip_address_count",
                    type=ColumnType.INT,
                    description="The number of unused private IPv4 addresses in the subnet. "
                    "The IPv4 addresses for any stopped instances are considered unavailable.",
                ),
                Column(
                    name="availability_zone",
                    type=ColumnType.STRING,
                    description="The Availability Zone of the subnet.",
                ),
                Column(
                    name="availability_zone_id",
                    type=ColumnType.STRING,
                    description="The AZ ID of the subnet.",
                ),
                Column(
                    name="customer_owned_ipv4_pool",
                    type=ColumnType.STRING,
                    description="The customer-owned IPv4 address pool associated with the subnet.",
                ),
                Column(
                    name="default_for_az",
                    type=ColumnType.BOOL,
                    description="Indicates whether this is the default subnet for the Availability Zone.",
                ),
                Column(
                    name="map_customer_owned_ip_on_launch",
                    type=ColumnType.BOOL,
                    description="Indicates whether a network interface created in this subnet "
                    "(including a network interface created by RunInstances) receives a customer-owned IPv4 address.",
                ),
                Column(
                    name="map_public_ip_on_launch",
                    type=ColumnType.BOOL,
                    description="Indicates whether instances launched in this subnet receive a public IPv4 address.",
                ),
                Column(
                    name="outpost_arn",
                    type=ColumnType.STRING,
                    description="The Amazon Resource Name (ARN) of the Outpost. "
                    "Available only if subnet is on an outpost.",
                ),
                Column(
                    name="ipv6_cidr_block_association_set",
                    type=ColumnType.JSON,
                    description="A list of IPv6 CIDR blocks associated with the subnet.",
                ),
                Column(
                    name="tags_src",
                    type=ColumnType.JSON,
                    description="A list of tags that are attached to the subnet.",
                    field="Tags",
                ),
                # 공통 컬럼
                Column(
                    name="tags",
                    type=ColumnType.JSON,
                    description="A map of tags for the resource.",
                    transform=get_vpc_subnet_tags,
                ),
                Column(
                    name="title",
                    type=ColumnType.STRING,
                    description="Title of the resource.",
                    transform=get_subnet_title,
                ),
                Column(
                    name="akas",
                    type=ColumnType.JSON,
                    description="Array of globally unique identifier strings (also known as) for the resource.",
                    field="SubnetArn",
                    transform=akas_from_value,
                ),
            ],
            arn_field="SubnetArn",
        ),
    )
