"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(mock_ec2_client, subnet_record):
        # mock_ec2_client: describe_subnets 페이지네이터가 모킹된 EC2 클라이언트
        # subnet_record: describe_subnets 응답 항목 팩토리
        pass
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

REGION = "ap-northeast-2"
ACCOUNT_ID = "123456789012"


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment():
    """테스트 환경 설정"""
    os.environ.setdefault("AWS_DEFAULT_REGION", REGION)
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

    yield


# =============================================================================
# 테스트 데이터 헬퍼
# =============================================================================


def make_subnet(
    subnet_id: str = "subnet-0123456789abcdef0",
    vpc_id: str = "vpc-0123456789abcdef0",
    cidr_block: str = "10.0.1.0/24",
    tags: Optional[List[Dict[str, str]]] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """describe_subnets 응답 항목 생성"""
    subnet = {
        "SubnetId": subnet_id,
        "SubnetArn": f"arn:aws:ec2:{REGION}:{ACCOUNT_ID}:subnet/{subnet_id}",
        "VpcId": vpc_id,
        "CidrBlock": cidr_block,
        "State": "available",
        "OwnerId": ACCOUNT_ID,
        "AssignIpv6AddressOnCreation": False,
        "AvailableIpAddressCount": 251,
        "AvailabilityZone": f"{REGION}a",
        "AvailabilityZoneId": "apne2-az1",
        "DefaultForAz": False,
        "MapCustomerOwnedIpOnLaunch": False,
        "MapPublicIpOnLaunch": False,
        "Ipv6CidrBlockAssociationSet": [],
    }
    if tags is not None:
        subnet["Tags"] = tags
    subnet.update(overrides)
    return subnet


def make_client_error(code: str, operation: str = "DescribeSubnets", message: str = "error"):
    """botocore ClientError 생성"""
    from botocore.exceptions import ClientError

    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def subnet_record():
    """describe_subnets 응답 항목 팩토리"""
    return make_subnet


@pytest.fixture
def client_error():
    """ClientError 팩토리"""
    return make_client_error


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


class PageRecorder:
    """페이지네이터 모킹 - 실제로 소비된 페이지 수를 기록

    boto3 PageIterator처럼 지연 평가되므로, 소비되지 않은 페이지는
    요청되지 않은 것으로 간주합니다.
    """

    def __init__(self, pages: List[List[Dict[str, Any]]], error_at: Optional[int] = None, error=None):
        self.pages = pages
        self.error_at = error_at
        self.error = error
        self.requested = 0
        self.paginate_kwargs: Dict[str, Any] = {}

    def paginate(self, **kwargs):
        self.paginate_kwargs = kwargs
        return self._iterate()

    def _iterate(self):
        for index, subnets in enumerate(self.pages):
            self.requested += 1
            if self.error_at is not None and index == self.error_at:
                raise self.error
            yield {"Subnets": subnets}


@pytest.fixture
def make_ec2_client():
    """페이지 목록으로 EC2 클라이언트 모킹 생성"""

    def _make(pages: List[List[Dict[str, Any]]], error_at: Optional[int] = None, error=None):
        client = MagicMock()
        recorder = PageRecorder(pages, error_at=error_at, error=error)
        client.get_paginator.return_value = recorder
        client.recorder = recorder
        return client

    return _make


@pytest.fixture
def mock_ec2_client(make_ec2_client):
    """단일 페이지(서브넷 2개)를 반환하는 EC2 클라이언트"""
    return make_ec2_client(
        [
            [
                make_subnet("subnet-aaa", tags=[{"Key": "Name", "Value": "public-a"}]),
                make_subnet("subnet-bbb", cidr_block="10.0.2.0/24"),
            ]
        ]
    )


@pytest.fixture
def aws_credentials():
    """moto용 AWS 자격 증명 설정"""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = REGION
