"""
tests/core/table/test_table_transforms.py - core/table/transforms.py, hydrate.py 테스트
"""

import pytest

from core.table.hydrate import FetchOperation, FetchResult, GetResult, HydrateResults, ListResult, TransformData
from core.table.transforms import (
    account_id_from_arn,
    account_id_transform,
    arn_to_akas,
    from_camel,
    identifier_from_results,
    partition_for_region,
    resolve_title,
    tags_to_map,
)

ARN = "arn:aws:ec2:ap-northeast-2:123456789012:subnet/subnet-123"


class TestFromCamel:
    """컬럼명 → 응답 필드명 변환"""

    @pytest.mark.parametrize(
        "column,field",
        [
            ("subnet_id", "SubnetId"),
            ("available_ip_address_count", "AvailableIpAddressCount"),
            ("assign_ipv6_address_on_creation", "AssignIpv6AddressOnCreation"),
            ("customer_owned_ipv4_pool", "CustomerOwnedIpv4Pool"),
            ("ipv6_cidr_block_association_set", "Ipv6CidrBlockAssociationSet"),
            ("default_for_az", "DefaultForAz"),
        ],
    )
    def test_conversion(self, column, field):
        assert from_camel(column) == field


class TestTagsToMap:
    """tags_to_map 테스트"""

    def test_none(self):
        """태그 없음 → 빈 dict"""
        assert tags_to_map(None) == {}

    def test_empty(self):
        assert tags_to_map([]) == {}

    def test_last_write_wins(self):
        """중복 키는 마지막 값"""
        tags = [
            {"Key": "Name", "Value": "a"},
            {"Key": "Name", "Value": "b"},
            {"Key": "Env", "Value": "prod"},
        ]
        assert tags_to_map(tags) == {"Name": "b", "Env": "prod"}

    def test_aws_prefixed_tags_kept(self):
        """aws: 접두어 태그도 포함"""
        tags = [{"Key": "aws:cloudformation:stack-name", "Value": "net"}]
        assert tags_to_map(tags) == {"aws:cloudformation:stack-name": "net"}


class TestHydrateResults:
    """조회 경로 variant 테스트"""

    def test_operation_tags(self):
        assert ListResult({}).operation is FetchOperation.LIST
        assert GetResult({}).operation is FetchOperation.GET

    def test_from_list_result(self):
        result = ListResult({"SubnetId": "subnet-1"}, hydrate="list_vpc_subnets")
        results = HydrateResults.from_result(result)
        assert results.list_result is result
        assert results.get_result is None
        assert results.origin is result

    def test_from_get_result(self):
        result = GetResult({"SubnetId": "subnet-1"})
        results = HydrateResults.from_result(result)
        assert results.get_result is result
        assert results.list_result is None
        assert results.item == {"SubnetId": "subnet-1"}

    def test_empty_results(self):
        with pytest.raises(ValueError):
            HydrateResults().origin

    def test_origin_prefers_get(self):
        """두 결과가 모두 있으면 origin은 get 결과"""
        get_result = GetResult({"SubnetId": "from-get"})
        results = HydrateResults(list_result=ListResult({"SubnetId": "from-list"}), get_result=get_result)
        assert results.origin is get_result
        assert results.item == {"SubnetId": "from-get"}

    def test_from_result_routes_by_operation(self):
        """operation 태그로 슬롯 결정"""

        class PrefetchedResult(FetchResult):
            operation = FetchOperation.GET

        result = PrefetchedResult({"SubnetId": "subnet-1"})
        results = HydrateResults.from_result(result)
        assert results.get_result is result
        assert results.list_result is None

    def test_from_result_untagged(self):
        """operation 태그가 없는 결과는 거부"""
        with pytest.raises(TypeError):
            HydrateResults.from_result(FetchResult({}))


class TestResolveTitle:
    """resolve_title 테스트"""

    def test_name_tag_last_wins(self):
        item = {
            "SubnetId": "subnet-123",
            "Tags": [
                {"Key": "Name", "Value": "a"},
                {"Key": "Name", "Value": "b"},
                {"Key": "Env", "Value": "prod"},
            ],
        }
        results = HydrateResults.from_result(ListResult(item))
        assert resolve_title(results, "SubnetId") == "b"

    def test_name_tag_case_sensitive(self):
        """'name' 태그는 Name으로 취급하지 않음"""
        item = {"SubnetId": "subnet-123", "Tags": [{"Key": "name", "Value": "lower"}]}
        results = HydrateResults.from_result(ListResult(item))
        assert resolve_title(results, "SubnetId") == "subnet-123"

    def test_fallback_from_get_path(self):
        """get 경로 결과의 식별자로 대체"""
        results = HydrateResults.from_result(GetResult({"SubnetId": "subnet-123", "Tags": []}))
        assert resolve_title(results, "SubnetId") == "subnet-123"

    def test_fallback_from_list_path(self):
        """get 결과가 없으면 list 경로 결과에서 읽음"""
        results = HydrateResults.from_result(ListResult({"SubnetId": "subnet-123", "Tags": []}))
        assert resolve_title(results, "SubnetId") == "subnet-123"

    def test_get_result_preferred_for_identifier(self):
        """두 결과가 모두 있으면 get 결과의 식별자 사용"""
        results = HydrateResults(
            list_result=ListResult({"SubnetId": "from-list"}),
            get_result=GetResult({"SubnetId": "from-get"}),
        )
        assert identifier_from_results(results, "SubnetId") == "from-get"
        assert resolve_title(results, "SubnetId") == "from-get"

    def test_empty_name_tag_falls_back(self):
        item = {"SubnetId": "subnet-123", "Tags": [{"Key": "Name", "Value": ""}]}
        results = HydrateResults.from_result(ListResult(item))
        assert resolve_title(results, "SubnetId") == "subnet-123"


class TestAkas:
    """arn_to_akas 테스트"""

    def test_singleton(self):
        assert arn_to_akas(ARN) == [ARN]

    def test_deterministic(self):
        """같은 입력은 같은 결과"""
        assert arn_to_akas(ARN) == arn_to_akas(ARN)

    def test_missing_arn(self):
        assert arn_to_akas(None) == []
        assert arn_to_akas("") == []


class TestRegionalColumns:
    """partition / account_id 테스트"""

    @pytest.mark.parametrize(
        "region,partition",
        [
            ("ap-northeast-2", "aws"),
            ("us-east-1", "aws"),
            ("cn-north-1", "aws-cn"),
            ("us-gov-west-1", "aws-us-gov"),
            ("us-iso-east-1", "aws-iso"),
            ("us-isob-east-1", "aws-iso-b"),
        ],
    )
    def test_partition_for_region(self, region, partition):
        assert partition_for_region(region) == partition

    def test_account_id_from_arn(self):
        assert account_id_from_arn(ARN) == "123456789012"

    def test_account_id_from_invalid_arn(self):
        assert account_id_from_arn("not-an-arn") == ""
        assert account_id_from_arn(None) == ""

    def test_account_id_transform_falls_back_to_owner(self):
        """ARN이 없으면 OwnerId 사용"""
        transform = account_id_transform("SubnetArn")
        results = HydrateResults.from_result(ListResult({"OwnerId": "210987654321"}))
        d = TransformData(hydrate_results=results, region="ap-northeast-2")
        assert transform(d) == "210987654321"
