"""
tests/core/test_core_exceptions.py - core/exceptions.py 테스트
"""

from botocore.exceptions import ClientError

from core.exceptions import (
    AQError,
    ConfigError,
    TableDefinitionError,
    TableNotFoundError,
    ValidationError,
    format_error_for_user,
    get_error_code,
)


def _client_error(code, message="error"):
    return ClientError({"Error": {"Code": code, "Message": message}}, "DescribeSubnets")


class TestExceptionHierarchy:
    """예외 계층 테스트"""

    def test_base_message(self):
        error = AQError("실패")
        assert str(error) == "실패"
        assert error.details == {}

    def test_base_with_cause(self):
        error = AQError("실패", cause=ValueError("원인"))
        assert str(error) == "실패: 원인"

    def test_table_definition_error(self):
        error = TableDefinitionError("aws_vpc_subnet", "중복 컬럼")
        assert isinstance(error, AQError)
        assert "aws_vpc_subnet" in str(error)
        assert error.details["table_name"] == "aws_vpc_subnet"

    def test_table_not_found_sorted_available(self):
        error = TableNotFoundError("x", available=["b", "a"])
        assert error.details["available"] == ["a", "b"]

    def test_config_error(self):
        error = ConfigError("LOG_LEVEL", "알 수 없는 값")
        assert error.details["config_key"] == "LOG_LEVEL"

    def test_validation_error(self):
        error = ValidationError("limit", -1, "0 이상")
        assert error.details == {"field": "limit", "value": "-1", "expected": "0 이상"}


class TestErrorHelpers:
    """에러 판별 헬퍼 테스트"""

    def test_get_error_code(self):
        assert get_error_code(_client_error("InvalidSubnetID.NotFound")) == "InvalidSubnetID.NotFound"

    def test_get_error_code_non_client_error(self):
        assert get_error_code(ValueError("x")) == "ValueError"

    def test_format_friendly(self):
        message = format_error_for_user(_client_error("UnauthorizedOperation"))
        assert "IAM" in message

    def test_format_unknown_code(self):
        message = format_error_for_user(_client_error("InvalidParameterValue", "bad filter"))
        assert message == "InvalidParameterValue: bad filter"

    def test_format_aq_error(self):
        assert format_error_for_user(AQError("실패")) == "실패"
