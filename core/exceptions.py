"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.

예외 계층 구조:
    AQError (베이스)
    ├── TableDefinitionError (테이블 정의 결함 - 등록 시점에 발생)
    ├── TableNotFoundError (등록되지 않은 테이블)
    ├── ConfigError (설정 관련)
    └── ValidationError (입력 검증)

AWS API 호출 실패(botocore ClientError)는 래핑하지 않고 그대로 전파합니다.
조회 경로에서 에러를 삼키지 않으며, "없음"으로 재분류할지는 테이블 정책이 결정합니다.

Usage:
    from core.exceptions import get_error_code

    try:
        ec2.describe_subnets(SubnetIds=[subnet_id])
    except ClientError as e:
        if get_error_code(e) == "InvalidSubnetID.NotFound":
            ...
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class AQError(Exception):
    """aws-query 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


# =============================================================================
# 테이블 관련 예외
# =============================================================================


class TableDefinitionError(AQError):
    """테이블 정의 결함

    알 수 없는 필터 값 타입, 선언되지 않은 컬럼 참조 등
    쿼리 실행이 아닌 테이블 등록 시점에 드러나야 하는 결함입니다.
    """

    def __init__(
        self,
        table_name: str,
        reason: str,
        cause: Optional[Exception] = None,
    ):
        message = f"테이블 정의 오류 [{table_name}]: {reason}"
        super().__init__(message, cause)
        self.table_name = table_name
        self.reason = reason
        self.details["table_name"] = table_name


class TableNotFoundError(AQError):
    """등록되지 않은 테이블 조회"""

    def __init__(self, table_name: str, available: Optional[list] = None):
        message = f"테이블을 찾을 수 없습니다 [{table_name}]"
        super().__init__(message)
        self.table_name = table_name
        self.details["available"] = sorted(available or [])


# =============================================================================
# 설정 / 입력 관련 예외
# =============================================================================


class ConfigError(AQError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


class ValidationError(AQError):
    """입력 검증 오류"""

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Optional[Exception] = None,
    ):
        message = f"검증 오류 [{field}]: 예상값 '{expected}', 실제값 '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def get_error_code(error: Exception) -> str:
    """예외 객체에서 AWS 에러 코드 문자열 추출

    ClientError의 경우 response에서 Code를 추출하고,
    그 외에는 예외 클래스명을 반환합니다.
    """
    response = getattr(error, "response", None)
    if response is not None:
        code: str = response.get("Error", {}).get("Code", "Unknown")
        return code
    return error.__class__.__name__


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, AQError):
        return str(error)

    # boto3 ClientError
    if hasattr(error, "response"):
        error_info = error.response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))

        friendly_messages = {
            "AccessDenied": "권한이 없습니다. IAM 정책을 확인하세요.",
            "UnauthorizedOperation": "권한이 없습니다. IAM 정책을 확인하세요.",
            "ExpiredToken": "인증 토큰이 만료되었습니다. 다시 로그인하세요.",
            "InvalidClientTokenId": "잘못된 자격 증명입니다.",
            "RequestLimitExceeded": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        }

        return friendly_messages.get(code, f"{code}: {message}")

    return str(error)
