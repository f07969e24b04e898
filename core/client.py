"""
core/client.py - boto3 session/client 생성 헬퍼

Retry(adaptive 모드) + 타임아웃 + 연결 풀이 설정된 boto3 client를 생성합니다.
테이블 조회 한 번에 리전 단위 client 하나를 만들어 순차적으로 사용합니다.

Example:
    from core.client import create_session, get_client

    session = create_session(profile_name="dev")
    ec2 = get_client(session, "ec2", region_name="ap-northeast-2")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, cast

from core.config import settings

if TYPE_CHECKING:
    import boto3

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]


def create_session(profile_name: str | None = None, region_name: str | None = None) -> boto3.Session:
    """boto3 Session 생성

    Args:
        profile_name: AWS 프로파일 이름 (None이면 기본 자격 증명 체인)
        region_name: 기본 리전

    Returns:
        boto3 Session
    """
    import boto3

    return boto3.Session(profile_name=profile_name, region_name=region_name)


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int = settings.API_MAX_ATTEMPTS,
    retry_mode: RetryMode = cast(RetryMode, settings.API_RETRY_MODE),
    connect_timeout: int = settings.API_CONNECT_TIMEOUT,
    read_timeout: int = settings.API_READ_TIMEOUT,
    max_pool_connections: int = settings.API_MAX_POOL_CONNECTIONS,
    **kwargs: Any,
) -> Any:
    """Retry가 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (ec2 등)
        region_name: 리전 (None이면 세션 기본값)
        max_attempts: 최대 시도 횟수 (기본: 5)
        retry_mode: 재시도 모드 ('adaptive' 또는 'standard')
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        max_pool_connections: HTTP 연결 풀 크기
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    from botocore.config import Config

    config = Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        max_pool_connections=max_pool_connections,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # cast to Any to bypass boto3-stubs Literal type requirements
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )
