"""
core/config.py - 중앙 설정 관리

애플리케이션 전체에서 사용하는 기본값과 환경변수 조회 함수를 제공합니다.

Usage:
    from core.config import settings, get_default_region

    region = get_default_region()  # "ap-northeast-2"
    page_size = settings.DEFAULT_PAGE_SIZE  # 1000
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
# logging 모듈이 허용하는 별칭
_LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}

PACKAGE_NAME = "aws-query"
FALLBACK_VERSION = "0.1.0"


@dataclass(frozen=True)
class Settings:
    """애플리케이션 기본 설정 (불변)

    Attributes:
        DEFAULT_REGION: 리전 미지정 시 사용할 기본 리전
        DEFAULT_PAGE_SIZE: 목록 조회 시 요청할 기본 페이지 크기
        MIN_PAGE_SIZE: 행 제한이 작을 때 줄일 수 있는 최소 페이지 크기
        API_MAX_ATTEMPTS: botocore 재시도 최대 시도 횟수
        API_RETRY_MODE: botocore 재시도 모드
        API_CONNECT_TIMEOUT: 연결 타임아웃 (초)
        API_READ_TIMEOUT: 읽기 타임아웃 (초)
        API_MAX_POOL_CONNECTIONS: HTTP 연결 풀 크기
    """

    DEFAULT_REGION: str = "ap-northeast-2"

    # 페이지네이션
    DEFAULT_PAGE_SIZE: int = 1000
    MIN_PAGE_SIZE: int = 5

    # AWS API
    API_MAX_ATTEMPTS: int = 5
    API_RETRY_MODE: str = "adaptive"
    API_CONNECT_TIMEOUT: int = 10
    API_READ_TIMEOUT: int = 30
    API_MAX_POOL_CONNECTIONS: int = 10


settings = Settings()


@dataclass
class LogConfig:
    """로깅 설정

    Attributes:
        level: 로그 레벨 이름
        format: 로그 포맷 문자열
        date_format: 날짜 포맷 문자열
    """

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL, LOG_FORMAT 환경변수에서 설정 로드

        Raises:
            ConfigError: LOG_LEVEL이 알 수 없는 레벨인 경우
        """
        from core.exceptions import ConfigError

        default = cls()
        level = os.environ.get("LOG_LEVEL", default.level).strip().upper()
        level = _LOG_LEVEL_ALIASES.get(level, level)
        if level not in _LOG_LEVELS:
            raise ConfigError("LOG_LEVEL", f"알 수 없는 로그 레벨 '{level}' (허용: {', '.join(_LOG_LEVELS)})")
        return cls(
            level=level,
            format=os.environ.get("LOG_FORMAT", default.format),
            date_format=os.environ.get("LOG_DATE_FORMAT", default.date_format),
        )


def get_default_profile() -> str | None:
    """AWS_PROFILE → AWS_DEFAULT_PROFILE 순서로 기본 프로파일 조회"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE")


def get_default_region() -> str:
    """AWS_REGION → AWS_DEFAULT_REGION → settings.DEFAULT_REGION 순서로 기본 리전 조회"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


@lru_cache(maxsize=1)
def get_version() -> str:
    """설치된 패키지 메타데이터에서 버전 문자열 반환

    패키지가 설치되지 않은 상태(소스 체크아웃)에서는 FALLBACK_VERSION을 반환합니다.
    """
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return FALLBACK_VERSION
