"""
tests/core/test_core_client.py - core/client.py 테스트
"""

from unittest.mock import MagicMock, patch

from botocore.config import Config

from core.client import create_session, get_client


class TestGetClient:
    """get_client 테스트"""

    def test_retry_config(self):
        session = MagicMock()
        get_client(session, "ec2", region_name="ap-northeast-2")

        args, kwargs = session.client.call_args
        assert args == ("ec2",)
        assert kwargs["region_name"] == "ap-northeast-2"
        config = kwargs["config"]
        assert config.retries == {"max_attempts": 5, "mode": "adaptive"}
        assert config.connect_timeout == 10
        assert config.read_timeout == 30

    def test_custom_retry(self):
        session = MagicMock()
        get_client(session, "ec2", max_attempts=2, retry_mode="standard")

        config = session.client.call_args.kwargs["config"]
        assert config.retries == {"max_attempts": 2, "mode": "standard"}

    def test_merges_existing_config(self):
        """호출자가 준 config와 병합"""
        session = MagicMock()
        get_client(session, "ec2", config=Config(user_agent_extra="aq-test"))

        config = session.client.call_args.kwargs["config"]
        assert config.user_agent_extra == "aq-test"
        assert config.retries["mode"] == "adaptive"


class TestCreateSession:
    """create_session 테스트"""

    def test_passes_profile_and_region(self):
        with patch("boto3.Session") as mock_session:
            create_session(profile_name="dev", region_name="us-east-1")
        mock_session.assert_called_once_with(profile_name="dev", region_name="us-east-1")
