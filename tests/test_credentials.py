"""Tests for credentials.py module."""

import base64
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, NoRegionError

from ecr_login_renew.credentials import build_ecr_client, fetch_credential
from ecr_login_renew.exceptions import CredentialFetchError


class TestFetchCredential:
    """Tests for fetching the ECR login."""

    def test_fetch_success(self, mock_ecr_client, credential):
        """Test the token is decoded into username and password."""
        result = fetch_credential(mock_ecr_client)

        assert result == credential
        mock_ecr_client.get_authorization_token.assert_called_once_with()

    def test_password_with_colon(self):
        """Test only the first colon separates username and password."""
        ecr = MagicMock()
        token = base64.b64encode(b"AWS:pa:ss").decode()
        ecr.get_authorization_token.return_value = {
            "authorizationData": [{"authorizationToken": token, "proxyEndpoint": "https://r"}]
        }

        result = fetch_credential(ecr)

        assert result.username == "AWS"
        assert result.password == "pa:ss"

    def test_client_error(self):
        """Test AWS API errors become CredentialFetchError."""
        ecr = MagicMock()
        ecr.get_authorization_token.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "denied"}},
            "GetAuthorizationToken",
        )

        with pytest.raises(CredentialFetchError) as exc_info:
            fetch_credential(ecr)

        assert "AccessDeniedException" in str(exc_info.value)

    def test_network_error(self):
        """Test connection failures become CredentialFetchError."""
        ecr = MagicMock()
        ecr.get_authorization_token.side_effect = EndpointConnectionError(endpoint_url="https://api.ecr")

        with pytest.raises(CredentialFetchError):
            fetch_credential(ecr)

    def test_no_authorization_data(self):
        """Test an empty response is rejected."""
        ecr = MagicMock()
        ecr.get_authorization_token.return_value = {"authorizationData": []}

        with pytest.raises(CredentialFetchError) as exc_info:
            fetch_credential(ecr)

        assert "no authorization data" in str(exc_info.value)

    def test_missing_endpoint(self):
        """Test a response without proxyEndpoint is rejected."""
        ecr = MagicMock()
        ecr.get_authorization_token.return_value = {
            "authorizationData": [{"authorizationToken": base64.b64encode(b"AWS:x").decode()}]
        }

        with pytest.raises(CredentialFetchError):
            fetch_credential(ecr)

    def test_undecodable_token(self):
        """Test a token that is not base64 is rejected."""
        ecr = MagicMock()
        ecr.get_authorization_token.return_value = {
            "authorizationData": [{"authorizationToken": "!!!not-base64", "proxyEndpoint": "https://r"}]
        }

        with pytest.raises(CredentialFetchError):
            fetch_credential(ecr)

    def test_token_without_separator(self):
        """Test a token missing the user:password separator is rejected."""
        ecr = MagicMock()
        ecr.get_authorization_token.return_value = {
            "authorizationData": [
                {"authorizationToken": base64.b64encode(b"nocolon").decode(), "proxyEndpoint": "https://r"}
            ]
        }

        with pytest.raises(CredentialFetchError) as exc_info:
            fetch_credential(ecr)

        assert "user:password" in str(exc_info.value)


class TestBuildEcrClient:
    """Tests for ECR client construction."""

    def test_timeouts_and_no_retries(self):
        """Test the client is built with explicit timeouts and a single attempt."""
        with patch("boto3.client") as mock_client:
            build_ecr_client(region="eu-west-1", timeout=7)

        args, kwargs = mock_client.call_args
        assert args == ("ecr",)
        assert kwargs["region_name"] == "eu-west-1"
        client_config = kwargs["config"]
        assert client_config.connect_timeout == 7
        assert client_config.read_timeout == 7
        assert client_config.retries["total_max_attempts"] == 1

    def test_missing_region(self):
        """Test a client that cannot resolve a region raises CredentialFetchError."""
        with patch("boto3.client", side_effect=NoRegionError()):
            with pytest.raises(CredentialFetchError) as exc_info:
                build_ecr_client(region=None, timeout=5)

        assert "Failed to create ECR client" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, NoRegionError)
