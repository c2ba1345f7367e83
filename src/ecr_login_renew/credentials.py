"""Amazon ECR credential fetching.

The ECR client is built by the caller and handed to the fetcher, so the
AWS identity chain is resolved once, outside the fetch itself.
"""

import base64
import binascii
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from icecream import ic

from ecr_login_renew.exceptions import CredentialFetchError
from ecr_login_renew.models import RegistryCredential


def build_ecr_client(region: str | None = None, timeout: float = 30.0) -> Any:
    """Create a boto3 ECR client with explicit timeouts and no retries.

    Args:
        region: AWS region, or None to use boto3's own resolution.
        timeout: Connect and read timeout in seconds.

    Returns:
        A boto3 ECR client.

    Raises:
        CredentialFetchError: If the client cannot be built, e.g. no region
            is configured.

    """
    client_config = Config(
        connect_timeout=timeout,
        read_timeout=timeout,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )
    try:
        return boto3.client("ecr", region_name=region, config=client_config)
    except BotoCoreError as e:
        raise CredentialFetchError(f"Failed to create ECR client: {e}") from e


def _decode_token(token: str) -> tuple[str, str]:
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise CredentialFetchError(f"ECR returned an undecodable authorization token: {e}") from e

    username, sep, password = decoded.partition(":")
    if not sep or not username:
        raise CredentialFetchError("ECR authorization token is not in 'user:password' form")
    return username, password


def fetch_credential(ecr_client: Any) -> RegistryCredential:
    """Fetch a registry login from ECR.

    Args:
        ecr_client: A boto3 ECR client (see build_ecr_client).

    Returns:
        The registry credential for the account's default registry.

    Raises:
        CredentialFetchError: If the call fails or the response is unusable.

    """
    try:
        response = ecr_client.get_authorization_token()
    except ClientError as e:
        raise CredentialFetchError(f"ECR rejected the token request: {e}") from e
    except BotoCoreError as e:
        raise CredentialFetchError(f"Failed to fetch ECR authorization token: {e}") from e

    auth_data = response.get("authorizationData") or []
    if not auth_data:
        raise CredentialFetchError("ECR response contains no authorization data")

    token = auth_data[0].get("authorizationToken")
    server = auth_data[0].get("proxyEndpoint")
    if not token or not server:
        raise CredentialFetchError("ECR authorization data is missing the token or proxy endpoint")

    username, password = _decode_token(token)
    credential = RegistryCredential(username=username, password=password, server=server)
    ic(credential, auth_data[0].get("expiresAt"))
    return credential
