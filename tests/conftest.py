"""Shared test fixtures for ecr-login-renew tests."""

import base64
import copy
from unittest.mock import MagicMock

import pytest
from kubernetes import client
from kubernetes.client.exceptions import ApiException

from ecr_login_renew.cluster import Cluster
from ecr_login_renew.models import RegistryCredential


class FakeCoreV1Api:
    """In-memory stand-in for CoreV1Api's namespace and secret calls.

    Secrets are stored per (namespace, name). Failures can be injected per
    operation and namespace through ``fail``, e.g.
    ``fail[("replace", "default")] = ApiException(status=409)``.
    """

    def __init__(self, namespaces=None):
        self.namespaces = list(namespaces or [])
        self.secrets: dict[tuple[str, str], client.V1Secret] = {}
        self.fail: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, str]] = []

    def _check(self, op, namespace):
        self.calls.append((op, namespace))
        err = self.fail.get((op, namespace))
        if err is not None:
            raise err

    def list_namespace(self, _request_timeout=None):
        self._check("list", "")
        items = []
        for name in self.namespaces:
            ns = MagicMock()
            ns.metadata.name = name
            items.append(ns)
        return MagicMock(items=items)

    def read_namespaced_secret(self, name, namespace, _request_timeout=None):
        self._check("read", namespace)
        try:
            return copy.deepcopy(self.secrets[(namespace, name)])
        except KeyError:
            raise ApiException(status=404, reason="Not Found") from None

    def create_namespaced_secret(self, namespace, body, _request_timeout=None):
        self._check("create", namespace)
        key = (namespace, body.metadata.name)
        if key in self.secrets:
            raise ApiException(status=409, reason="AlreadyExists")
        self.secrets[key] = copy.deepcopy(body)
        return body

    def replace_namespaced_secret(self, name, namespace, body, _request_timeout=None):
        self._check("replace", namespace)
        if (namespace, name) not in self.secrets:
            raise ApiException(status=404, reason="Not Found")
        self.secrets[(namespace, name)] = copy.deepcopy(body)
        return body

    def delete_namespaced_secret(self, name, namespace, _request_timeout=None):
        self._check("delete", namespace)
        if self.secrets.pop((namespace, name), None) is None:
            raise ApiException(status=404, reason="Not Found")


@pytest.fixture
def decode_payload():
    """Return a helper decoding the .dockerconfigjson payload of a stored secret."""

    def _decode(secret: client.V1Secret) -> str:
        return base64.b64decode(secret.data[".dockerconfigjson"]).decode()

    return _decode


@pytest.fixture
def fake_api():
    """Fake CoreV1Api with three namespaces."""
    return FakeCoreV1Api(namespaces=["default", "kube-system", "app"])


@pytest.fixture
def cluster(fake_api):
    """Cluster backed by the fake API."""
    return Cluster(fake_api, timeout=5)


@pytest.fixture
def credential():
    """Sample ECR credential."""
    return RegistryCredential(
        username="AWS",
        password="s3cr3t-token",
        server="https://123456789012.dkr.ecr.eu-west-1.amazonaws.com",
    )


@pytest.fixture
def mock_ecr_client(credential):
    """Mock boto3 ECR client returning the sample credential."""
    ecr = MagicMock()
    token = base64.b64encode(f"{credential.username}:{credential.password}".encode()).decode()
    ecr.get_authorization_token.return_value = {
        "authorizationData": [
            {
                "authorizationToken": token,
                "proxyEndpoint": credential.server,
                "expiresAt": "2026-10-18T12:00:00Z",
            }
        ]
    }
    return ecr


@pytest.fixture
def base_env():
    """Minimal valid environment."""
    return {"DOCKER_SECRET_NAME": "ecr-login"}
