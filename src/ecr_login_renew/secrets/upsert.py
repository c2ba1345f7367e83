"""Pull-secret upsert with a delete+recreate fallback.

The upserter reads the current secret, then either creates it or
replaces it in place. When the in-place replace is rejected, the secret
is deleted and created fresh, once. If that recreate fails the secret
stays absent until the next run.
"""

from icecream import ic
from kubernetes import client
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from ecr_login_renew import console
from ecr_login_renew.cluster import Cluster
from ecr_login_renew.exceptions import SecretWriteError
from ecr_login_renew.secrets.dockerconfig import (
    DOCKER_CONFIG_JSON_KEY,
    SECRET_TYPE_DOCKER_CONFIG_JSON,
    build_docker_config,
    encode_secret_value,
)

_KUBE_ERRORS = (ApiException, HTTPError)


def _describe(err: Exception) -> str:
    if isinstance(err, ApiException):
        return f"{err.status} {err.reason}"
    return str(err)


def merge_annotations(existing: dict[str, str] | None, annotations: dict[str, str]) -> dict[str, str] | None:
    """Merge new annotations over existing ones.

    Keys in ``annotations`` are added or overwritten; other existing keys
    are kept. Returns ``existing`` untouched when there is nothing to add.
    """
    if not annotations:
        return existing
    merged = dict(existing or {})
    merged.update(annotations)
    return merged


def new_pull_secret(name: str, payload: bytes, annotations: dict[str, str]) -> client.V1Secret:
    """Build a fresh docker-config-json secret object."""
    return client.V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=client.V1ObjectMeta(name=name, annotations=dict(annotations) if annotations else None),
        type=SECRET_TYPE_DOCKER_CONFIG_JSON,
        data={DOCKER_CONFIG_JSON_KEY: encode_secret_value(payload)},
    )


class SecretUpserter:
    """Writes the registry pull-secret into namespaces.

    Attributes:
        cluster: Cluster used for secret get/create/replace/delete.

    """

    def __init__(self, cluster: Cluster) -> None:
        self.cluster = cluster

    def upsert(
        self,
        namespace: str,
        secret_name: str,
        username: str,
        password: str,
        servers: list[str],
        annotations: dict[str, str],
    ) -> None:
        """Ensure the pull-secret exists in ``namespace`` with the new payload.

        Args:
            namespace: Target namespace.
            secret_name: Name of the pull-secret.
            username: Registry user name.
            password: Registry password.
            servers: Registry hosts written into the document.
            annotations: Annotations set on (or merged into) the secret.

        Raises:
            SecretWriteError: If the secret could not be written, including
                when the delete+recreate fallback fails.

        """
        try:
            existing = self.cluster.get_secret(namespace, secret_name)
        except _KUBE_ERRORS as e:
            raise self._error(f"failed to read secret: {_describe(e)}", namespace, secret_name) from e

        payload = build_docker_config(username, password, servers)

        if existing is None:
            ic(namespace, "create")
            self._create(namespace, secret_name, payload, annotations)
            return

        existing.type = existing.type or SECRET_TYPE_DOCKER_CONFIG_JSON
        existing.data = dict(existing.data or {})
        existing.data[DOCKER_CONFIG_JSON_KEY] = encode_secret_value(payload)
        existing.metadata.annotations = merge_annotations(existing.metadata.annotations, annotations)

        try:
            self.cluster.replace_secret(namespace, existing)
            ic(namespace, "replace")
            return
        except _KUBE_ERRORS as e:
            tag = console.namespace_tag(namespace, secret_name)
            console.warning(f"In-place update of {tag} failed ({_describe(e)}), recreating secret")

        try:
            self.cluster.delete_secret(namespace, secret_name)
        except _KUBE_ERRORS as e:
            raise self._error(f"failed to delete secret for recreation: {_describe(e)}", namespace, secret_name) from e

        self._create(namespace, secret_name, payload, annotations)

    def _create(self, namespace: str, secret_name: str, payload: bytes, annotations: dict[str, str]) -> None:
        secret = new_pull_secret(secret_name, payload, annotations)
        try:
            self.cluster.create_secret(namespace, secret)
        except _KUBE_ERRORS as e:
            raise self._error(f"failed to create secret: {_describe(e)}", namespace, secret_name) from e

    @staticmethod
    def _error(message: str, namespace: str, secret_name: str) -> SecretWriteError:
        return SecretWriteError(message, namespace=namespace, secret_name=secret_name)
