"""Kubernetes cluster interaction utilities.

This module provides the Cluster class, a thin wrapper over the core/v1
API that applies a request timeout to every call and exposes the
operations the job needs: namespace listing and secret
get/create/replace/delete.
"""

from icecream import ic
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from ecr_login_renew import console
from ecr_login_renew.exceptions import ClusterConnectionError, NamespaceListError


def load_core_api() -> client.CoreV1Api:
    """Load cluster configuration and return a CoreV1Api.

    The in-cluster service account is tried first; outside a pod the
    local kubeconfig is used.

    Raises:
        ClusterConnectionError: If neither configuration can be loaded.

    """
    try:
        config.load_incluster_config()
        ic("in-cluster configuration")
    except ConfigException:
        try:
            config.load_kube_config()
        except ConfigException as e:
            raise ClusterConnectionError(f"No in-cluster configuration and invalid or missing kubeconfig: {e}") from e
        ic("kubeconfig configuration")
    return client.CoreV1Api()


class Cluster:
    """Secret and namespace operations against one cluster.

    Attributes:
        api: The CoreV1Api used for every call.
        timeout: Per-request timeout in seconds.

    """

    def __init__(self, api: client.CoreV1Api, timeout: float = 30.0) -> None:
        self.api = api
        self.timeout = timeout

    def get_all_namespaces(self) -> list[str]:
        """Get all namespaces in the cluster.

        Raises:
            NamespaceListError: If the listing call fails.

        """
        try:
            items = self.api.list_namespace(_request_timeout=self.timeout).items
        except ApiException as e:
            raise NamespaceListError(f"Failed to list namespaces: {e.status} {e.reason}") from e
        except HTTPError as e:
            raise NamespaceListError(f"Failed to connect to the Kubernetes cluster: {e}") from e

        ns_list = [ns.metadata.name for ns in items]
        ic(ns_list)
        return ns_list

    def resolve_namespaces(self, target: list[str], exclude: list[str]) -> list[str]:
        """Return the namespaces the pull-secret is written to.

        Args:
            target: Explicit scope. When non-empty it is returned as is
                and the cluster is not queried.
            exclude: Names dropped from the full namespace list.

        Returns:
            The namespace names, in listing order.

        Raises:
            NamespaceListError: If the namespace listing fails.

        """
        if target:
            return list(target)

        excluded = set(exclude)
        namespaces = [ns for ns in self.get_all_namespaces() if ns not in excluded]
        if excluded:
            console.step(f"Excluding namespaces: {', '.join(sorted(excluded))}")
        return namespaces

    def get_secret(self, namespace: str, name: str) -> client.V1Secret | None:
        """Read a secret, returning None when it does not exist.

        Raises:
            ApiException: For any failure other than 404.

        """
        try:
            return self.api.read_namespaced_secret(name, namespace, _request_timeout=self.timeout)
        except ApiException as e:
            if e.status == 404:
                return None
            raise

    def create_secret(self, namespace: str, secret: client.V1Secret) -> client.V1Secret:
        """Create a secret in the namespace."""
        return self.api.create_namespaced_secret(namespace, secret, _request_timeout=self.timeout)

    def replace_secret(self, namespace: str, secret: client.V1Secret) -> client.V1Secret:
        """Replace a secret in place, keyed by its metadata name."""
        return self.api.replace_namespaced_secret(
            secret.metadata.name, namespace, secret, _request_timeout=self.timeout
        )

    def delete_secret(self, namespace: str, name: str) -> None:
        """Delete a secret by name."""
        self.api.delete_namespaced_secret(name, namespace, _request_timeout=self.timeout)

    def __repr__(self) -> str:
        return f"Cluster(timeout={self.timeout!r})"
