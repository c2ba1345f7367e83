"""Environment configuration for ecr-login-renew.

The job is configured entirely through environment variables set on the
CronJob. Parsing happens up front so that a bad value fails the run
before any call to AWS or the cluster.
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from icecream import ic

from ecr_login_renew.exceptions import ConfigError

ENV_SECRET_NAME = "DOCKER_SECRET_NAME"
ENV_TARGET_NAMESPACE = "TARGET_NAMESPACE"
ENV_EXCLUDE_NAMESPACE = "EXCLUDE_NAMESPACE"
ENV_REGISTRIES = "DOCKER_REGISTRIES"
ENV_SECRET_ANNOTATIONS = "SECRET_ANNOTATIONS"
ENV_AWS_REGION = "AWS_REGION"
ENV_AWS_REQUEST_TIMEOUT = "AWS_REQUEST_TIMEOUT"
ENV_K8S_REQUEST_TIMEOUT = "K8S_REQUEST_TIMEOUT"

DEFAULT_REQUEST_TIMEOUT = 30.0


def split_names(value: str | None) -> list[str]:
    """Split a comma-separated list of names, dropping blanks.

    Args:
        value: Raw environment value, e.g. ``"default, app"``.

    Returns:
        The trimmed, non-empty names in their original order.

    """
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def parse_annotations(raw: str | None) -> dict[str, str]:
    """Parse the SECRET_ANNOTATIONS value into an annotation map.

    Args:
        raw: A JSON object string, or None/empty when unset.

    Returns:
        The annotations; an empty dict when unset.

    Raises:
        ConfigError: If the value is not a JSON object of strings.

    """
    if not raw:
        return {}

    try:
        annotations = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"failed to parse secret annotations: {e}") from e

    if annotations is None:
        return {}
    if not isinstance(annotations, dict):
        raise ConfigError("failed to parse secret annotations: expected a JSON object")

    for key, value in annotations.items():
        if not isinstance(value, str):
            raise ConfigError(f"failed to parse secret annotations: value of '{key}' is not a string")

    return annotations


def resolve_server_list(default_server: str, override: str | None) -> list[str]:
    """Return the registry servers the pull-secret authenticates against.

    Args:
        default_server: The endpoint returned with the ECR token.
        override: Comma-separated server list from DOCKER_REGISTRIES.

    Returns:
        ``[default_server]`` when no override is set, otherwise the override
        split on commas with order and count preserved.

    """
    if not override:
        return [default_server]
    return override.split(",")


def _parse_timeout(environ: Mapping[str, str], name: str) -> float:
    raw = environ.get(name, "")
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got '{raw}'") from None
    if timeout <= 0:
        raise ConfigError(f"{name} must be positive, got '{raw}'")
    return timeout


@dataclass(frozen=True, slots=True)
class Settings:
    """Parsed job configuration.

    Attributes:
        secret_name: Name of the pull-secret written to every namespace.
        target_namespaces: Explicit scope; empty means all namespaces.
        exclude_namespaces: Names skipped when the scope is not explicit.
        registries: Raw DOCKER_REGISTRIES override, possibly empty.
        annotations: Annotations applied to every written secret.
        aws_region: Region for the ECR client, or None for boto3's default.
        aws_timeout: Connect/read timeout for ECR calls, in seconds.
        k8s_timeout: Per-request timeout for Kubernetes calls, in seconds.

    """

    secret_name: str
    target_namespaces: list[str] = field(default_factory=list)
    exclude_namespaces: list[str] = field(default_factory=list)
    registries: str = ""
    annotations: dict[str, str] = field(default_factory=dict)
    aws_region: str | None = None
    aws_timeout: float = DEFAULT_REQUEST_TIMEOUT
    k8s_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from the environment.

        Args:
            environ: Mapping to read from; defaults to ``os.environ``.

        Raises:
            ConfigError: If the secret name is missing, a value is malformed,
                or TARGET_NAMESPACE is set but names no namespace.

        """
        if environ is None:
            environ = os.environ

        secret_name = environ.get(ENV_SECRET_NAME, "")
        if not secret_name:
            raise ConfigError(f"Environment variable {ENV_SECRET_NAME} is required")

        raw_target = environ.get(ENV_TARGET_NAMESPACE, "")
        target_namespaces = split_names(raw_target)
        if raw_target and not target_namespaces:
            raise ConfigError(f"{ENV_TARGET_NAMESPACE} is set but names no namespace: '{raw_target}'")

        settings = cls(
            secret_name=secret_name,
            target_namespaces=target_namespaces,
            exclude_namespaces=split_names(environ.get(ENV_EXCLUDE_NAMESPACE)),
            registries=environ.get(ENV_REGISTRIES, ""),
            annotations=parse_annotations(environ.get(ENV_SECRET_ANNOTATIONS)),
            aws_region=environ.get(ENV_AWS_REGION) or None,
            aws_timeout=_parse_timeout(environ, ENV_AWS_REQUEST_TIMEOUT),
            k8s_timeout=_parse_timeout(environ, ENV_K8S_REQUEST_TIMEOUT),
        )
        ic(settings)
        return settings
