"""Custom exceptions for ecr-login-renew.

This module defines the exception hierarchy used throughout the application.
Errors raised before the namespace loop abort the run; SecretWriteError is
recorded per namespace and the run carries on.
"""


class RenewError(Exception):
    """Base exception for all ecr-login-renew errors.

    All custom exceptions in this package inherit from this class,
    allowing the CLI to catch every fatal error with a single
    except clause.
    """

    pass


class ConfigError(RenewError):
    """Raised when the environment configuration is invalid.

    This can occur when:
    - DOCKER_SECRET_NAME is missing or empty
    - SECRET_ANNOTATIONS is not a JSON object of strings
    - A timeout value is not a positive number
    """

    pass


class ClusterConnectionError(RenewError):
    """Raised when no Kubernetes client configuration can be loaded.

    Neither the in-cluster service account nor a local kubeconfig
    was usable.
    """

    pass


class CredentialFetchError(RenewError):
    """Raised when the ECR authorization token cannot be obtained.

    This can occur when:
    - AWS credentials are missing or rejected
    - The ECR endpoint is unreachable
    - The response carries no usable authorization data
    """

    pass


class NamespaceListError(RenewError):
    """Raised when listing cluster namespaces fails."""

    pass


class SecretWriteError(RenewError):
    """Raised when the pull-secret cannot be written to a namespace.

    Attributes:
        namespace: The namespace the write was targeting.
        secret_name: The name of the pull-secret.

    """

    def __init__(self, message: str, *, namespace: str, secret_name: str) -> None:
        super().__init__(message)
        self.namespace = namespace
        self.secret_name = secret_name
