"""ecr-login-renew: keep ECR pull-secrets fresh in Kubernetes.

This package fetches a short-lived Amazon ECR login and writes it as a
docker-config-json pull-secret into cluster namespaces. It is meant to
run as a Kubernetes CronJob.

Example usage:
    from ecr_login_renew import Cluster, Settings, build_ecr_client, load_core_api, run

    settings = Settings.from_env()
    cluster = Cluster(load_core_api(), timeout=settings.k8s_timeout)
    report = run(settings, cluster, build_ecr_client(region=settings.aws_region))
"""

__version__ = "1.0.0"

from ecr_login_renew.cli import cli
from ecr_login_renew.cluster import Cluster, load_core_api
from ecr_login_renew.credentials import build_ecr_client, fetch_credential
from ecr_login_renew.exceptions import (
    ClusterConnectionError,
    ConfigError,
    CredentialFetchError,
    NamespaceListError,
    RenewError,
    SecretWriteError,
)
from ecr_login_renew.models import NamespaceOutcome, RegistryCredential, RunReport
from ecr_login_renew.runner import run
from ecr_login_renew.secrets import SecretUpserter
from ecr_login_renew.settings import Settings

__all__ = [
    # Version
    "__version__",
    # Main CLI
    "cli",
    # Classes
    "Cluster",
    "SecretUpserter",
    "Settings",
    # Functions
    "build_ecr_client",
    "fetch_credential",
    "load_core_api",
    "run",
    # Models
    "NamespaceOutcome",
    "RegistryCredential",
    "RunReport",
    # Exceptions
    "RenewError",
    "ClusterConnectionError",
    "ConfigError",
    "CredentialFetchError",
    "NamespaceListError",
    "SecretWriteError",
]
