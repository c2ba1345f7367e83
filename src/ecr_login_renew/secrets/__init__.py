"""Pull-secret subpackage.

This package contains the docker-config document builder and the
upsert logic that writes the pull-secret into a namespace.
"""

from ecr_login_renew.secrets.dockerconfig import (
    DEFAULT_EMAIL,
    DOCKER_CONFIG_JSON_KEY,
    SECRET_TYPE_DOCKER_CONFIG_JSON,
    build_docker_config,
)
from ecr_login_renew.secrets.upsert import SecretUpserter, merge_annotations

__all__ = [
    # dockerconfig
    "DEFAULT_EMAIL",
    "DOCKER_CONFIG_JSON_KEY",
    "SECRET_TYPE_DOCKER_CONFIG_JSON",
    "build_docker_config",
    # upsert
    "SecretUpserter",
    "merge_annotations",
]
