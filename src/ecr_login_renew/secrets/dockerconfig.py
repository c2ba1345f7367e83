"""Docker config JSON document for registry pull-secrets.

Builds the ``{"auths": {...}}`` payload container runtimes read from a
``kubernetes.io/dockerconfigjson`` secret.
"""

import base64
import json

DOCKER_CONFIG_JSON_KEY = ".dockerconfigjson"
SECRET_TYPE_DOCKER_CONFIG_JSON = "kubernetes.io/dockerconfigjson"

# Placeholder; registries ignore it but some tooling expects the field
DEFAULT_EMAIL = "awsregrenew@demo.test"


def build_docker_config(username: str, password: str, servers: list[str]) -> bytes:
    """Serialize the docker config document for the given servers.

    Every server gets the same username, password and placeholder email,
    with ``auth`` set to ``base64("username:password")``.

    Args:
        username: Registry user name.
        password: Registry password.
        servers: Registry hosts to authenticate against.

    Returns:
        The JSON document as UTF-8 bytes.

    """
    auth = base64.b64encode(f"{username}:{password}".encode()).decode()
    auths = {
        server: {
            "username": username,
            "password": password,
            "email": DEFAULT_EMAIL,
            "auth": auth,
        }
        for server in servers
    }
    return json.dumps({"auths": auths}).encode()


def encode_secret_value(value: bytes) -> str:
    """Base64-encode a payload for the ``data`` field of a V1Secret."""
    return base64.b64encode(value).decode()
