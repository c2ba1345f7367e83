"""Run driver for one credential rotation.

A run fetches the ECR login once, resolves the registry servers and the
target namespaces, then upserts the pull-secret into every namespace.
Prerequisite failures propagate; per-namespace failures are recorded in
the RunReport and never stop the loop.
"""

from datetime import datetime, timezone
from typing import Any

from icecream import ic

from ecr_login_renew import console
from ecr_login_renew.cluster import Cluster
from ecr_login_renew.credentials import fetch_credential
from ecr_login_renew.exceptions import SecretWriteError
from ecr_login_renew.models import NamespaceOutcome, RegistryCredential, RunReport
from ecr_login_renew.secrets import SecretUpserter
from ecr_login_renew.settings import Settings, resolve_server_list


def update_namespaces(
    upserter: SecretUpserter,
    namespaces: list[str],
    settings: Settings,
    credential: RegistryCredential,
    servers: list[str],
) -> RunReport:
    """Upsert the pull-secret into each namespace, recording every outcome.

    Args:
        upserter: The SecretUpserter to write with.
        namespaces: Namespaces to process, in order.
        settings: Job settings (secret name and annotations).
        credential: Registry login to store.
        servers: Registry servers written into the document.

    Returns:
        A RunReport with one outcome per namespace.

    """
    report = RunReport(secret_name=settings.secret_name, servers=servers)

    for namespace in namespaces:
        try:
            upserter.upsert(
                namespace,
                settings.secret_name,
                credential.username,
                credential.password,
                servers,
                settings.annotations,
            )
        except SecretWriteError as e:
            console.namespace_result(namespace, failure=str(e))
            report.record(NamespaceOutcome(namespace=namespace, error=e))
            continue

        console.namespace_result(namespace)
        report.record(NamespaceOutcome(namespace=namespace))

    return report


def run(settings: Settings, cluster: Cluster, ecr_client: Any) -> RunReport:
    """Execute one rotation.

    Args:
        settings: Parsed job configuration.
        cluster: Cluster to write secrets into.
        ecr_client: boto3 ECR client used to fetch the login.

    Returns:
        The RunReport; check ``has_failures`` for the aggregate result.

    Raises:
        CredentialFetchError: If the ECR login cannot be fetched.
        NamespaceListError: If the namespaces cannot be listed.

    """
    console.run_started(datetime.now(timezone.utc))

    with console.spinner("Fetching auth data from AWS..."):
        credential = fetch_credential(ecr_client)
    console.success("Fetched auth data from AWS")

    if settings.annotations:
        console.action(f"Found {len(settings.annotations)} annotations")
    else:
        console.action("No annotations configured")

    servers = resolve_server_list(credential.server, settings.registries)
    console.action(f"Docker Registries: {','.join(servers)}")

    namespaces = cluster.resolve_namespaces(settings.target_namespaces, settings.exclude_namespaces)
    ic(namespaces)
    console.action(
        f"Updating kubernetes secret {console.highlight(settings.secret_name)} in {len(namespaces)} namespaces"
    )

    return update_namespaces(SecretUpserter(cluster), namespaces, settings, credential, servers)
