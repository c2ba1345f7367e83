#!/usr/bin/env python
"""Command-line interface for ecr-login-renew.

This module provides the entry point invoked by the CronJob. It wires the
Kubernetes and ECR clients together, runs one rotation and maps the
outcome onto the process exit code.
"""

import sys

import click
from icecream import ic

from ecr_login_renew import __version__, console
from ecr_login_renew.cluster import Cluster, load_core_api
from ecr_login_renew.credentials import build_ecr_client
from ecr_login_renew.exceptions import RenewError
from ecr_login_renew.models import RunReport
from ecr_login_renew.runner import run
from ecr_login_renew.settings import Settings


def print_summary(report: RunReport) -> None:
    """Print the end-of-run summary panel.

    Args:
        report: The finished RunReport.

    """
    items = {
        "Secret": report.secret_name,
        "Registries": ", ".join(report.servers),
        "Updated": str(len(report.succeeded)),
        "Failed": str(len(report.failed)),
    }
    if report.failed:
        items["Failed namespaces"] = ", ".join(report.failed)
    console.summary_panel("Summary", items, failed=report.has_failures)


@click.command(help="Refresh the ECR pull-secret in Kubernetes namespaces")
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
def cli(debug: bool, version: bool) -> None:
    """Run one credential rotation configured from the environment.

    Args:
        debug: Enable debug output.
        version: Print version and exit.

    """
    if not debug:
        ic.disable()

    if version:
        click.echo(__version__)
        return

    try:
        settings = Settings.from_env()
        cluster = Cluster(load_core_api(), timeout=settings.k8s_timeout)
        ecr_client = build_ecr_client(region=settings.aws_region, timeout=settings.aws_timeout)
        report = run(settings, cluster, ecr_client)
    except RenewError as e:
        console.error(str(e))
        sys.exit(1)

    print_summary(report)

    if report.has_failures:
        console.error("Failed to create one or more Docker login secrets")
        sys.exit(1)

    console.success("Job complete.")


if __name__ == "__main__":
    cli()
