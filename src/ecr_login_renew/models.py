"""Data models for ecr-login-renew.

This module provides the typed structures passed between the credential
fetcher, the secret upserter and the run driver.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

from ecr_login_renew.exceptions import SecretWriteError


class RegistryCredential(NamedTuple):
    """Registry login returned by ECR.

    Attributes:
        username: Registry user name (``AWS`` for ECR).
        password: Short-lived registry password.
        server: Registry endpoint the token is valid for.

    """

    username: str
    password: str
    server: str

    def __repr__(self) -> str:
        """Return a representation that does not leak the password."""
        return f"RegistryCredential(username={self.username!r}, password='***', server={self.server!r})"


@dataclass(frozen=True, slots=True)
class NamespaceOutcome:
    """Result of upserting the pull-secret into one namespace.

    Attributes:
        namespace: The target namespace.
        error: The failure, or None when the upsert succeeded.

    """

    namespace: str
    error: SecretWriteError | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class RunReport:
    """Accumulated outcomes of a run, in processing order."""

    secret_name: str
    servers: list[str] = field(default_factory=list)
    outcomes: list[NamespaceOutcome] = field(default_factory=list)

    def record(self, outcome: NamespaceOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def succeeded(self) -> list[str]:
        return [o.namespace for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> list[str]:
        return [o.namespace for o in self.outcomes if not o.succeeded]

    @property
    def has_failures(self) -> bool:
        return any(not o.succeeded for o in self.outcomes)
