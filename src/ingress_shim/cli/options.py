"""Shared CLI options, output helpers and error handling."""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from ingress_shim.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
)
from ingress_shim.integrations.kubernetes.models.certmanager import Certificate, IssuerKind
from ingress_shim.services.shim.exceptions import ShimError

console = Console()
err_console = Console(stderr=True)


class OutputFormat(StrEnum):
    """Output format for created Certificates."""

    TABLE = "table"
    JSON = "json"


# =============================================================================
# Common Typer Option Annotations
# =============================================================================

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML configuration file",
        exists=True,
        dir_okay=False,
    ),
]

ContextOption = Annotated[
    str | None,
    typer.Option("--context", help="kubeconfig context to use"),
]

WatchNamespaceOption = Annotated[
    str | None,
    typer.Option(
        "--watch-namespace",
        help="Restrict to a single namespace. ClusterIssuers cannot be used when set.",
    ),
]

DefaultIssuerNameOption = Annotated[
    str | None,
    typer.Option("--default-issuer-name", help="Issuer used when an Ingress names none"),
]

DefaultIssuerKindOption = Annotated[
    IssuerKind | None,
    typer.Option("--default-issuer-kind", help="Kind of the default issuer"),
]

DefaultChallengeTypeOption = Annotated[
    str | None,
    typer.Option(
        "--default-acme-issuer-challenge-type",
        help="ACME challenge type used when an Ingress names none (http01 or dns01)",
    ),
]

DefaultDNS01ProviderOption = Annotated[
    str | None,
    typer.Option(
        "--default-acme-issuer-dns01-provider-name",
        help="DNS01 provider used when an Ingress names none",
    ),
]

OutputOption = Annotated[
    OutputFormat,
    typer.Option("--output", "-o", help="Output format: table or json", case_sensitive=False),
]


# =============================================================================
# Output
# =============================================================================


def _challenge(certificate: Certificate) -> str:
    if certificate.spec.acme is None or not certificate.spec.acme.config:
        return "-"
    domain_cfg = certificate.spec.acme.config[0]
    if domain_cfg.http01 is not None:
        solver = domain_cfg.http01.ingress
    elif domain_cfg.dns01 is not None:
        solver = domain_cfg.dns01.provider
    else:
        return "-"
    return f"{domain_cfg.challenge_type} ({solver})"


def print_certificates(certificates: list[Certificate], output: OutputFormat) -> None:
    """Print created Certificates."""
    if output == OutputFormat.JSON:
        console.print_json(json.dumps([c.to_k8s_object() for c in certificates]))
        return

    if not certificates:
        console.print("[dim]No Certificates created.[/dim]")
        return

    table = Table(title="Created Certificates")
    table.add_column("Name")
    table.add_column("Namespace")
    table.add_column("Issuer")
    table.add_column("Challenge")
    table.add_column("DNS Names")
    for cert in certificates:
        ref = cert.spec.issuer_ref
        table.add_row(
            cert.name,
            cert.namespace or "",
            f"{ref.kind}/{ref.name}",
            _challenge(cert),
            ", ".join(cert.spec.dns_names),
        )
    console.print(table)


# =============================================================================
# Error Handling
# =============================================================================


def print_error(error: Exception) -> None:
    """Print a Kubernetes or sync error with a hint where one helps."""
    if isinstance(error, ShimError):
        where = f" ({error.ingress})" if error.ingress else ""
        err_console.print(f"[red]Error:[/red] {error.message}{where}")

    elif isinstance(error, KubernetesConnectionError):
        err_console.print("[red]Error:[/red] Cannot connect to Kubernetes cluster")
        err_console.print(f"  {error.message}")
        if error.original_error:
            err_console.print(f"  Cause: {error.original_error}")
        err_console.print(
            "\n[dim]Hint: Check that your kubeconfig is valid and the cluster is reachable.[/dim]"
        )

    elif isinstance(error, KubernetesAuthError):
        err_console.print("[red]Error:[/red] Authentication/authorization failed")
        err_console.print(f"  {error.message}")
        err_console.print("\n[dim]Hint: Check RBAC for certificates, issuers and events.[/dim]")

    elif isinstance(error, KubernetesNotFoundError):
        err_console.print("[red]Error:[/red] Resource not found")
        err_console.print(f"  {error.message}")

    elif isinstance(error, KubernetesValidationError):
        err_console.print("[red]Error:[/red] Validation failed")
        err_console.print(f"  {error.message}")
        for field, err in error.validation_errors.items():
            err_console.print(f"    - {field}: {err}")

    elif isinstance(error, KubernetesConflictError):
        err_console.print("[red]Error:[/red] Resource conflict")
        err_console.print(f"  {error.message}")
        err_console.print("\n[dim]Hint: Re-run the sync; existing Certificates are skipped.[/dim]")

    elif isinstance(error, KubernetesError):
        err_console.print(f"[red]Error:[/red] {error.message}")
        if error.status_code:
            err_console.print(f"  HTTP Status: {error.status_code}")

    else:
        err_console.print(f"[red]Error:[/red] {error}")


def handle_error(error: Exception) -> NoReturn:
    """Print ``error`` and exit with status 1.

    Raises:
        typer.Exit: Always.
    """
    print_error(error)
    raise typer.Exit(1)
