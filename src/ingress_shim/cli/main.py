"""Main CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
import yaml

from ingress_shim import __version__
from ingress_shim.cli.options import (
    ConfigOption,
    ContextOption,
    DefaultChallengeTypeOption,
    DefaultDNS01ProviderOption,
    DefaultIssuerKindOption,
    DefaultIssuerNameOption,
    OutputFormat,
    OutputOption,
    WatchNamespaceOption,
    console,
    err_console,
    handle_error,
    print_certificates,
    print_error,
)
from ingress_shim.config import ShimConfig, ShimDefaults, load_config
from ingress_shim.integrations.kubernetes.client import KubernetesClient
from ingress_shim.integrations.kubernetes.exceptions import KubernetesError
from ingress_shim.integrations.kubernetes.models.certmanager import Certificate, IssuerKind
from ingress_shim.logging.config import configure_logging, get_logger
from ingress_shim.services.kubernetes.certmanager_manager import CertManagerManager
from ingress_shim.services.kubernetes.event_recorder import EventRecorder
from ingress_shim.services.kubernetes.ingress_manager import IngressManager
from ingress_shim.services.shim.controller import IngressShimController
from ingress_shim.services.shim.exceptions import ShimError

app = typer.Typer(
    name="ingress-shim",
    help="Create cert-manager Certificates for annotated Ingresses.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"ingress-shim version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Log as JSON."),
    log_file: bool = typer.Option(
        True, "--log-file/--no-log-file", help="Also write logs to the state directory."
    ),
) -> None:
    """ingress-shim - cert-manager Certificates from Ingress annotations."""
    configure_logging(verbose=verbose, debug=debug, json_output=json_logs, log_to_file=log_file)


def build_config(
    config_path: Path | None,
    context: str | None,
    watch_namespace: str | None,
    default_issuer_name: str | None,
    default_issuer_kind: IssuerKind | None,
    default_challenge_type: str | None,
    default_dns01_provider: str | None,
) -> ShimConfig:
    """Layer CLI flags over the file and environment configuration."""
    config = load_config(config_path)

    overrides: dict[str, Any] = {
        "issuer_name": default_issuer_name,
        "issuer_kind": default_issuer_kind,
        "acme_challenge_type": default_challenge_type,
        "acme_dns01_provider_name": default_dns01_provider,
    }
    defaults = ShimDefaults.model_validate(
        {
            **config.defaults.model_dump(),
            **{k: v for k, v in overrides.items() if v is not None},
        }
    )

    update: dict[str, Any] = {"defaults": defaults}
    if context is not None:
        update["cluster"] = config.cluster.model_copy(update={"context": context})
    if watch_namespace is not None:
        update["namespace"] = watch_namespace or None
    return config.model_copy(update=update)


def _check_scope(config: ShimConfig, namespace: str | None) -> None:
    """Refuse namespaces outside the watch namespace."""
    if config.namespace and namespace and namespace != config.namespace:
        err_console.print(
            f"[red]Error:[/red] namespace {namespace!r} is outside the watch namespace "
            f"{config.namespace!r}"
        )
        raise typer.Exit(1)


def build_controller(config: ShimConfig, client: KubernetesClient) -> IngressShimController:
    """Wire the sync controller to the API-backed stores."""
    get_logger(__name__).info(
        "controller_ready",
        context=client.get_current_context(),
        cluster_scoped=client.cluster_scoped,
        issuer=config.defaults.issuer_name,
    )
    return IngressShimController(
        CertManagerManager(client),
        EventRecorder(client),
        config.defaults,
        cluster_scoped=client.cluster_scoped,
    )


@app.command()
def sync(
    name: Annotated[str, typer.Argument(help="Ingress name")],
    namespace: Annotated[
        str | None,
        typer.Option("--namespace", "-n", help="Ingress namespace"),
    ] = None,
    output: OutputOption = OutputFormat.TABLE,
    config_path: ConfigOption = None,
    context: ContextOption = None,
    watch_namespace: WatchNamespaceOption = None,
    default_issuer_name: DefaultIssuerNameOption = None,
    default_issuer_kind: DefaultIssuerKindOption = None,
    default_challenge_type: DefaultChallengeTypeOption = None,
    default_dns01_provider: DefaultDNS01ProviderOption = None,
) -> None:
    """Create the Certificates a single Ingress asks for."""
    try:
        config = build_config(
            config_path,
            context,
            watch_namespace,
            default_issuer_name,
            default_issuer_kind,
            default_challenge_type,
            default_dns01_provider,
        )
    except (ValueError, yaml.YAMLError) as e:
        err_console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        raise typer.Exit(1) from None
    _check_scope(config, namespace)

    try:
        with KubernetesClient(config) as client:
            ingress = IngressManager(client).get_ingress(name, namespace)
            created = build_controller(config, client).sync(ingress)
    except (KubernetesError, ShimError) as e:
        handle_error(e)

    print_certificates(created, output)


@app.command("sync-all")
def sync_all(
    namespace: Annotated[
        str | None,
        typer.Option("--namespace", "-n", help="Namespace to sync"),
    ] = None,
    all_namespaces: Annotated[
        bool,
        typer.Option("--all-namespaces", "-A", help="Sync Ingresses in every namespace"),
    ] = False,
    selector: Annotated[
        str | None,
        typer.Option("--selector", "-l", help="Label selector for Ingresses"),
    ] = None,
    output: OutputOption = OutputFormat.TABLE,
    config_path: ConfigOption = None,
    context: ContextOption = None,
    watch_namespace: WatchNamespaceOption = None,
    default_issuer_name: DefaultIssuerNameOption = None,
    default_issuer_kind: DefaultIssuerKindOption = None,
    default_challenge_type: DefaultChallengeTypeOption = None,
    default_dns01_provider: DefaultDNS01ProviderOption = None,
) -> None:
    """Sync every Ingress in a namespace, or the whole cluster.

    Each Ingress is synced independently. Failures are reported and the
    command exits non-zero after all Ingresses have been tried.
    """
    try:
        config = build_config(
            config_path,
            context,
            watch_namespace,
            default_issuer_name,
            default_issuer_kind,
            default_challenge_type,
            default_dns01_provider,
        )
    except (ValueError, yaml.YAMLError) as e:
        err_console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        raise typer.Exit(1) from None
    _check_scope(config, namespace)

    if all_namespaces and not config.cluster_scoped:
        err_console.print(
            "[red]Error:[/red] --all-namespaces cannot be used with a watch namespace"
        )
        raise typer.Exit(1)

    created: list[Certificate] = []
    failed = 0
    try:
        with KubernetesClient(config) as client:
            ingresses = IngressManager(client).list_ingresses(
                namespace or config.namespace,
                all_namespaces=all_namespaces,
                label_selector=selector,
            )
            controller = build_controller(config, client)
            for ingress in ingresses:
                try:
                    created.extend(controller.sync(ingress))
                except (KubernetesError, ShimError) as e:
                    failed += 1
                    err_console.print(f"[bold]{ingress.key}[/bold]")
                    print_error(e)
    except KubernetesError as e:
        handle_error(e)

    print_certificates(created, output)
    if failed:
        err_console.print(f"[red]{failed} of {len(ingresses)} Ingresses failed to sync[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
