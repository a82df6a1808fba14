"""Controller configuration models.

Values are layered: model defaults, then an optional YAML file, then
``INGRESS_SHIM_*`` environment variables, then CLI flags (applied by the
CLI on top of the result of :func:`load_config`).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from ingress_shim.integrations.kubernetes.models.certmanager import IssuerKind

ENV_PREFIX = "INGRESS_SHIM_"


class ClusterConfig(BaseModel):
    """How to reach the cluster."""

    model_config = ConfigDict(extra="forbid")

    context: str = ""
    kubeconfig: str = "~/.kube/config"
    timeout: int = 30

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("kubeconfig")
    @classmethod
    def validate_kubeconfig(cls, v: str) -> str:
        """Expand ~ in kubeconfig path."""
        return str(Path(v).expanduser())


class ShimDefaults(BaseModel):
    """Process-wide defaults used when an Ingress carries no override.

    Immutable for the lifetime of a sync; passed explicitly into every
    resolution call.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    issuer_name: str = ""
    issuer_kind: IssuerKind = IssuerKind.ISSUER
    acme_challenge_type: str = "http01"
    acme_dns01_provider_name: str = ""

    @field_validator("issuer_kind", mode="before")
    @classmethod
    def default_empty_kind(cls, v: Any) -> Any:
        """An empty kind means a namespaced Issuer."""
        if v is None or v == "":
            return IssuerKind.ISSUER
        return v


class ShimConfig(BaseModel):
    """Complete controller configuration."""

    model_config = ConfigDict(extra="forbid")

    cluster: ClusterConfig = ClusterConfig()
    defaults: ShimDefaults = ShimDefaults()
    namespace: str | None = None
    retry_attempts: int = 3

    @field_validator("retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        """Validate retry_attempts is non-negative."""
        if v < 0:
            raise ValueError("retry_attempts must be non-negative")
        return v

    @field_validator("namespace", mode="before")
    @classmethod
    def empty_namespace_is_cluster_wide(cls, v: Any) -> Any:
        """Treat an empty namespace as cluster-wide scope."""
        return v or None

    @property
    def cluster_scoped(self) -> bool:
        """Whether ClusterIssuers can be resolved."""
        return self.namespace is None

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> ShimConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            INGRESS_SHIM_CONTEXT: kubeconfig context
            INGRESS_SHIM_KUBECONFIG: kubeconfig path
            INGRESS_SHIM_NAMESPACE: restrict to one namespace
            INGRESS_SHIM_TIMEOUT: API timeout in seconds
            INGRESS_SHIM_DEFAULT_ISSUER_NAME
            INGRESS_SHIM_DEFAULT_ISSUER_KIND
            INGRESS_SHIM_DEFAULT_ACME_ISSUER_CHALLENGE_TYPE
            INGRESS_SHIM_DEFAULT_ACME_ISSUER_DNS01_PROVIDER_NAME
        """
        config_dict = dict(base_config) if base_config else {}
        cluster = dict(config_dict.get("cluster") or {})
        defaults = dict(config_dict.get("defaults") or {})

        if context := os.environ.get(f"{ENV_PREFIX}CONTEXT"):
            cluster["context"] = context
        if kubeconfig := os.environ.get(f"{ENV_PREFIX}KUBECONFIG"):
            cluster["kubeconfig"] = kubeconfig
        if timeout := os.environ.get(f"{ENV_PREFIX}TIMEOUT"):
            cluster["timeout"] = int(timeout)
        if (namespace := os.environ.get(f"{ENV_PREFIX}NAMESPACE")) is not None:
            config_dict["namespace"] = namespace

        env_defaults = {
            "issuer_name": "DEFAULT_ISSUER_NAME",
            "issuer_kind": "DEFAULT_ISSUER_KIND",
            "acme_challenge_type": "DEFAULT_ACME_ISSUER_CHALLENGE_TYPE",
            "acme_dns01_provider_name": "DEFAULT_ACME_ISSUER_DNS01_PROVIDER_NAME",
        }
        for field, suffix in env_defaults.items():
            if (value := os.environ.get(f"{ENV_PREFIX}{suffix}")) is not None:
                defaults[field] = value

        config_dict["cluster"] = cluster
        config_dict["defaults"] = defaults
        return cls.model_validate(config_dict)


def load_config(path: Path | None = None) -> ShimConfig:
    """Load configuration from an optional YAML file plus the environment.

    Args:
        path: YAML file to read. Missing file is an error; None skips it.

    Returns:
        The validated configuration.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file does not contain a mapping.
    """
    base: dict[str, Any] = {}
    if path is not None:
        with path.open() as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"config file {path} must contain a mapping")
        base = loaded
    return ShimConfig.from_env(base)
