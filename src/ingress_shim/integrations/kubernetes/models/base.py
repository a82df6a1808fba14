"""Base models shared by the Kubernetes resource models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class K8sEntityBase(BaseModel):
    """Identity fields common to every Kubernetes object we read or write."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )

    name: str = Field(description="Resource name")
    namespace: str | None = Field(default=None, description="Resource namespace")
    uid: str | None = Field(default=None, description="Kubernetes UID")
    annotations: dict[str, str] = Field(default_factory=dict, description="Resource annotations")


class OwnerReference(BaseModel):
    """Kubernetes owner reference."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    api_version: str
    kind: str
    name: str
    uid: str | None = None
    controller: bool = False
    block_owner_deletion: bool = False

    @classmethod
    def from_k8s_object(cls, obj: dict[str, Any]) -> OwnerReference:
        """Create from an ``ownerReferences[]`` dict."""
        return cls(
            api_version=obj.get("apiVersion", ""),
            kind=obj.get("kind", ""),
            name=obj.get("name", ""),
            uid=obj.get("uid"),
            controller=bool(obj.get("controller", False)),
            block_owner_deletion=bool(obj.get("blockOwnerDeletion", False)),
        )

    def to_k8s_object(self) -> dict[str, Any]:
        """Render as an ``ownerReferences[]`` entry."""
        ref: dict[str, Any] = {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "name": self.name,
            "controller": self.controller,
            "blockOwnerDeletion": self.block_owner_deletion,
        }
        if self.uid:
            ref["uid"] = self.uid
        return ref


def _safe_get(obj: Any, *attrs: str, default: Any = None) -> Any:
    """Safely traverse nested attributes on kubernetes SDK objects."""
    current = obj
    for attr in attrs:
        if current is None:
            return default
        current = getattr(current, attr, None)
    return current if current is not None else default
