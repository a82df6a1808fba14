"""Event recording for Ingresses.

Events are informational. A failure to record one is logged and dropped so
that it never changes the outcome of the operation being reported.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from ingress_shim.integrations.kubernetes.exceptions import KubernetesError
from ingress_shim.services.kubernetes.base import K8sBaseManager

if TYPE_CHECKING:
    from ingress_shim.integrations.kubernetes.client import KubernetesClient
    from ingress_shim.integrations.kubernetes.models.ingress import IngressResource

EVENT_TYPE_NORMAL = "Normal"

DEFAULT_COMPONENT = "ingress-shim"


class EventRecorder(K8sBaseManager):
    """Writes ``core/v1`` Events against Ingresses."""

    _entity_name = "event"

    def __init__(self, client: KubernetesClient, component: str = DEFAULT_COMPONENT) -> None:
        super().__init__(client)
        self._component = component

    def event(
        self,
        target: IngressResource,
        event_type: str,
        reason: str,
        message: str,
    ) -> None:
        """Record an event on ``target``.

        Args:
            target: The Ingress the event is about.
            event_type: ``Normal`` or ``Warning``.
            reason: Short CamelCase reason, e.g. ``CreateCertificate``.
            message: Human-readable message.
        """
        ns = self._resolve_namespace(target.namespace)
        now = datetime.now(UTC)
        body: dict[str, Any] = {
            "apiVersion": "v1",
            "kind": "Event",
            "metadata": {
                "name": f"{target.name}.{time.time_ns():x}",
                "namespace": ns,
            },
            "involvedObject": target.event_target(),
            "type": event_type,
            "reason": reason,
            "message": message,
            "source": {"component": self._component},
            "firstTimestamp": now,
            "lastTimestamp": now,
            "count": 1,
        }
        try:
            self._client.core_v1.create_namespaced_event(
                ns, body, _request_timeout=self._client.timeout
            )
        except Exception as e:
            err: KubernetesError = self._client.translate_api_exception(
                e, resource_type="Event", namespace=ns
            )
            self._log.warning(
                "event_not_recorded",
                reason=reason,
                ingress=target.name,
                namespace=ns,
                error=str(err),
            )
            return
        self._log.debug("recorded_event", reason=reason, ingress=target.name, namespace=ns)
