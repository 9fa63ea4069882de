"""
Table column definitions

Each kind has a fixed list of columns and a row handler that computes the
cells from the minimal projection, following the column rules of
``kubectl get``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from ..models import ResourceKind
from ..schemas import minimal

NONE_VALUE = "<none>"
NODE_ROLE_PREFIX = "node-role.kubernetes.io/"
NODE_ROLE_LABEL = "kubernetes.io/role"
MAX_ENDPOINTS_SHOWN = 3


@dataclass
class TableSpec:
    """Columns of one kind and the handler that fills a row"""
    columns: List[str]
    row: Callable[..., List[str]]
    namespaced: bool = True


def human_duration(delta: timedelta) -> str:
    """Short human readable duration, as printed in the AGE column"""
    seconds = int(delta.total_seconds())
    if seconds < -1:
        return "<invalid>"
    if seconds < 0:
        return "0s"
    if seconds < 60 * 2:
        return f"{seconds}s"

    minutes = seconds // 60
    if minutes < 10:
        remainder = seconds % 60
        return f"{minutes}m{remainder}s" if remainder else f"{minutes}m"
    if minutes < 60 * 3:
        return f"{minutes}m"

    hours = minutes // 60
    if hours < 8:
        remainder = minutes % 60
        return f"{hours}h{remainder}m" if remainder else f"{hours}h"
    if hours < 48:
        return f"{hours}h"
    if hours < 24 * 8:
        remainder = hours % 24
        return f"{hours // 24}d{remainder}h" if remainder else f"{hours // 24}d"
    if hours < 24 * 365 * 2:
        return f"{hours // 24}d"
    if hours < 24 * 365 * 8:
        days = (hours // 24) % 365
        return f"{hours // 24 // 365}y{days}d" if days else f"{hours // 24 // 365}y"
    return f"{hours // 24 // 365}y"


def age(timestamp: Optional[datetime], now: datetime) -> str:
    if timestamp is None:
        return "<unknown>"
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return human_duration(now - timestamp)


def pod_row(pod: minimal.Pod, now: datetime) -> List[str]:
    total = len(pod.spec.containers)
    ready = 0
    restarts = 0
    reason = pod.status.reason or pod.status.phase

    for status in reversed(pod.status.container_statuses):
        restarts += status.restart_count
        state = status.state
        if state.waiting and state.waiting.reason:
            reason = state.waiting.reason
        elif state.terminated and state.terminated.reason:
            reason = state.terminated.reason
        elif state.terminated:
            if state.terminated.signal:
                reason = f"Signal:{state.terminated.signal}"
            else:
                reason = f"ExitCode:{state.terminated.exit_code}"
        elif status.ready:
            ready += 1

    if pod.metadata.deletion_timestamp is not None:
        reason = "Terminating"

    return [
        pod.metadata.name,
        f"{ready}/{total}",
        reason or "Unknown",
        str(restarts),
        age(pod.metadata.creation_timestamp, now),
    ]


def _service_external_ip(service: minimal.Service) -> str:
    spec = service.spec
    if spec.type in ("ClusterIP", "NodePort"):
        return ",".join(spec.external_ips) if spec.external_ips else NONE_VALUE
    if spec.type == "LoadBalancer":
        addresses = [i.ip or i.hostname for i in service.status.load_balancer.ingress if i.ip or i.hostname]
        addresses.extend(spec.external_ips)
        return ",".join(addresses) if addresses else "<pending>"
    if spec.type == "ExternalName":
        return spec.external_name or NONE_VALUE
    return "<unknown>"


def _service_ports(service: minimal.Service) -> str:
    ports = []
    for port in service.spec.ports:
        if port.node_port:
            ports.append(f"{port.port}:{port.node_port}/{port.protocol}")
        else:
            ports.append(f"{port.port}/{port.protocol}")
    return ",".join(ports) if ports else NONE_VALUE


def service_row(service: minimal.Service, now: datetime) -> List[str]:
    return [
        service.metadata.name,
        service.spec.type,
        service.spec.cluster_ip or NONE_VALUE,
        _service_external_ip(service),
        _service_ports(service),
        age(service.metadata.creation_timestamp, now),
    ]


def secret_row(secret: minimal.Secret, now: datetime) -> List[str]:
    return [
        secret.metadata.name,
        secret.type,
        str(len(secret.data)),
        age(secret.metadata.creation_timestamp, now),
    ]


def configmap_row(configmap: minimal.ConfigMap, now: datetime) -> List[str]:
    return [
        configmap.metadata.name,
        str(len(configmap.data)),
        age(configmap.metadata.creation_timestamp, now),
    ]


def format_endpoints(endpoints: minimal.Endpoints) -> str:
    """ip:port pairs of every subset, truncated after a few entries"""
    pairs = []
    for subset in endpoints.subsets:
        for address in subset.addresses:
            if subset.ports:
                pairs.extend(f"{address.ip}:{port.port}" for port in subset.ports)
            else:
                pairs.append(address.ip)

    if not pairs:
        return NONE_VALUE
    shown = ",".join(pairs[:MAX_ENDPOINTS_SHOWN])
    if len(pairs) > MAX_ENDPOINTS_SHOWN:
        shown += f" + {len(pairs) - MAX_ENDPOINTS_SHOWN} more..."
    return shown


def endpoints_row(endpoints: minimal.Endpoints, now: datetime) -> List[str]:
    return [
        endpoints.metadata.name,
        format_endpoints(endpoints),
        age(endpoints.metadata.creation_timestamp, now),
    ]


def node_roles(node: minimal.Node) -> str:
    roles = set()
    for key, value in node.metadata.labels.items():
        if key.startswith(NODE_ROLE_PREFIX):
            role = key[len(NODE_ROLE_PREFIX):]
            if role:
                roles.add(role)
        elif key == NODE_ROLE_LABEL and value:
            roles.add(value)
    return ",".join(sorted(roles)) if roles else NONE_VALUE


def node_row(node: minimal.Node, now: datetime) -> List[str]:
    status = "Unknown"
    for condition in node.status.conditions:
        if condition.type == "Ready":
            status = "Ready" if condition.status == "True" else "NotReady"
            break
    if node.spec.unschedulable:
        status += ",SchedulingDisabled"

    return [
        node.metadata.name,
        status,
        node_roles(node),
        age(node.metadata.creation_timestamp, now),
        node.status.node_info.kubelet_version,
    ]


TABLE_SPECS: Dict[ResourceKind, TableSpec] = {
    ResourceKind.POD: TableSpec(["NAME", "READY", "STATUS", "RESTARTS", "AGE"], pod_row),
    ResourceKind.SERVICE: TableSpec(
        ["NAME", "TYPE", "CLUSTER-IP", "EXTERNAL-IP", "PORT(S)", "AGE"], service_row
    ),
    ResourceKind.SECRET: TableSpec(["NAME", "TYPE", "DATA", "AGE"], secret_row),
    ResourceKind.CONFIGMAP: TableSpec(["NAME", "DATA", "AGE"], configmap_row),
    ResourceKind.ENDPOINTS: TableSpec(["NAME", "ENDPOINTS", "AGE"], endpoints_row),
    ResourceKind.NODE: TableSpec(
        ["NAME", "STATUS", "ROLES", "AGE", "VERSION"], node_row, namespaced=False
    ),
}
