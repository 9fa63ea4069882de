"""
Complete typed projection of stored resources

Used for JSON and YAML output. Well-known fields are declared so malformed
sections are rejected, and every undeclared field is kept as an extra so
that nothing stored in a section is lost on the way out. Optional fields
default to None and are dropped on serialization.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from typing_extensions import Annotated

_datetime_adapter = TypeAdapter(datetime)


def _check_timestamp(value: Any) -> Any:
    # Accepts what the table projection accepts and keeps the stored form
    try:
        _datetime_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValueError(f"Input should be a valid datetime, got {value!r}") from None
    return value


Timestamp = Annotated[Any, AfterValidator(_check_timestamp)]


class CompleteModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible mapping using the stored field names"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class OwnerReference(CompleteModel):
    api_version: Optional[str] = Field(None, alias="apiVersion")
    kind: Optional[str] = None
    name: Optional[str] = None
    uid: Optional[str] = None
    controller: Optional[bool] = None
    block_owner_deletion: Optional[bool] = Field(None, alias="blockOwnerDeletion")


class ObjectMeta(CompleteModel):
    name: Optional[str] = None
    generate_name: Optional[str] = Field(None, alias="generateName")
    namespace: Optional[str] = None
    uid: Optional[str] = None
    resource_version: Optional[str] = Field(None, alias="resourceVersion")
    generation: Optional[int] = None
    creation_timestamp: Optional[Timestamp] = Field(None, alias="creationTimestamp")
    deletion_timestamp: Optional[Timestamp] = Field(None, alias="deletionTimestamp")
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None
    owner_references: Optional[List[OwnerReference]] = Field(None, alias="ownerReferences")
    finalizers: Optional[List[str]] = None


class TypedResource(CompleteModel):
    """Fields shared by every reconstructed kind"""

    api_version: str = Field("v1", alias="apiVersion")
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)


# Pod

class ContainerPort(CompleteModel):
    name: Optional[str] = None
    container_port: Optional[int] = Field(None, alias="containerPort")
    host_port: Optional[int] = Field(None, alias="hostPort")
    protocol: Optional[str] = None


class EnvVar(CompleteModel):
    name: Optional[str] = None
    value: Optional[str] = None
    value_from: Optional[Dict[str, Any]] = Field(None, alias="valueFrom")


class ResourceRequirements(CompleteModel):
    limits: Optional[Dict[str, Any]] = None
    requests: Optional[Dict[str, Any]] = None


class VolumeMount(CompleteModel):
    name: Optional[str] = None
    mount_path: Optional[str] = Field(None, alias="mountPath")
    read_only: Optional[bool] = Field(None, alias="readOnly")
    sub_path: Optional[str] = Field(None, alias="subPath")


class Container(CompleteModel):
    name: Optional[str] = None
    image: Optional[str] = None
    command: Optional[List[str]] = None
    args: Optional[List[str]] = None
    working_dir: Optional[str] = Field(None, alias="workingDir")
    ports: Optional[List[ContainerPort]] = None
    env: Optional[List[EnvVar]] = None
    resources: Optional[ResourceRequirements] = None
    volume_mounts: Optional[List[VolumeMount]] = Field(None, alias="volumeMounts")
    image_pull_policy: Optional[str] = Field(None, alias="imagePullPolicy")


class Volume(CompleteModel):
    name: Optional[str] = None


class PodSpec(CompleteModel):
    containers: Optional[List[Container]] = None
    init_containers: Optional[List[Container]] = Field(None, alias="initContainers")
    volumes: Optional[List[Volume]] = None
    restart_policy: Optional[str] = Field(None, alias="restartPolicy")
    termination_grace_period_seconds: Optional[int] = Field(None, alias="terminationGracePeriodSeconds")
    dns_policy: Optional[str] = Field(None, alias="dnsPolicy")
    node_selector: Optional[Dict[str, str]] = Field(None, alias="nodeSelector")
    service_account_name: Optional[str] = Field(None, alias="serviceAccountName")
    node_name: Optional[str] = Field(None, alias="nodeName")
    host_network: Optional[bool] = Field(None, alias="hostNetwork")
    tolerations: Optional[List[Dict[str, Any]]] = None
    affinity: Optional[Dict[str, Any]] = None


class PodCondition(CompleteModel):
    type: Optional[str] = None
    status: Optional[str] = None
    last_probe_time: Optional[str] = Field(None, alias="lastProbeTime")
    last_transition_time: Optional[str] = Field(None, alias="lastTransitionTime")
    reason: Optional[str] = None
    message: Optional[str] = None


class ContainerStatus(CompleteModel):
    name: Optional[str] = None
    state: Optional[Dict[str, Any]] = None
    last_state: Optional[Dict[str, Any]] = Field(None, alias="lastState")
    ready: Optional[bool] = None
    restart_count: Optional[int] = Field(None, alias="restartCount")
    image: Optional[str] = None
    image_id: Optional[str] = Field(None, alias="imageID")
    container_id: Optional[str] = Field(None, alias="containerID")
    started: Optional[bool] = None


class PodStatus(CompleteModel):
    phase: Optional[str] = None
    conditions: Optional[List[PodCondition]] = None
    message: Optional[str] = None
    reason: Optional[str] = None
    host_ip: Optional[str] = Field(None, alias="hostIP")
    pod_ip: Optional[str] = Field(None, alias="podIP")
    pod_ips: Optional[List[Dict[str, str]]] = Field(None, alias="podIPs")
    start_time: Optional[str] = Field(None, alias="startTime")
    init_container_statuses: Optional[List[ContainerStatus]] = Field(None, alias="initContainerStatuses")
    container_statuses: Optional[List[ContainerStatus]] = Field(None, alias="containerStatuses")
    qos_class: Optional[str] = Field(None, alias="qosClass")


class Pod(TypedResource):
    spec: Optional[PodSpec] = None
    status: Optional[PodStatus] = None


# Service

class ServicePort(CompleteModel):
    name: Optional[str] = None
    protocol: Optional[str] = None
    port: Optional[int] = None
    target_port: Optional[Union[int, str]] = Field(None, alias="targetPort")
    node_port: Optional[int] = Field(None, alias="nodePort")


class ServiceSpec(CompleteModel):
    type: Optional[str] = None
    selector: Optional[Dict[str, str]] = None
    ports: Optional[List[ServicePort]] = None
    cluster_ip: Optional[str] = Field(None, alias="clusterIP")
    cluster_ips: Optional[List[str]] = Field(None, alias="clusterIPs")
    external_ips: Optional[List[str]] = Field(None, alias="externalIPs")
    external_name: Optional[str] = Field(None, alias="externalName")
    load_balancer_ip: Optional[str] = Field(None, alias="loadBalancerIP")
    session_affinity: Optional[str] = Field(None, alias="sessionAffinity")
    external_traffic_policy: Optional[str] = Field(None, alias="externalTrafficPolicy")


class LoadBalancerIngress(CompleteModel):
    ip: Optional[str] = None
    hostname: Optional[str] = None


class LoadBalancerStatus(CompleteModel):
    ingress: Optional[List[LoadBalancerIngress]] = None


class ServiceStatus(CompleteModel):
    load_balancer: Optional[LoadBalancerStatus] = Field(None, alias="loadBalancer")


class Service(TypedResource):
    spec: Optional[ServiceSpec] = None
    status: Optional[ServiceStatus] = None


# Secret and ConfigMap

class Secret(TypedResource):
    data: Optional[Dict[str, str]] = None
    type: Optional[str] = None


class ConfigMap(TypedResource):
    data: Optional[Dict[str, str]] = None


# Endpoints

class ObjectReference(CompleteModel):
    kind: Optional[str] = None
    namespace: Optional[str] = None
    name: Optional[str] = None
    uid: Optional[str] = None
    resource_version: Optional[str] = Field(None, alias="resourceVersion")


class EndpointAddress(CompleteModel):
    ip: Optional[str] = None
    hostname: Optional[str] = None
    node_name: Optional[str] = Field(None, alias="nodeName")
    target_ref: Optional[ObjectReference] = Field(None, alias="targetRef")


class EndpointPort(CompleteModel):
    name: Optional[str] = None
    port: Optional[int] = None
    protocol: Optional[str] = None


class EndpointSubset(CompleteModel):
    addresses: Optional[List[EndpointAddress]] = None
    not_ready_addresses: Optional[List[EndpointAddress]] = Field(None, alias="notReadyAddresses")
    ports: Optional[List[EndpointPort]] = None


class Endpoints(TypedResource):
    subsets: Optional[List[EndpointSubset]] = None


# Node

class Taint(CompleteModel):
    key: Optional[str] = None
    value: Optional[str] = None
    effect: Optional[str] = None
    time_added: Optional[str] = Field(None, alias="timeAdded")


class NodeSpec(CompleteModel):
    pod_cidr: Optional[str] = Field(None, alias="podCIDR")
    pod_cidrs: Optional[List[str]] = Field(None, alias="podCIDRs")
    provider_id: Optional[str] = Field(None, alias="providerID")
    unschedulable: Optional[bool] = None
    taints: Optional[List[Taint]] = None


class NodeCondition(CompleteModel):
    type: Optional[str] = None
    status: Optional[str] = None
    last_heartbeat_time: Optional[str] = Field(None, alias="lastHeartbeatTime")
    last_transition_time: Optional[str] = Field(None, alias="lastTransitionTime")
    reason: Optional[str] = None
    message: Optional[str] = None


class NodeAddress(CompleteModel):
    type: Optional[str] = None
    address: Optional[str] = None


class NodeSystemInfo(CompleteModel):
    machine_id: Optional[str] = Field(None, alias="machineID")
    system_uuid: Optional[str] = Field(None, alias="systemUUID")
    boot_id: Optional[str] = Field(None, alias="bootID")
    kernel_version: Optional[str] = Field(None, alias="kernelVersion")
    os_image: Optional[str] = Field(None, alias="osImage")
    container_runtime_version: Optional[str] = Field(None, alias="containerRuntimeVersion")
    kubelet_version: Optional[str] = Field(None, alias="kubeletVersion")
    kube_proxy_version: Optional[str] = Field(None, alias="kubeProxyVersion")
    operating_system: Optional[str] = Field(None, alias="operatingSystem")
    architecture: Optional[str] = None


class NodeStatus(CompleteModel):
    capacity: Optional[Dict[str, Any]] = None
    allocatable: Optional[Dict[str, Any]] = None
    phase: Optional[str] = None
    conditions: Optional[List[NodeCondition]] = None
    addresses: Optional[List[NodeAddress]] = None
    daemon_endpoints: Optional[Dict[str, Any]] = Field(None, alias="daemonEndpoints")
    node_info: Optional[NodeSystemInfo] = Field(None, alias="nodeInfo")
    images: Optional[List[Dict[str, Any]]] = None


class Node(TypedResource):
    spec: Optional[NodeSpec] = None
    status: Optional[NodeStatus] = None
