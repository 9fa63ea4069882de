"""
Minimal typed projection of stored resources

Only the fields needed to compute table columns are declared; everything
else in a document is ignored. Missing sections decode to empty models so
column handlers never have to check for None.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MinimalModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        # null decodes to the zero value, as it does for the edge agent
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ObjectMeta(MinimalModel):
    name: str = ""
    namespace: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)
    creation_timestamp: Optional[datetime] = Field(None, alias="creationTimestamp")
    deletion_timestamp: Optional[datetime] = Field(None, alias="deletionTimestamp")


class TypedResource(MinimalModel):
    """Fields shared by every reconstructed kind"""

    api_version: str = Field("v1", alias="apiVersion")
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)


# Pod

class Container(MinimalModel):
    name: str = ""


class PodSpec(MinimalModel):
    containers: List[Container] = Field(default_factory=list)


class ContainerStateWaiting(MinimalModel):
    reason: str = ""


class ContainerStateTerminated(MinimalModel):
    reason: str = ""
    exit_code: int = Field(0, alias="exitCode")
    signal: int = 0


class ContainerState(MinimalModel):
    waiting: Optional[ContainerStateWaiting] = None
    terminated: Optional[ContainerStateTerminated] = None


class ContainerStatus(MinimalModel):
    ready: bool = False
    restart_count: int = Field(0, alias="restartCount")
    state: ContainerState = Field(default_factory=ContainerState)


class PodStatus(MinimalModel):
    phase: str = ""
    reason: str = ""
    container_statuses: List[ContainerStatus] = Field(default_factory=list, alias="containerStatuses")


class Pod(TypedResource):
    spec: PodSpec = Field(default_factory=PodSpec)
    status: PodStatus = Field(default_factory=PodStatus)


# Service

class ServicePort(MinimalModel):
    port: int = 0
    node_port: int = Field(0, alias="nodePort")
    protocol: str = "TCP"


class ServiceSpec(MinimalModel):
    type: str = "ClusterIP"
    cluster_ip: str = Field("", alias="clusterIP")
    external_ips: List[str] = Field(default_factory=list, alias="externalIPs")
    external_name: str = Field("", alias="externalName")
    ports: List[ServicePort] = Field(default_factory=list)


class LoadBalancerIngress(MinimalModel):
    ip: str = ""
    hostname: str = ""


class LoadBalancerStatus(MinimalModel):
    ingress: List[LoadBalancerIngress] = Field(default_factory=list)


class ServiceStatus(MinimalModel):
    load_balancer: LoadBalancerStatus = Field(default_factory=LoadBalancerStatus, alias="loadBalancer")


class Service(TypedResource):
    spec: ServiceSpec = Field(default_factory=ServiceSpec)
    status: ServiceStatus = Field(default_factory=ServiceStatus)


# Secret and ConfigMap

class Secret(TypedResource):
    type: str = ""
    data: Dict[str, str] = Field(default_factory=dict)


class ConfigMap(TypedResource):
    data: Dict[str, str] = Field(default_factory=dict)


# Endpoints

class EndpointAddress(MinimalModel):
    ip: str = ""


class EndpointPort(MinimalModel):
    port: int = 0


class EndpointSubset(MinimalModel):
    addresses: List[EndpointAddress] = Field(default_factory=list)
    ports: List[EndpointPort] = Field(default_factory=list)


class Endpoints(TypedResource):
    subsets: List[EndpointSubset] = Field(default_factory=list)


# Node

class NodeSpec(MinimalModel):
    unschedulable: bool = False


class NodeCondition(MinimalModel):
    type: str = ""
    status: str = ""


class NodeSystemInfo(MinimalModel):
    kubelet_version: str = Field("", alias="kubeletVersion")


class NodeStatus(MinimalModel):
    conditions: List[NodeCondition] = Field(default_factory=list)
    node_info: NodeSystemInfo = Field(default_factory=NodeSystemInfo, alias="nodeInfo")


class Node(TypedResource):
    spec: NodeSpec = Field(default_factory=NodeSpec)
    status: NodeStatus = Field(default_factory=NodeStatus)
