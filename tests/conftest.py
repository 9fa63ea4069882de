"""
Pytest configuration and shared fixtures for edge-snapshot tests
"""

import json
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from edge_snapshot.models import MetaRecord
from edge_snapshot.store import InMemoryMetaStore
from edge_snapshot.store.sqlite import Base, Meta, database_url

# Reference time for AGE columns; fixtures are created one day earlier
NOW = datetime(2024, 1, 2, tzinfo=timezone.utc)
CREATED = "2024-01-01T00:00:00Z"


def make_record(resource_type, key, document):
    """Build a store record from a document dict"""
    return MetaRecord(type=resource_type, key=key, value=json.dumps(document))


def pod_document(name, namespace="default", labels=None, phase="Pending"):
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "labels": labels,
            "creationTimestamp": CREATED,
        },
        "spec": {
            "containers": [{"name": "nginx", "image": "nginx:1.25"}],
            "nodeName": "edge-1",
        },
        "status": {"phase": phase},
    }


def service_document(name, namespace="default", cluster_ip="10.96.0.10"):
    return {
        "metadata": {"name": name, "namespace": namespace, "creationTimestamp": CREATED},
        "spec": {
            "type": "ClusterIP",
            "clusterIP": cluster_ip,
            "ports": [{"name": "http", "port": 80, "targetPort": 8080, "protocol": "TCP"}],
        },
        "status": {"loadBalancer": {}},
    }


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def pod_record():
    """Pod stored with a stale Pending status"""
    return make_record("pod", "default/pod/nginx-1", pod_document("nginx-1", labels={"app": "web"}))


@pytest.fixture
def pod_status_record():
    """Status record written by the edge agent for nginx-1"""
    return make_record(
        "podstatus",
        "default/podstatus/nginx-1",
        {
            "UID": "5d3c8f0e-0000-4000-8000-000000000001",
            "Name": "nginx-1",
            "Status": {
                "phase": "Running",
                "podIP": "172.17.0.5",
                "containerStatuses": [
                    {
                        "name": "nginx",
                        "ready": True,
                        "restartCount": 2,
                        "state": {"running": {"startedAt": CREATED}},
                    }
                ],
            },
        },
    )


@pytest.fixture
def service_record():
    return make_record("service", "default/service/web", service_document("web"))


@pytest.fixture
def secret_record():
    return make_record(
        "secret",
        "default/secret/db-password",
        {
            "metadata": {"name": "db-password", "namespace": "default", "creationTimestamp": CREATED},
            "type": "Opaque",
            "data": {"password": "cGFzc3dvcmQ=", "user": "YWRtaW4="},
        },
    )


@pytest.fixture
def configmap_record():
    return make_record(
        "configmap",
        "default/configmap/app-config",
        {
            "metadata": {"name": "app-config", "namespace": "default", "creationTimestamp": CREATED},
            "data": {"mode": "edge"},
        },
    )


@pytest.fixture
def endpoints_record():
    return make_record(
        "endpoints",
        "default/endpoints/web",
        {
            "metadata": {"name": "web", "namespace": "default", "creationTimestamp": CREATED},
            "subsets": [
                {
                    "addresses": [{"ip": "172.17.0.5"}, {"ip": "172.17.0.6"}],
                    "ports": [{"port": 8080, "protocol": "TCP"}],
                }
            ],
        },
    )


@pytest.fixture
def node_record():
    return make_record(
        "node",
        "default/node/edge-1",
        {
            "metadata": {
                "name": "edge-1",
                "labels": {"node-role.kubernetes.io/edge": "", "node-role.kubernetes.io/agent": ""},
                "creationTimestamp": CREATED,
            },
            "spec": {},
        },
    )


@pytest.fixture
def node_status_record():
    return make_record(
        "nodestatus",
        "default/nodestatus/edge-1",
        {
            "UID": "edge-1-uid",
            "Status": {
                "conditions": [{"type": "Ready", "status": "True"}],
                "nodeInfo": {"kubeletVersion": "v1.22.6-kubeedge-v1.12.0"},
            },
        },
    )


@pytest.fixture
def all_records(
    pod_record,
    pod_status_record,
    service_record,
    secret_record,
    configmap_record,
    endpoints_record,
    node_record,
    node_status_record,
):
    return [
        pod_record,
        pod_status_record,
        service_record,
        secret_record,
        configmap_record,
        endpoints_record,
        node_record,
        node_status_record,
    ]


@pytest.fixture
def memory_store(all_records):
    """In-memory store holding one record of every kind"""
    return InMemoryMetaStore(all_records)


@pytest.fixture
def write_database(tmp_path):
    """Factory writing records into a fresh SQLite database file"""

    def _write(records, name="edgecore.db"):
        path = tmp_path / name
        engine = create_engine(database_url(str(path), read_only=False))
        Base.metadata.create_all(engine)
        with Session(engine) as session:
            for record in records:
                session.add(Meta(key=record.key, type=record.type, value=record.value))
            session.commit()
        engine.dispose()
        return str(path)

    return _write


@pytest.fixture
def sqlite_db(write_database, all_records):
    """SQLite database holding one record of every kind"""
    return write_database(all_records)


@pytest.fixture(name="make_record")
def make_record_fixture():
    """Expose make_record to test modules"""
    return make_record
