"""
Unit tests for record retrieval and status merging
"""

import pytest

from edge_snapshot.collectors import merge_status, query_resources
from edge_snapshot.collectors.base import matches_names, registry
from edge_snapshot.exceptions import DecodeError, UnrecognizedResourceType
from edge_snapshot.models import ResourceKind
from edge_snapshot.store import InMemoryMetaStore


class TestMatchesNames:
    """Tests for name filtering"""

    def test_empty_names_match_everything(self):
        assert matches_names([], "default/pod/nginx")

    def test_substring_match(self):
        assert matches_names(["web"], "default/pod/web-1")

    def test_no_match(self):
        assert not matches_names(["db"], "default/pod/web-1")


class TestMergeStatus:
    """Tests for folding status records into base records"""

    def test_exported_status_field(self, pod_record, pod_status_record):
        merged = merge_status(pod_record, pod_status_record)
        document = merged.document()

        assert document["status"]["phase"] == "Running"
        assert document["spec"] == pod_record.document()["spec"]
        assert document["metadata"] == pod_record.document()["metadata"]

    def test_lowercase_status_field(self, make_record, pod_record):
        status = make_record("podstatus", "default/podstatus/nginx-1", {"status": {"phase": "Failed"}})
        assert merge_status(pod_record, status).document()["status"] == {"phase": "Failed"}

    def test_status_record_without_status(self, make_record, pod_record):
        status = make_record("podstatus", "default/podstatus/nginx-1", {"UID": "x"})
        assert merge_status(pod_record, status).document()["status"] is None


class TestQueryResources:
    """Tests for query_resources"""

    def test_pod_with_status(self, memory_store):
        records = query_resources(memory_store, "pods")

        assert len(records) == 1
        assert records[0].key == "default/pod/nginx-1"
        assert records[0].document()["status"]["containerStatuses"][0]["restartCount"] == 2

    def test_pod_without_status(self, make_record):
        store = InMemoryMetaStore([
            make_record("pod", "default/pod/a", {"metadata": {"name": "a"}, "status": {"phase": "Pending"}}),
        ])
        records = query_resources(store, "po")
        assert records[0].document()["status"] == {"phase": "Pending"}

    def test_node_with_status(self, memory_store):
        records = query_resources(memory_store, "no")
        assert records[0].document()["status"]["nodeInfo"]["kubeletVersion"].startswith("v1.22")

    def test_namespace_scope(self, make_record):
        store = InMemoryMetaStore([
            make_record("configmap", "default/configmap/a", {}),
            make_record("configmap", "kube-system/configmap/b", {}),
        ])
        assert [r.key for r in query_resources(store, "cm", namespace="kube-system")] == ["kube-system/configmap/b"]
        assert len(query_resources(store, "cm", namespace="kube-system", all_namespaces=True)) == 2
        assert query_resources(store, "cm", namespace="other") == []

    def test_name_filter_is_substring(self, make_record):
        store = InMemoryMetaStore([
            make_record("service", "default/service/web", {}),
            make_record("service", "default/service/web-internal", {}),
            make_record("service", "default/service/db", {}),
        ])
        keys = [r.key for r in query_resources(store, "svc", names=["web"])]
        assert keys == ["default/service/web", "default/service/web-internal"]

    def test_name_matches_type_segment(self, make_record):
        """Test a name is matched against the whole key"""
        store = InMemoryMetaStore([make_record("service", "default/service/web", {})])
        assert len(query_resources(store, "svc", names=["service"])) == 1

    def test_all_concatenates_in_query_order(self, memory_store):
        records = query_resources(memory_store, "all")
        assert [r.type for r in records] == ["pod", "node", "configmap", "secret", "endpoints", "service"]

    def test_status_records_are_not_returned(self, memory_store):
        types = {r.type for r in query_resources(memory_store, "all")}
        assert "podstatus" not in types
        assert "nodestatus" not in types

    def test_unknown_type(self, memory_store):
        with pytest.raises(UnrecognizedResourceType):
            query_resources(memory_store, "widget")

    def test_malformed_status_aborts_query(self, make_record, pod_record):
        store = InMemoryMetaStore([
            pod_record,
            make_record("podstatus", "default/podstatus/nginx-1", []),
        ])
        with pytest.raises(DecodeError):
            query_resources(store, "pod")


class TestCollectorRegistry:
    @pytest.mark.parametrize("kind", list(ResourceKind))
    def test_every_kind_has_a_collector(self, memory_store, kind):
        collector = registry.create(kind, memory_store, "default")
        assert collector.kind == kind
        assert [r.type for r in collector.collect([])] == [kind.value]
