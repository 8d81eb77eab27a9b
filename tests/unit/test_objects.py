"""Unit tests for ResourceObject, ListResult and StatusResult."""

from __future__ import annotations

import pytest

from kubecore.errors import UnsupportedOperationError
from kubecore.models.objects import ListResult, Outcome, ResourceObject, StatusResult
from kubecore.resources import DEPLOYMENTS, NAMESPACES, PODS


def _pod() -> ResourceObject:
    return ResourceObject(
        {
            "apiVersion": "v1",
            "kind": "Pod",
            "metadata": {
                "name": "demo",
                "namespace": "ns1",
                "resourceVersion": "42",
                "labels": {"app": "demo"},
                "annotations": {"owner": "team-a"},
            },
            "spec": {"containers": [{"name": "main", "image": "nginx"}]},
        },
        PODS,
    )


class TestResourceObject:
    def test_identity_accessors(self) -> None:
        pod = _pod()
        assert pod.name() == "demo"
        assert pod.namespace() == "ns1"
        assert pod.resource_version() == "42"
        assert pod.kind == "Pod"
        assert pod.api_version == "v1"
        assert pod.descriptor is PODS

    def test_kind_falls_back_to_descriptor(self) -> None:
        obj = ResourceObject({"metadata": {"name": "web"}}, DEPLOYMENTS)
        assert obj.kind == "Deployment"
        assert obj.api_version == "apps/v1"

    def test_mapping_access(self) -> None:
        pod = _pod()
        pod["spec"]["containers"][0]["image"] = "nginx:1.27"
        assert pod["spec"]["containers"][0]["image"] == "nginx:1.27"
        assert set(pod) == {"apiVersion", "kind", "metadata", "spec"}
        assert len(pod) == 4
        del pod["spec"]
        assert "spec" not in pod

    def test_namespace_on_cluster_scoped_kind(self) -> None:
        ns = ResourceObject({"metadata": {"name": "team-a"}}, NAMESPACES)
        with pytest.raises(UnsupportedOperationError):
            ns.namespace()
        assert ns.name() == "team-a"

    def test_missing_metadata(self) -> None:
        obj = ResourceObject({}, PODS)
        assert obj.name() is None
        assert obj.labels() == {}
        assert obj.annotations() == {}

    def test_label_getter_returns_copy(self) -> None:
        pod = _pod()
        labels = pod.labels()
        labels["tier"] = "web"
        assert pod.labels() == {"app": "demo"}

    def test_set_labels_and_annotations(self) -> None:
        pod = _pod()
        pod.set_labels({"app": "demo", "tier": "web"})
        pod.set_annotations({})
        assert pod["metadata"]["labels"] == {"app": "demo", "tier": "web"}
        assert pod.annotations() == {}

    def test_setters_create_metadata(self) -> None:
        obj = ResourceObject({"kind": "Pod"}, PODS)
        obj.set_labels({"a": "b"})
        assert obj["metadata"] == {"labels": {"a": "b"}}

    def test_to_dict_is_deep_copy(self) -> None:
        pod = _pod()
        doc = pod.to_dict()
        doc["metadata"]["name"] = "other"
        assert pod.name() == "demo"

    def test_repr(self) -> None:
        assert repr(_pod()) == "<ResourceObject Pod ns1/demo>"


class TestListResult:
    def test_from_dict(self) -> None:
        raw = {
            "kind": "PodList",
            "apiVersion": "v1",
            "metadata": {"resourceVersion": "100", "continue": "token-1"},
            "items": [{"metadata": {"name": "a"}}, {"metadata": {"name": "b"}}],
        }
        result = ListResult.from_dict(raw, PODS)
        assert result.kind == "PodList"
        assert [i["metadata"]["name"] for i in result.items] == ["a", "b"]
        assert result.resource_version == "100"
        assert result.continue_token == "token-1"

    def test_defaults_from_descriptor(self) -> None:
        result = ListResult.from_dict({"items": None, "metadata": {"continue": ""}}, DEPLOYMENTS)
        assert result.kind == "DeploymentList"
        assert result.api_version == "apps/v1"
        assert result.items == []
        assert result.continue_token is None


class TestStatusResult:
    def test_success_status(self) -> None:
        result = StatusResult.from_response(
            {"kind": "Status", "apiVersion": "v1", "status": "Success", "details": {"name": "demo"}},
            PODS,
        )
        assert result.status is Outcome.SUCCESS
        assert not result.is_failure()
        assert result.resource is None

    def test_failure_status(self) -> None:
        result = StatusResult.from_response(
            {"kind": "Status", "status": "Failure", "reason": "NotFound", "message": "gone", "code": 404},
            PODS,
        )
        assert result.is_failure()
        assert result.reason == "NotFound"
        assert result.message == "gone"
        assert result.code == 404

    def test_unknown_status_value(self) -> None:
        result = StatusResult.from_response({"kind": "Status"}, PODS)
        assert result.status is None
        assert not result.is_failure()

    def test_object_response(self) -> None:
        raw = {
            "kind": "Namespace",
            "metadata": {"name": "team-a"},
            "status": {"phase": "Terminating"},
        }
        result = StatusResult.from_response(raw, NAMESPACES)
        assert result.status is None
        assert result.resource is not None
        assert result.resource["status"]["phase"] == "Terminating"
