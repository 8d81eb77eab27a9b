"""Unit tests for ResourceDescriptor path building and the built-in catalogue."""

from __future__ import annotations

import pytest

from kubecore.errors import NotFoundError
from kubecore.models.resources import ResourceDescriptor
from kubecore.resources import (
    BUILTIN_DESCRIPTORS,
    CLUSTERROLES,
    CONFIGMAPS,
    DEPLOYMENTS,
    INGRESSES,
    JOBS,
    NAMESPACES,
    NODES,
    PODS,
    SECRETS,
    SERVICEACCOUNTS,
    descriptors_for,
    get_descriptor,
)


class TestDescriptor:
    def test_core_group_api_version(self) -> None:
        assert PODS.api_version == "v1"
        assert PODS.api_prefix == "/api/v1"

    def test_named_group_api_version(self) -> None:
        assert DEPLOYMENTS.api_version == "apps/v1"
        assert DEPLOYMENTS.api_prefix == "/apis/apps/v1"

    def test_list_kind(self) -> None:
        assert PODS.list_kind == "PodList"
        assert NAMESPACES.list_kind == "NamespaceList"

    def test_descriptor_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            PODS.namespaced = False  # type: ignore[misc]

    def test_str_includes_group(self) -> None:
        assert str(PODS) == "pods"
        assert str(JOBS) == "jobs.batch"


class TestPaths:
    def test_namespaced_collection(self) -> None:
        assert PODS.path("ns1") == "/api/v1/namespaces/ns1/pods"

    def test_namespaced_collection_all_namespaces(self) -> None:
        assert PODS.path() == "/api/v1/pods"

    def test_namespaced_object(self) -> None:
        assert PODS.path("ns1", "demo") == "/api/v1/namespaces/ns1/pods/demo"

    def test_subresources(self) -> None:
        assert PODS.path("ns1", "demo", "status") == "/api/v1/namespaces/ns1/pods/demo/status"
        assert PODS.path("ns1", "demo", "log") == "/api/v1/namespaces/ns1/pods/demo/log"

    def test_cluster_scoped_ignores_namespace(self) -> None:
        assert NODES.path("ns1", "node-1") == "/api/v1/nodes/node-1"
        assert NAMESPACES.path(None, "demo", "status") == "/api/v1/namespaces/demo/status"

    def test_named_group_paths(self) -> None:
        assert DEPLOYMENTS.path("prod", "web") == "/apis/apps/v1/namespaces/prod/deployments/web"
        assert INGRESSES.path("prod") == "/apis/networking.k8s.io/v1/namespaces/prod/ingresses"
        assert CLUSTERROLES.path(None, "admin") == "/apis/rbac.authorization.k8s.io/v1/clusterroles/admin"

    def test_names_are_quoted(self) -> None:
        assert PODS.path("ns", "a/b") == "/api/v1/namespaces/ns/pods/a%2Fb"

    def test_custom_descriptor(self) -> None:
        crd = ResourceDescriptor("domains", "Domain", group="panel.example.io", version="v1alpha1", has_status=True)
        assert crd.path("tenant", "example-com", "status") == (
            "/apis/panel.example.io/v1alpha1/namespaces/tenant/domains/example-com/status"
        )


class TestCatalogue:
    def test_only_pods_support_logs(self) -> None:
        assert [d.plural for d in BUILTIN_DESCRIPTORS if d.supports_logs] == ["pods"]

    @pytest.mark.parametrize("descriptor", [CONFIGMAPS, SECRETS, SERVICEACCOUNTS], ids=str)
    def test_statusless_core_kinds(self, descriptor: ResourceDescriptor) -> None:
        assert descriptor.has_status is False

    def test_cluster_scoped_kinds(self) -> None:
        assert NAMESPACES.namespaced is False
        assert NODES.namespaced is False

    def test_get_descriptor(self) -> None:
        assert get_descriptor("pods") is PODS
        assert get_descriptor("deployments", "apps") is DEPLOYMENTS

    def test_get_descriptor_unknown(self) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            get_descriptor("widgets", "example.io")
        assert exc_info.value.name == "widgets.example.io"

    def test_descriptors_for_group(self) -> None:
        assert {d.plural for d in descriptors_for("batch")} == {"jobs", "cronjobs"}

    def test_plurals_unique_per_group(self) -> None:
        keys = [(d.group, d.plural) for d in BUILTIN_DESCRIPTORS]
        assert len(keys) == len(set(keys))
