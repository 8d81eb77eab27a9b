"""Built-in descriptors for the standard Kubernetes resource kinds."""

from __future__ import annotations

from kubecore.errors import NotFoundError
from kubecore.models.resources import ResourceDescriptor

# ---------------------------------------------------------------------------
# core/v1
# ---------------------------------------------------------------------------

NAMESPACES = ResourceDescriptor("namespaces", "Namespace", namespaced=False, has_status=True)
NODES = ResourceDescriptor("nodes", "Node", namespaced=False, has_status=True)
PODS = ResourceDescriptor("pods", "Pod", has_status=True, supports_logs=True)
SERVICES = ResourceDescriptor("services", "Service", has_status=True)
CONFIGMAPS = ResourceDescriptor("configmaps", "ConfigMap")
SECRETS = ResourceDescriptor("secrets", "Secret")
SERVICEACCOUNTS = ResourceDescriptor("serviceaccounts", "ServiceAccount")
ENDPOINTS = ResourceDescriptor("endpoints", "Endpoints")
EVENTS = ResourceDescriptor("events", "Event")
PERSISTENTVOLUMES = ResourceDescriptor("persistentvolumes", "PersistentVolume", namespaced=False, has_status=True)
PERSISTENTVOLUMECLAIMS = ResourceDescriptor("persistentvolumeclaims", "PersistentVolumeClaim", has_status=True)

# ---------------------------------------------------------------------------
# apps/v1
# ---------------------------------------------------------------------------

DEPLOYMENTS = ResourceDescriptor("deployments", "Deployment", group="apps", has_status=True)
STATEFULSETS = ResourceDescriptor("statefulsets", "StatefulSet", group="apps", has_status=True)
DAEMONSETS = ResourceDescriptor("daemonsets", "DaemonSet", group="apps", has_status=True)
REPLICASETS = ResourceDescriptor("replicasets", "ReplicaSet", group="apps", has_status=True)

# ---------------------------------------------------------------------------
# batch/v1
# ---------------------------------------------------------------------------

JOBS = ResourceDescriptor("jobs", "Job", group="batch", has_status=True)
CRONJOBS = ResourceDescriptor("cronjobs", "CronJob", group="batch", has_status=True)

# ---------------------------------------------------------------------------
# networking.k8s.io/v1
# ---------------------------------------------------------------------------

INGRESSES = ResourceDescriptor("ingresses", "Ingress", group="networking.k8s.io", has_status=True)
NETWORKPOLICIES = ResourceDescriptor("networkpolicies", "NetworkPolicy", group="networking.k8s.io")

# ---------------------------------------------------------------------------
# rbac.authorization.k8s.io/v1
# ---------------------------------------------------------------------------

_RBAC = "rbac.authorization.k8s.io"
ROLES = ResourceDescriptor("roles", "Role", group=_RBAC)
ROLEBINDINGS = ResourceDescriptor("rolebindings", "RoleBinding", group=_RBAC)
CLUSTERROLES = ResourceDescriptor("clusterroles", "ClusterRole", group=_RBAC, namespaced=False)
CLUSTERROLEBINDINGS = ResourceDescriptor("clusterrolebindings", "ClusterRoleBinding", group=_RBAC, namespaced=False)

BUILTIN_DESCRIPTORS: tuple[ResourceDescriptor, ...] = (
    NAMESPACES,
    NODES,
    PODS,
    SERVICES,
    CONFIGMAPS,
    SECRETS,
    SERVICEACCOUNTS,
    ENDPOINTS,
    EVENTS,
    PERSISTENTVOLUMES,
    PERSISTENTVOLUMECLAIMS,
    DEPLOYMENTS,
    STATEFULSETS,
    DAEMONSETS,
    REPLICASETS,
    JOBS,
    CRONJOBS,
    INGRESSES,
    NETWORKPOLICIES,
    ROLES,
    ROLEBINDINGS,
    CLUSTERROLES,
    CLUSTERROLEBINDINGS,
)

_BY_GROUP_AND_PLURAL: dict[tuple[str, str], ResourceDescriptor] = {(d.group, d.plural): d for d in BUILTIN_DESCRIPTORS}


def get_descriptor(plural: str, group: str = "") -> ResourceDescriptor:
    """Look up a built-in descriptor by plural name and API group.

    Raises:
        NotFoundError: no built-in kind matches.
    """
    try:
        return _BY_GROUP_AND_PLURAL[(group, plural)]
    except KeyError:
        qualified = f"{plural}.{group}" if group else plural
        raise NotFoundError("resource kind", qualified) from None


def descriptors_for(group: str, version: str = "v1") -> list[ResourceDescriptor]:
    """All built-in descriptors served under ``group/version``."""
    return [d for d in BUILTIN_DESCRIPTORS if d.group == group and d.version == version]
