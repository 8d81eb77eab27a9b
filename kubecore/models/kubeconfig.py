"""Pydantic models for the kubeconfig document.

The models mirror the on-disk layout (hyphenated keys are accepted through
aliases) and only keep the fields kubecore resolves; unknown keys such as
``preferences`` or ``exec`` plugins are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _KubeConfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ClusterInfo(_KubeConfigModel):
    server: str | None = None
    certificate_authority: str | None = Field(default=None, alias="certificate-authority")
    certificate_authority_data: str | None = Field(default=None, alias="certificate-authority-data")
    insecure_skip_tls_verify: bool = Field(default=False, alias="insecure-skip-tls-verify")


class ContextInfo(_KubeConfigModel):
    cluster: str
    user: str
    namespace: str | None = None


class UserInfo(_KubeConfigModel):
    """Credential material of a kubeconfig user entry."""

    token: str | None = None
    client_certificate: str | None = Field(default=None, alias="client-certificate")
    client_certificate_data: str | None = Field(default=None, alias="client-certificate-data")
    client_key: str | None = Field(default=None, alias="client-key")
    client_key_data: str | None = Field(default=None, alias="client-key-data")


class NamedCluster(_KubeConfigModel):
    name: str
    cluster: ClusterInfo = Field(default_factory=ClusterInfo)


class NamedContext(_KubeConfigModel):
    name: str
    context: ContextInfo


class NamedUser(_KubeConfigModel):
    name: str
    user: UserInfo = Field(default_factory=UserInfo)


class KubeConfigDocument(_KubeConfigModel):
    """A decoded kubeconfig file.

    ``contexts``, ``clusters`` and ``users`` are required top-level keys; an
    explicit ``null`` value is read as an empty list, which is what kubectl
    writes for a freshly initialised file.
    """

    contexts: list[NamedContext]
    clusters: list[NamedCluster]
    users: list[NamedUser]
    current_context: str | None = Field(default=None, alias="current-context")

    @field_validator("contexts", "clusters", "users", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    def context_names(self) -> list[str]:
        return [entry.name for entry in self.contexts]

    def cluster_names(self) -> list[str]:
        return [entry.name for entry in self.clusters]

    def user_names(self) -> list[str]:
        return [entry.name for entry in self.users]

    def find_context(self, name: str) -> ContextInfo | None:
        for entry in self.contexts:
            if entry.name == name:
                return entry.context
        return None

    def find_cluster(self, name: str) -> ClusterInfo | None:
        for entry in self.clusters:
            if entry.name == name:
                return entry.cluster
        return None

    def find_user(self, name: str) -> UserInfo | None:
        for entry in self.users:
            if entry.name == name:
                return entry.user
        return None
