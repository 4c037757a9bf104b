"""K8sConfig — the Kubernetes section of the provisioning configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field

from acylconf.config.models import K8sSecret
from acylconf.config.parsers import (
    parse_group_bindings,
    parse_labels,
    parse_privileged_repos,
    parse_secret_injections,
)
from acylconf.infrastructure.secrets import SecretFetcher


class K8sConfig(BaseModel):
    """Validated Kubernetes settings, frozen after construction.

    Each ``process_*`` method parses one raw string and returns a new
    config with that field replaced. A failed parse raises and leaves the
    receiver unchanged.

    Attributes:
        group_bindings: k8s group name to cluster role.
        privileged_repo_whitelist: GitHub repositories whose environment
            service accounts get cluster-admin privileges.
        secret_injections: secret name to secret injected into each
            environment namespace.
        labels: key/value pairs attached to every object this service
            creates. Used to find orphaned resources, so never empty once
            processed.
    """

    model_config = {"frozen": True}

    group_bindings: dict[str, str] = Field(default_factory=dict)
    privileged_repo_whitelist: tuple[str, ...] = ()
    secret_injections: dict[str, K8sSecret] = Field(default_factory=dict)
    labels: dict[str, str] = Field(default_factory=dict)

    def process_labels(self, raw: str) -> K8sConfig:
        return self.model_copy(update={"labels": parse_labels(raw)})

    def process_group_bindings(self, raw: str) -> K8sConfig:
        return self.model_copy(update={"group_bindings": parse_group_bindings(raw)})

    def process_privileged_repos(self, raw: str) -> K8sConfig:
        return self.model_copy(update={"privileged_repo_whitelist": parse_privileged_repos(raw)})

    def process_secret_injections(self, fetcher: SecretFetcher, raw: str) -> K8sConfig:
        injections = parse_secret_injections(fetcher, raw)
        return self.model_copy(update={"secret_injections": injections})
