"""Full configuration load: raw settings in, validated config out."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from acylconf.config.k8s import K8sConfig
from acylconf.config.models import AminoConfig
from acylconf.config.settings import ProvisionSettings
from acylconf.infrastructure.secrets import SecretFetcher, build_fetcher

logger = logging.getLogger(__name__)


class ProvisionConfig(BaseModel):
    """Validated configuration consumed by the provisioning service."""

    model_config = {"frozen": True}

    k8s: K8sConfig = Field(default_factory=K8sConfig)
    amino: AminoConfig = Field(default_factory=AminoConfig)


def load_config(
    settings: ProvisionSettings,
    fetcher: SecretFetcher | None = None,
) -> ProvisionConfig:
    """Parse every raw field of *settings*, aborting on the first error.

    Order: labels, group bindings, privileged repos, secret injections,
    amino mappings. When *fetcher* is None one is built from
    ``settings.secrets``.
    """
    if fetcher is None:
        fetcher = build_fetcher(settings.secrets)

    k8s = (
        K8sConfig()
        .process_labels(settings.labels)
        .process_group_bindings(settings.group_bindings)
    )
    if settings.privileged_repos is not None:
        k8s = k8s.process_privileged_repos(settings.privileged_repos)
    k8s = k8s.process_secret_injections(fetcher, settings.secret_injections)

    amino = settings.amino.parse()

    logger.debug(
        "Loaded provisioning config: %d labels, %d bindings, %d repos, %d injections",
        len(k8s.labels),
        len(k8s.group_bindings),
        len(k8s.privileged_repo_whitelist),
        len(k8s.secret_injections),
    )
    return ProvisionConfig(k8s=k8s, amino=amino)


def load_from_env(fetcher: SecretFetcher | None = None, **overrides: object) -> ProvisionConfig:
    """Read ``ACYL_*`` settings, configure logging from them, and load.

    Keyword *overrides* take priority over environment variables.
    """
    from acylconf.config.logging import configure_logging

    settings = ProvisionSettings(**overrides)  # type: ignore[arg-type]
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    return load_config(settings, fetcher)
