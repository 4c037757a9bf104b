"""Environment-backed raw settings.

Priority chain (highest to lowest):
  1. Init kwargs  — values passed by the embedding service
  2. Env vars     — ``ACYL_*`` prefix, ``__`` for nested sections
  3. Code defaults — baked into the fields and section models

Everything here is still a raw string; :func:`acylconf.config.loader.load_config`
turns it into validated structures.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from acylconf.config.models import AminoConfig, SecretsConfig


class ProvisionSettings(BaseSettings):
    """Raw provisioning settings as supplied by the operator.

    Attributes:
        labels: ``key=value`` list; required, an empty value fails to load.
        group_bindings: ``group=role`` list; empty means no bindings.
        privileged_repos: ``owner/repo`` list, or None when not configured.
            A supplied empty string is invalid.
        secret_injections: ``name=secret-id`` list; empty means none.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ACYL_",
        "env_nested_delimiter": "__",
    }

    labels: str = ""
    group_bindings: str = ""
    privileged_repos: str | None = None
    secret_injections: str = ""

    amino: AminoConfig = Field(default_factory=AminoConfig)
    secrets: SecretsConfig = Field(default_factory=SecretsConfig)

    verbose: bool = False
    log_json: bool = False
