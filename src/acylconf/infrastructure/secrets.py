"""Secret fetch backends used to resolve secret injections.

A backend turns a secret identifier into the raw JSON payload of a
:class:`~acylconf.config.models.K8sSecret`. The identifier is first passed
through the configured mapping template (``{id}`` placeholder), so
``mapping="acyl/{id}"`` looks up ``acyl/<id>``.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from acylconf.config.models import SecretsConfig
from acylconf.errors import ConfigError, SecretNotFoundError

logger = logging.getLogger(__name__)

ID_PLACEHOLDER = "{id}"

_ENV_UNSAFE = re.compile(r"[^A-Za-z0-9]")


@runtime_checkable
class SecretFetcher(Protocol):
    """Anything that can fetch a secret payload by identifier."""

    def get(self, secret_id: str) -> bytes: ...


def _check_mapping(mapping: str) -> str:
    if ID_PLACEHOLDER not in mapping:
        raise ConfigError(f"secret mapping must contain {ID_PLACEHOLDER}: {mapping!r}")
    return mapping


class StaticSecretFetcher:
    """In-memory fetcher over a fixed identifier-to-payload mapping."""

    def __init__(self, secrets: Mapping[str, bytes]) -> None:
        self._secrets = dict(secrets)

    def get(self, secret_id: str) -> bytes:
        try:
            return self._secrets[secret_id]
        except KeyError:
            raise SecretNotFoundError(secret_id, "static store") from None


class EnvSecretFetcher:
    """Read secrets from environment variables.

    The mapped location is upper-cased with every non-alphanumeric
    character replaced by ``_``: ``secret/db-creds`` becomes
    ``SECRET_DB_CREDS``.
    """

    def __init__(
        self,
        mapping: str = ID_PLACEHOLDER,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.mapping = _check_mapping(mapping)
        self._environ = os.environ if environ is None else environ

    def variable_name(self, secret_id: str) -> str:
        location = self.mapping.replace(ID_PLACEHOLDER, secret_id)
        return _ENV_UNSAFE.sub("_", location).upper()

    def get(self, secret_id: str) -> bytes:
        name = self.variable_name(secret_id)
        value = self._environ.get(name)
        if value is None:
            raise SecretNotFoundError(secret_id, f"${name}")
        return value.encode("utf-8")


class FileSecretFetcher:
    """Read secrets from files below *root*."""

    def __init__(self, root: Path, mapping: str = ID_PLACEHOLDER) -> None:
        self.root = root
        self.mapping = _check_mapping(mapping)

    def path_for(self, secret_id: str) -> Path:
        path = (self.root / self.mapping.replace(ID_PLACEHOLDER, secret_id)).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise ConfigError(f"secret path for {secret_id} escapes {self.root}")
        return path

    def get(self, secret_id: str) -> bytes:
        path = self.path_for(secret_id)
        if not path.is_file():
            raise SecretNotFoundError(secret_id, str(path))
        return path.read_bytes()


def build_fetcher(config: SecretsConfig) -> SecretFetcher:
    """Construct the fetcher selected by ``config.backend``."""
    if config.backend == "env":
        fetcher: SecretFetcher = EnvSecretFetcher(config.mapping)
    elif config.backend == "file":
        if config.file_root is None:
            raise ConfigError("file secrets backend requires file_root")
        fetcher = FileSecretFetcher(config.file_root, config.mapping)
    else:
        raise ConfigError(f"unknown secrets backend: {config.backend}")
    logger.debug("Using %s secrets backend", config.backend)
    return fetcher
