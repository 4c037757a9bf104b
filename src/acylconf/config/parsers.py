"""Parsers for the comma-delimited K8s configuration strings.

Each parser is a pure function: it returns a fresh container or raises a
:class:`~acylconf.errors.ConfigError` subclass on the first bad entry.
Duplicate keys are applied in input order, so the last occurrence wins.

Empty-entry policy differs by field. Group bindings and secret injections
skip empty entries, so ``""`` means "none". Labels and privileged repos do
not, so ``""`` is rejected.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from acylconf.config.models import K8sSecret
from acylconf.domain.splitter import split_delimited
from acylconf.errors import (
    EmptyBindingError,
    EmptyInjectionError,
    EmptyInputError,
    MalformedBindingError,
    MalformedEntryError,
    MalformedInjectionError,
    MalformedRepoError,
    SecretDecodeError,
    SecretFetchError,
)
from acylconf.infrastructure.secrets import SecretFetcher

logger = logging.getLogger(__name__)


def parse_labels(raw: str) -> dict[str, str]:
    """Parse ``key1=value1,key2=value2`` into a non-empty label mapping.

    Labels mark the resources this system owns for cleanup, so an empty set
    would claim ownership of everything and is rejected.
    """
    if raw == "":
        raise EmptyInputError("at least one label should be provided")

    labels: dict[str, str] = {}
    for entry in split_delimited(raw):
        if not entry.is_pair or not all(entry.parts):
            raise MalformedEntryError(entry.offset, entry.raw, source=raw)
        key, value = entry.parts
        labels[key] = value

    logger.debug("Parsed %d labels", len(labels))
    return labels


def parse_group_bindings(raw: str) -> dict[str, str]:
    """Parse ``group1=role1,group2=role2`` into a group-to-role mapping."""
    bindings: dict[str, str] = {}
    for entry in split_delimited(raw):
        if entry.is_empty:
            continue
        if not entry.is_pair:
            raise MalformedBindingError(entry.offset, entry.raw)
        group, role = entry.parts
        if not group or not role:
            raise EmptyBindingError(entry.offset, entry.raw)
        bindings[group] = role

    logger.debug("Parsed %d group bindings", len(bindings))
    return bindings


def parse_privileged_repos(raw: str) -> tuple[str, ...]:
    """Parse ``owner1/repo1,owner2/repo2`` into an ordered whitelist."""
    repos: list[str] = []
    for entry in split_delimited(raw, sub_delimiter="/"):
        if not entry.is_pair or not all(entry.parts):
            raise MalformedRepoError(entry.offset, entry.raw)
        repos.append(entry.raw)

    logger.debug("Parsed %d privileged repos", len(repos))
    return tuple(repos)


def parse_secret_injections(fetcher: SecretFetcher, raw: str) -> dict[str, K8sSecret]:
    """Resolve ``name1=secretid1,name2=secretid2`` through *fetcher*.

    Secrets are fetched one at a time in input order. Fetch and decode
    failures are wrapped with the secret identifier and the original
    exception chained as the cause.
    """
    injections: dict[str, K8sSecret] = {}
    for entry in split_delimited(raw):
        if entry.is_empty:
            continue
        if not entry.is_pair:
            raise MalformedInjectionError(entry.offset, entry.raw)
        name, secret_id = entry.parts
        if not name or not secret_id:
            raise EmptyInjectionError(entry.offset, entry.raw)

        try:
            payload = fetcher.get(secret_id)
        except Exception as exc:
            raise SecretFetchError(secret_id) from exc
        try:
            secret = K8sSecret.from_payload(payload)
        except ValidationError as exc:
            raise SecretDecodeError(secret_id) from exc

        logger.debug("Resolved secret injection %s from %s", name, secret_id)
        injections[name] = secret

    return injections
