"""Pydantic models for decoded configuration values.

All models are frozen: they are built once during configuration load and
read for the lifetime of the process.
"""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from acylconf.errors import MappingDecodeError

logger = logging.getLogger(__name__)

_REPO_MAPPING: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])


def _decode_secret_value(value: Any) -> Any:
    """Decode padded base64 text; anything else is kept as raw UTF-8 bytes."""
    if not isinstance(value, str):
        return value
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return value.encode("utf-8")


class K8sSecret(BaseModel):
    """A Kubernetes secret injected into each environment namespace."""

    model_config = {"frozen": True}

    data: dict[str, bytes] = Field(default_factory=dict)
    type: str = ""

    @field_validator("data", mode="before")
    @classmethod
    def _decode_data(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {key: _decode_secret_value(item) for key, item in value.items()}

    @classmethod
    def from_payload(cls, payload: bytes) -> K8sSecret:
        """Decode a fetched JSON payload ``{"data": {...}, "type": "..."}``.

        Raises:
            pydantic.ValidationError: *payload* is not a valid secret object.
        """
        return cls.model_validate_json(payload)


# (raw field, decoded field) in decode order
_AMINO_FIELDS: tuple[tuple[str, str], ...] = (
    ("helm_chart_to_repo_raw", "helm_chart_to_repo"),
    ("amino_deployment_to_repo_raw", "amino_deployment_to_repo"),
    ("amino_job_to_repo_raw", "amino_job_to_repo"),
)


class AminoConfig(BaseModel):
    """Amino backend mappings of chart/deployment/job name to repository.

    The ``*_raw`` fields hold JSON object strings; :meth:`parse` fills the
    decoded counterparts.
    """

    model_config = {"frozen": True}

    helm_chart_to_repo_raw: str = "{}"
    amino_deployment_to_repo_raw: str = "{}"
    amino_job_to_repo_raw: str = "{}"

    helm_chart_to_repo: dict[str, str] = Field(default_factory=dict)
    amino_deployment_to_repo: dict[str, str] = Field(default_factory=dict)
    amino_job_to_repo: dict[str, str] = Field(default_factory=dict)

    def parse(self) -> AminoConfig:
        """Return a copy with all three mappings decoded.

        Fields are decoded chart, deployment, job; the first failure raises
        :class:`MappingDecodeError` and the rest are not attempted.
        """
        decoded: dict[str, dict[str, str]] = {}
        for raw_field, field in _AMINO_FIELDS:
            try:
                decoded[field] = _REPO_MAPPING.validate_json(getattr(self, raw_field))
            except ValidationError as exc:
                raise MappingDecodeError(field) from exc
        logger.debug(
            "Decoded amino mappings: %d charts, %d deployments, %d jobs",
            len(decoded["helm_chart_to_repo"]),
            len(decoded["amino_deployment_to_repo"]),
            len(decoded["amino_job_to_repo"]),
        )
        return self.model_copy(update=decoded)


class SecretsConfig(BaseModel):
    """Secret backend selection for injection lookups.

    ``mapping`` is a template with an ``{id}`` placeholder that turns a
    secret identifier into a backend location (env var name or file path).
    """

    model_config = {"frozen": True}

    backend: str = "env"
    mapping: str = "{id}"
    file_root: Path | None = None
