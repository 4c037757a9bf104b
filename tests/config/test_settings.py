"""Tests for ProvisionSettings — env-backed raw settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from acylconf.config.settings import ProvisionSettings


class TestProvisionSettingsDefaults:
    def test_all_defaults(self) -> None:
        settings = ProvisionSettings()
        assert settings.labels == ""
        assert settings.group_bindings == ""
        assert settings.privileged_repos is None
        assert settings.secret_injections == ""
        assert settings.amino.helm_chart_to_repo_raw == "{}"
        assert settings.secrets.backend == "env"
        assert settings.verbose is False
        assert settings.log_json is False

    def test_frozen(self) -> None:
        settings = ProvisionSettings()
        with pytest.raises(ValidationError):
            settings.labels = "a=b"  # type: ignore[misc]


class TestEnvSource:
    def test_flat_fields(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACYL_LABELS", "acyl.dev/managed-by=nitro")
        monkeypatch.setenv("ACYL_PRIVILEGED_REPOS", "org/repo1")
        monkeypatch.setenv("ACYL_VERBOSE", "true")
        settings = ProvisionSettings()
        assert settings.labels == "acyl.dev/managed-by=nitro"
        assert settings.privileged_repos == "org/repo1"
        assert settings.verbose is True

    def test_nested_sections(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("ACYL_AMINO__HELM_CHART_TO_REPO_RAW", '{"redis": "org/redis"}')
        monkeypatch.setenv("ACYL_SECRETS__BACKEND", "file")
        monkeypatch.setenv("ACYL_SECRETS__FILE_ROOT", str(tmp_path))
        settings = ProvisionSettings()
        assert settings.amino.helm_chart_to_repo_raw == '{"redis": "org/redis"}'
        assert settings.amino.amino_job_to_repo_raw == "{}"  # default preserved
        assert settings.secrets.backend == "file"
        assert settings.secrets.file_root == tmp_path

    def test_init_kwargs_override_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACYL_LABELS", "a=b")
        settings = ProvisionSettings(labels="c=d")
        assert settings.labels == "c=d"
