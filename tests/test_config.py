"""
Tests for reflectkit settings.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pydantic
import pytest

from reflectkit import introspection
from reflectkit.config import ReflectKitSettings, get_settings
from reflectkit.introspection import field_by_name, set_value
from tests.beans import BeanWithoutMarkers


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('REFLECTKIT_VALIDATE_WRITES', raising=False)
    monkeypatch.delenv('REFLECTKIT_WRITE_FAILURE_LOG_LEVEL', raising=False)
    monkeypatch.delenv('LOAD_ENV_FILE', raising=False)

    settings = get_settings()

    assert settings.VALIDATE_WRITES is True
    assert settings.WRITE_FAILURE_LOG_LEVEL == 'WARNING'
    assert settings.write_failure_log_level == logging.WARNING


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('REFLECTKIT_VALIDATE_WRITES', 'false')
    monkeypatch.setenv('REFLECTKIT_WRITE_FAILURE_LOG_LEVEL', 'error')

    settings = ReflectKitSettings()

    assert settings.VALIDATE_WRITES is False
    assert settings.WRITE_FAILURE_LOG_LEVEL == 'ERROR'
    assert settings.write_failure_log_level == logging.ERROR


def test_invalid_log_level_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('REFLECTKIT_WRITE_FAILURE_LOG_LEVEL', 'LOUD')

    with pytest.raises(pydantic.ValidationError):
        ReflectKitSettings()


def test_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('REFLECTKIT_VALIDATE_WRITES', raising=False)
    env_file = tmp_path / 'reflectkit.env'
    env_file.write_text('REFLECTKIT_VALIDATE_WRITES=false\nUNRELATED=1\n')

    settings = get_settings(env_file=str(env_file))

    assert settings.VALIDATE_WRITES is False


def test_missing_env_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        get_settings(env_file=str(tmp_path / 'absent.env'))


def test_writes_unvalidated_when_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    """With validation off, only owner and attribute checks stop a write."""
    monkeypatch.setattr(introspection, 'settings', ReflectKitSettings(VALIDATE_WRITES=False))
    bean = BeanWithoutMarkers(years=3)

    result = set_value(bean, 'three', field_by_name(bean, 'years'))

    assert result.outcome == 'written'
    assert bean.years == 'three'
