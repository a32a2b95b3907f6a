from __future__ import annotations

import pytest
from pydantic import ValidationError

from predict_sidecar.main.config import AppSettings, ScoringSettings, get_settings
from predict_sidecar.shared.consts import EnumEnvironment


def test_get_settings_loads_defaults(monkeypatch) -> None:
    for key in ("SCORING_MODEL_PATHS", "SCORING_MAX_POINTS", "ENVIRONMENT"):
        monkeypatch.delenv(key, raising=False)

    settings = get_settings()

    assert settings.scoring.model_paths == ""
    assert settings.scoring.max_points == 1000
    assert settings.scoring.enabled is True
    assert settings.environment == EnumEnvironment.DEVELOPMENT


def test_settings_respect_environment_variables(monkeypatch) -> None:
    monkeypatch.setenv("SCORING_MODEL_PATHS", "/models/btc:/models/eth")
    monkeypatch.setenv("SCORING_INTERVAL_SECONDS", "15")
    monkeypatch.setenv("SIDECAR_TITLE", "Testing")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("GIT_COMMIT", "deadbeef")

    settings = AppSettings()

    assert settings.scoring.model_paths == "/models/btc:/models/eth"
    assert settings.scoring.interval_seconds == 15.0
    assert settings.sidecar.title == "Testing"
    assert settings.sidecar.git_commit == "deadbeef"
    assert settings.logging.level.value == "DEBUG"


def test_max_points_must_be_positive(monkeypatch) -> None:
    monkeypatch.setenv("SCORING_MAX_POINTS", "0")

    with pytest.raises(ValidationError):
        ScoringSettings()
