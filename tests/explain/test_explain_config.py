import pytest

from blazeexplain.explain import ExplainConfigurationError, ExplainSettings, resolve_threshold_seconds


def test_defaults_disable_auto_explain():
    settings = ExplainSettings()
    assert settings.threshold_seconds is None
    assert not settings.enabled
    assert not settings.should_explain(100.0)


def test_zero_threshold_always_explains():
    settings = ExplainSettings(threshold_seconds=0)
    assert settings.enabled
    assert settings.should_explain(0.0)


def test_positive_threshold_is_inclusive():
    settings = ExplainSettings(threshold_seconds=0.5)
    assert settings.should_explain(0.5)
    assert settings.should_explain(0.75)
    assert not settings.should_explain(0.49)


@pytest.mark.parametrize("value", [-1, "fast", float("nan"), True])
def test_invalid_thresholds_raise(value):
    with pytest.raises(ExplainConfigurationError):
        ExplainSettings(threshold_seconds=value)
    settings = ExplainSettings()
    with pytest.raises(ExplainConfigurationError):
        settings.threshold_seconds = value


def test_override_restores_previous_threshold():
    settings = ExplainSettings(threshold_seconds=2)
    with settings.override(0):
        assert settings.threshold_seconds == 0
    assert settings.threshold_seconds == 2


def test_override_restores_after_error():
    settings = ExplainSettings(threshold_seconds=None)
    with pytest.raises(RuntimeError):
        with settings.override(0):
            raise RuntimeError("boom")
    assert settings.threshold_seconds is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("BLAZE_EXPLAIN_THRESHOLD", "0.25")
    monkeypatch.setenv("BLAZE_EXPLAIN_REDACT_BINDS", "off")
    monkeypatch.setenv("BLAZE_EXPLAIN_RAISE_ON_ERROR", "no")
    settings = ExplainSettings.from_env()
    assert settings.threshold_seconds == 0.25
    assert settings.redact_binds is False
    assert settings.raise_on_error is False


@pytest.mark.parametrize("raw", ["", "none", "OFF", "disabled"])
def test_from_env_disabled_values(monkeypatch, raw):
    monkeypatch.setenv("BLAZE_EXPLAIN_THRESHOLD", raw)
    assert ExplainSettings.from_env().threshold_seconds is None


def test_from_env_rejects_garbage(monkeypatch):
    monkeypatch.setenv("BLAZE_EXPLAIN_THRESHOLD", "soon")
    with pytest.raises(ExplainConfigurationError):
        ExplainSettings.from_env()
    monkeypatch.setenv("BLAZE_EXPLAIN_THRESHOLD", "1")
    monkeypatch.setenv("BLAZE_EXPLAIN_REDACT_BINDS", "maybe")
    with pytest.raises(ExplainConfigurationError):
        ExplainSettings.from_env()


def test_resolve_threshold_seconds_precedence(monkeypatch):
    monkeypatch.delenv("BLAZE_EXPLAIN_THRESHOLD", raising=False)
    assert resolve_threshold_seconds(default=3) == 3
    monkeypatch.setenv("BLAZE_EXPLAIN_THRESHOLD", "1.5")
    assert resolve_threshold_seconds(default=3) == 1.5
    assert resolve_threshold_seconds(default=3, override=0) == 0


def test_from_env_honours_prefix_and_explicit_threshold(monkeypatch):
    monkeypatch.setenv("CARS_EXPLAIN_THRESHOLD", "2")
    monkeypatch.setenv("CARS_EXPLAIN_REDACT_BINDS", "false")
    settings = ExplainSettings.from_env("CARS_EXPLAIN_")
    assert settings.threshold_seconds == 2.0
    assert settings.redact_binds is False

    assert ExplainSettings.from_env("CARS_EXPLAIN_", threshold_seconds=0).threshold_seconds == 0


def test_resolve_threshold_seconds_reads_given_variable(monkeypatch):
    monkeypatch.setenv("CARS_EXPLAIN_THRESHOLD", "off")
    assert resolve_threshold_seconds(default=3, env_var="CARS_EXPLAIN_THRESHOLD") is None
    monkeypatch.setenv("CARS_EXPLAIN_THRESHOLD", "-1")
    with pytest.raises(ExplainConfigurationError, match="non-negative"):
        resolve_threshold_seconds(env_var="CARS_EXPLAIN_THRESHOLD")
