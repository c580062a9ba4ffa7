import importlib

import config


def test_positive_float_parsing(caplog):
    assert config._parse_positive_float_env("0.3", env_var="X", default=0.15) == 0.3
    assert config._parse_positive_float_env(None, env_var="X", default=0.15) == 0.15
    assert config._parse_positive_float_env("-1", env_var="X", default=0.15) == 0.15
    with caplog.at_level("WARNING"):
        assert config._parse_positive_float_env("soon", env_var="MODE_SYNC_DELAY_SECONDS", default=0.15) == 0.15
    assert "MODE_SYNC_DELAY_SECONDS" in caplog.text


def test_positive_int_parsing():
    assert config._parse_positive_int_env("12", env_var="X", default=8) == 12
    assert config._parse_positive_int_env("0", env_var="X", default=8) == 8
    assert config._parse_positive_int_env("", env_var="X", default=8) == 8


def test_truthy_flags():
    assert config._is_truthy_flag(" Yes ")
    assert not config._is_truthy_flag("0")
    assert not config._is_truthy_flag(None)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WIZARD_ROOT_PATH", "/rooms/new")
    monkeypatch.setenv("VALIDATION_FLASH_SECONDS", "1.5")
    monkeypatch.setenv("PERSISTENCE_BASE_URL", "https://api.example.test/")
    try:
        reloaded = importlib.reload(config)
        assert reloaded.WIZARD_ROOT_PATH == "/rooms/new"
        assert reloaded.VALIDATION_FLASH_SECONDS == 1.5
        assert reloaded.PERSISTENCE_BASE_URL == "https://api.example.test"
    finally:
        monkeypatch.undo()
        importlib.reload(config)
