import pytest

import config
from config import DEFAULT_LOG_PATH, ROOT_URL, load_config, log_path
from errors import ConfigError


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # setenv first so monkeypatch restores whatever load_dotenv writes
    for name in ("API_KEY", "ZEROSSL_LOG_PATH"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda *args, **kwargs: None)


def test_missing_api_key(clean_env, no_dotenv):
    with pytest.raises(ConfigError):
        load_config()


def test_load_config(clean_env, no_dotenv, monkeypatch):
    monkeypatch.setenv("API_KEY", "k")
    monkeypatch.setenv("ZEROSSL_LOG_PATH", "/tmp/zerossl.log")

    cfg = load_config()

    assert (cfg.api_key, cfg.api_url) == ("k", ROOT_URL)
    assert log_path() == "/tmp/zerossl.log"


def test_log_path_default(clean_env):
    assert log_path() == DEFAULT_LOG_PATH


def test_dotenv_in_working_directory_is_loaded(clean_env):
    (clean_env / ".env").write_text("API_KEY=from-dotenv\nZEROSSL_LOG_PATH=custom.log\n")

    cfg = load_config()

    assert cfg.api_key == "from-dotenv"
    assert log_path() == "custom.log"


def test_real_environment_wins_over_dotenv(clean_env, monkeypatch):
    (clean_env / ".env").write_text("API_KEY=from-dotenv\n")
    monkeypatch.setenv("API_KEY", "from-env")

    assert load_config().api_key == "from-env"
