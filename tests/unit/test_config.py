import pytest

from dns_control.app.config import AppConfig
from dns_control.clients.dns_client_sdk.config import ConfigError, load_config

ENV_NAMES = (
    "DNSCTL_API_BASE_URL",
    "DNSCTL_TIMEOUT_SECONDS",
    "DNSCTL_VERIFY_SSL",
    "DNSCTL_INVOKE_PATH",
    "DNSCTL_PAGE_SIZE",
    "DNSCTL_SEARCH_DEBOUNCE_MS",
    "DNSCTL_RESTORE_POLL_MS",
    "DNSCTL_RECENT_DOMAINS_LIMIT",
)


@pytest.fixture()
def clean_env(monkeypatch):
    # Set-then-delete so values loaded from a .env file are undone afterwards.
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_load_config_reads_environment(clean_env):
    clean_env.setenv("DNSCTL_API_BASE_URL", "https://dns.example.test/")
    clean_env.setenv("DNSCTL_TIMEOUT_SECONDS", "2.5")
    clean_env.setenv("DNSCTL_VERIFY_SSL", "false")
    clean_env.setenv("DNSCTL_INVOKE_PATH", "/rpc")

    config = load_config()

    assert config.api_base_url == "https://dns.example.test"
    assert config.timeout_seconds == 2.5
    assert config.verify_ssl is False
    assert config.invoke_url == "https://dns.example.test/rpc"


def test_load_config_from_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DNSCTL_API_BASE_URL=https://from-file.example.test\n")

    config = load_config(str(env_file))

    assert config.api_base_url == "https://from-file.example.test"
    assert config.invoke_url == "https://from-file.example.test/api/invoke"


def test_missing_base_url_is_rejected(clean_env, tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "missing.env"))


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("DNSCTL_TIMEOUT_SECONDS", "soon"),
        ("DNSCTL_TIMEOUT_SECONDS", "0"),
        ("DNSCTL_INVOKE_PATH", "api/invoke"),
    ],
)
def test_invalid_values_are_rejected(clean_env, tmp_path, name, value):
    clean_env.setenv("DNSCTL_API_BASE_URL", "https://dns.example.test")
    clean_env.setenv(name, value)

    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "missing.env"))


def test_app_config_defaults_and_overrides(clean_env, tmp_path):
    assert AppConfig.from_env(str(tmp_path / "missing.env")) == AppConfig()

    clean_env.setenv("DNSCTL_PAGE_SIZE", "50")
    clean_env.setenv("DNSCTL_SEARCH_DEBOUNCE_MS", "150")
    config = AppConfig.from_env(str(tmp_path / "missing.env"))

    assert config.page_size == 50
    assert config.search_debounce_seconds == 0.15
    assert config.restore_poll_seconds == 0.5


def test_app_config_validation():
    with pytest.raises(ValueError):
        AppConfig(page_size=0).validate()
    with pytest.raises(ValueError):
        AppConfig(restore_poll_ms=0).validate()
