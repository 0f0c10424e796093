import pytest

from app.config import Settings, load_settings, parse_allowed_origins
from app.errors import ServerConfigError


def test_defaults_when_environment_is_empty():
    settings = load_settings({})

    assert settings.paystack_secret_key is None
    assert settings.port == 3000
    assert settings.allowed_origins == ("*",)
    assert settings.paystack_base_url == "https://api.paystack.co"
    assert settings.request_timeout == 10.0


def test_reads_environment():
    settings = load_settings({
        "PAYSTACK_SECRET_KEY": "sk_live_x",
        "PORT": "8080",
        "ALLOWED_ORIGIN": "https://shop.example.com, https://admin.example.com,",
        "LOG_LEVEL": "debug",
    })

    assert settings.paystack_secret_key == "sk_live_x"
    assert settings.port == 8080
    assert settings.allowed_origins == ("https://shop.example.com", "https://admin.example.com")
    assert settings.log_level == "DEBUG"


def test_blank_secret_counts_as_missing():
    settings = load_settings({"PAYSTACK_SECRET_KEY": "   "})

    assert settings.paystack_secret_key is None
    with pytest.raises(ServerConfigError):
        settings.require_secret()


@pytest.mark.parametrize("port", ["abc", "0", "70000"])
def test_invalid_port_rejected(port):
    with pytest.raises(ServerConfigError):
        load_settings({"PORT": port})


@pytest.mark.parametrize("raw", [None, "", "*", " * ", ",,"])
def test_wildcard_origins(raw):
    assert parse_allowed_origins(raw) == ("*",)


def test_origin_allow_list():
    settings = Settings(allowed_origins=("https://shop.example.com",))

    assert settings.is_origin_allowed("https://shop.example.com")
    assert settings.is_origin_allowed(None)
    assert not settings.is_origin_allowed("https://evil.example.com")
    assert Settings().is_origin_allowed("https://anything.example.com")


def test_settings_are_immutable():
    settings = Settings(paystack_secret_key="sk")
    with pytest.raises(AttributeError):
        settings.paystack_secret_key = "other"
