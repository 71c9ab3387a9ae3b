import pytest
from pydantic import ValidationError

from storefront.integrations.errors import MalformedResponse
from storefront.session import session_from_login
from storefront.utils.config_loader import StorefrontConfig, load_storefront_config

ENV_VARS = (
    "STOREFRONT_ENDPOINT",
    "STOREFRONT_TIMEOUT_SECONDS",
    "STOREFRONT_DEBOUNCE_MS",
    "STOREFRONT_PREVENT_DUPLICATES",
    "STOREFRONT_INTEGRATIONS_MODE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "storefront_config.yml"
    path.write_text(
        "endpoint: http://qkart.test/api/v1\nsearch_debounce_ms: 300\nprevent_duplicates: false\n",
        encoding="utf-8",
    )

    cfg = load_storefront_config(path)

    assert cfg.endpoint == "http://qkart.test/api/v1"
    assert cfg.search_debounce_ms == 300
    assert cfg.prevent_duplicates is False
    assert cfg.timeout_seconds == 20.0


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "storefront_config.yml"
    path.write_text("endpoint: http://from-file\n", encoding="utf-8")
    monkeypatch.setenv("STOREFRONT_ENDPOINT", "http://from-env")
    monkeypatch.setenv("STOREFRONT_DEBOUNCE_MS", "250")
    monkeypatch.setenv("STOREFRONT_PREVENT_DUPLICATES", "no")

    cfg = load_storefront_config(path)

    assert cfg.endpoint == "http://from-env"
    assert cfg.search_debounce_ms == 250
    assert cfg.prevent_duplicates is False


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_storefront_config(tmp_path / "missing.yml")

    cfg = load_storefront_config(tmp_path / "missing.yml", allow_missing=True)
    assert cfg == StorefrontConfig()


def test_invalid_config_raises(tmp_path):
    path = tmp_path / "storefront_config.yml"
    path.write_text("search_debounce_ms: -5\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_storefront_config(path)


def test_repository_config_file_is_valid():
    cfg = load_storefront_config()
    assert cfg.search_debounce_ms == 500


def test_session_from_login_response():
    session = session_from_login({"success": True, "token": "abc", "username": "crio.do", "balance": 5000})

    assert session.is_authenticated
    assert session.username == "crio.do"
    assert session.balance == 5000


@pytest.mark.parametrize("body", [{}, {"success": False, "token": "abc"}, {"token": "   "}, None])
def test_session_from_login_rejects_unusable_bodies(body):
    with pytest.raises(MalformedResponse):
        session_from_login(body)
