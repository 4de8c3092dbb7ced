"""Tests for environment-driven settings."""

import pydantic
import pytest

from jupiter_bridge.config import (
    JupiterSettings,
    LogLevel,
    LoggingSettings,
    Settings,
    get_settings,
    reload_settings,
)
from jupiter_bridge.exceptions import ConfigurationError
from jupiter_bridge.transport import PRO_API_BASE, PUBLIC_API_BASE, ApiTier

JUPITER_ENV = [
    "JUPITER_TIER",
    "JUPITER_API_URL",
    "JUPITER_API_KEY",
    "JUPITER_INTEGRATOR_FEE_BPS",
    "JUPITER_INTEGRATOR_FEE_ACCOUNT",
    "JUPITER_YELLOWSTONE_ENDPOINT",
    "JUPITER_YELLOWSTONE_TOKEN",
    "JUPITER_DEFAULT_SLIPPAGE_BPS",
    "JUPITER_STRICT_ROUTES",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in JUPITER_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestJupiterSettings:

    def test_defaults(self):
        settings = JupiterSettings()

        assert settings.tier is ApiTier.PUBLIC
        assert settings.default_slippage_bps == 50
        assert settings.strict_routes is True
        assert settings.base_url == PUBLIC_API_BASE

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("JUPITER_TIER", "pro")
        monkeypatch.setenv("JUPITER_API_KEY", "jup_env_key_123456")
        monkeypatch.setenv("JUPITER_STRICT_ROUTES", "false")

        settings = JupiterSettings()
        profile = settings.to_profile()

        assert settings.strict_routes is False
        assert profile.tier is ApiTier.PRO
        assert profile.base_url == PRO_API_BASE
        assert profile.headers["Authorization"] == "Bearer jup_env_key_123456"

    def test_pro_without_key(self):
        with pytest.raises(ConfigurationError):
            JupiterSettings(tier="pro").to_profile()

    def test_self_hosted(self):
        settings = JupiterSettings(
            tier="self-hosted",
            api_url="http://127.0.0.1:8080",
            yellowstone_endpoint="https://grpc.example.org:10000",
            yellowstone_token="x-token-abc",
            integrator_fee_bps=20,
            integrator_fee_account="FeeAcct111",
        )

        profile = settings.to_profile()

        assert profile.base_url == "http://127.0.0.1:8080"
        assert profile.headers["X-Yellowstone-Token"] == "x-token-abc"
        assert profile.headers["X-Integrator-Fee"] == "20"

    def test_self_hosted_needs_url(self):
        settings = JupiterSettings(
            tier="self-hosted",
            yellowstone_endpoint="https://grpc.example.org:10000",
            yellowstone_token="x-token-abc",
        )

        with pytest.raises(ConfigurationError):
            settings.to_profile()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"integrator_fee_bps": 20},
            {"integrator_fee_account": "FeeAcct111"},
            {"yellowstone_endpoint": "https://grpc.example.org"},
            {"yellowstone_token": "x-token"},
        ],
    )
    def test_pairs_required_together(self, kwargs):
        with pytest.raises(pydantic.ValidationError):
            JupiterSettings(**kwargs)

    @pytest.mark.parametrize("bps", [-1, 10001])
    def test_default_slippage_range(self, bps):
        with pytest.raises(pydantic.ValidationError):
            JupiterSettings(default_slippage_bps=bps)

    def test_fee_range(self):
        with pytest.raises(pydantic.ValidationError):
            JupiterSettings(integrator_fee_bps=70000, integrator_fee_account="FeeAcct111")


class TestSettings:

    def test_mask_secrets(self):
        settings = Settings(jupiter=JupiterSettings(tier="pro", api_key="jup_secret_key_123456"))

        masked = settings.mask_secrets()

        assert masked["jupiter"]["api_key"] == "jup_...3456"
        assert "jup_secret_key_123456" not in str(masked)

    def test_logging_defaults(self):
        settings = LoggingSettings()

        assert settings.level is LogLevel.INFO
        assert settings.file_enabled is False

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_reload_settings(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("JUPITER_TIER", "lite")

        reloaded = reload_settings()

        assert reloaded is not first
        assert reloaded.jupiter.tier is ApiTier.LITE
