"""Tests for transport profile construction and header sets."""

import itertools

import pytest

from jupiter_bridge.exceptions import ConfigurationError
from jupiter_bridge.transport import (
    DEFAULT_BASE_URLS,
    LITE_API_BASE,
    PRO_API_BASE,
    PUBLIC_API_BASE,
    ULTRA_API_BASE,
    USER_AGENT,
    ApiTier,
    IntegratorFee,
    TransportProfile,
    YellowstoneConfig,
)

API_KEY = "jup_test_key_0123456789"
FEE = IntegratorFee(fee_bps=25, fee_account="FeeAcct111111111111111111111111111111111111")
FEED = YellowstoneConfig(grpc_endpoint="https://grpc.example.org:10000", x_token="x-token-abc")
SELF_HOSTED_URL = "http://127.0.0.1:8080"

BASE_HEADERS = {"X-API-Type", "Content-Type", "User-Agent"}


def _base_url(tier: ApiTier) -> str:
    return DEFAULT_BASE_URLS.get(tier, SELF_HOSTED_URL)


class TestHeaderSets:
    """Header set is exactly what the optional configs imply."""

    @pytest.mark.parametrize("tier", list(ApiTier))
    @pytest.mark.parametrize(
        "with_key,with_fee,with_feed",
        list(itertools.product([False, True], repeat=3)),
    )
    def test_header_power_set(self, tier, with_key, with_fee, with_feed):
        kwargs = {
            "base_url": _base_url(tier),
            "tier": tier,
            "api_key": API_KEY if with_key else None,
            "integrator_fee": FEE if with_fee else None,
            "yellowstone": FEED if with_feed else None,
        }

        needs_key = tier in (ApiTier.PRO, ApiTier.ULTRA)
        needs_feed = tier is ApiTier.SELF_HOSTED
        if (needs_key and not with_key) or (needs_feed and not with_feed):
            with pytest.raises(ConfigurationError):
                TransportProfile(**kwargs)
            return

        profile = TransportProfile(**kwargs)

        expected = set(BASE_HEADERS)
        if with_key:
            expected.add("Authorization")
        if with_fee:
            expected |= {"X-Integrator-Fee", "X-Integrator-Account"}
        if with_feed:
            expected |= {"X-Yellowstone-Endpoint", "X-Yellowstone-Token"}

        assert set(profile.headers) == expected
        assert profile.headers["X-API-Type"] == tier.value

    def test_header_values(self):
        profile = TransportProfile(
            base_url=PRO_API_BASE,
            tier=ApiTier.PRO,
            api_key=API_KEY,
            integrator_fee=FEE,
        )

        assert profile.headers["Authorization"] == f"Bearer {API_KEY}"
        assert profile.headers["X-Integrator-Fee"] == "25"
        assert profile.headers["X-Integrator-Account"] == FEE.fee_account
        assert profile.headers["Content-Type"] == "application/json"
        assert profile.headers["User-Agent"] == USER_AGENT

    def test_yellowstone_header_values(self):
        profile = TransportProfile.self_hosted(SELF_HOSTED_URL, FEED)

        assert profile.headers["X-Yellowstone-Endpoint"] == FEED.grpc_endpoint
        assert profile.headers["X-Yellowstone-Token"] == FEED.x_token
        assert profile.headers["X-API-Type"] == "self-hosted"

    def test_headers_are_read_only(self):
        profile = TransportProfile.public()

        with pytest.raises(TypeError):
            profile.headers["X-Extra"] = "1"


class TestShortcuts:

    def test_public(self):
        assert TransportProfile.public() == TransportProfile(base_url=PUBLIC_API_BASE, tier=ApiTier.PUBLIC)

    def test_lite(self):
        profile = TransportProfile.lite()

        assert profile.base_url == LITE_API_BASE
        assert profile.tier is ApiTier.LITE
        assert "Authorization" not in profile.headers

    def test_pro(self):
        profile = TransportProfile.pro(API_KEY)

        assert profile == TransportProfile(base_url=PRO_API_BASE, tier=ApiTier.PRO, api_key=API_KEY)
        assert dict(profile.headers) == dict(
            TransportProfile(base_url=PRO_API_BASE, tier="pro", api_key=API_KEY).headers
        )

    def test_ultra(self):
        profile = TransportProfile.ultra(API_KEY)

        assert profile.base_url == ULTRA_API_BASE
        assert profile.headers["X-API-Type"] == "ultra"

    def test_self_hosted_with_fee(self):
        profile = TransportProfile.self_hosted(SELF_HOSTED_URL + "/", FEED, integrator_fee=FEE)

        assert profile.base_url == SELF_HOSTED_URL
        assert profile.url("/quote") == f"{SELF_HOSTED_URL}/quote"
        assert "X-Integrator-Fee" in profile.headers

    def test_timeout_is_thirty_seconds(self):
        assert TransportProfile.public().client_timeout().total == 30

    def test_describe_masks_key(self):
        summary = TransportProfile.pro(API_KEY).describe()

        assert summary["api_key"] == "***"
        assert API_KEY not in str(summary)


class TestConfigurationErrors:

    def test_pro_requires_key(self):
        with pytest.raises(ConfigurationError):
            TransportProfile(base_url=PRO_API_BASE, tier=ApiTier.PRO)

    def test_ultra_requires_key(self):
        with pytest.raises(ConfigurationError):
            TransportProfile(base_url=ULTRA_API_BASE, tier=ApiTier.ULTRA)

    def test_self_hosted_requires_feed(self):
        with pytest.raises(ConfigurationError):
            TransportProfile(base_url=SELF_HOSTED_URL, tier=ApiTier.SELF_HOSTED)

    @pytest.mark.parametrize("bad_key", ["clé-secrète", "key\nInjected: 1", ""])
    def test_unsendable_key(self, bad_key):
        with pytest.raises(ConfigurationError) as exc_info:
            TransportProfile.pro(bad_key)

        assert exc_info.value.context == {"header": "Authorization"}

    def test_error_does_not_echo_key(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TransportProfile.pro("sécret-value")

        assert "sécret-value" not in str(exc_info.value)

    def test_fee_bps_above_limit(self):
        with pytest.raises(ConfigurationError):
            IntegratorFee(fee_bps=65536, fee_account="FeeAcct")

    def test_fee_bps_negative(self):
        with pytest.raises(ConfigurationError):
            IntegratorFee(fee_bps=-1, fee_account="FeeAcct")

    def test_fee_bps_upper_bound_accepted(self):
        assert IntegratorFee(fee_bps=65535, fee_account="FeeAcct").fee_bps == 65535

    def test_non_ascii_yellowstone_token(self):
        with pytest.raises(ConfigurationError):
            TransportProfile.self_hosted(
                SELF_HOSTED_URL,
                YellowstoneConfig(grpc_endpoint="https://grpc.example.org", x_token="tøken"),
            )

    @pytest.mark.parametrize("url", ["", "quote-api.jup.ag/v6", "ftp://example.org"])
    def test_bad_base_url(self, url):
        with pytest.raises(ConfigurationError):
            TransportProfile(base_url=url)

    def test_unknown_tier(self):
        with pytest.raises(ConfigurationError):
            TransportProfile(base_url=PUBLIC_API_BASE, tier="enterprise")
