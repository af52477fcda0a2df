"""
Tests for settings loading and validation.
"""
import pytest
from pydantic import ValidationError

from polymarket_positions.config import Settings, is_valid_ethereum_address

VALID = "0x" + "0123456789abcdefABCD" * 2


class TestAddressValidation:
    """Tests for address format checks."""

    def test_valid_address(self):
        assert is_valid_ethereum_address(VALID)

    @pytest.mark.parametrize("address", ["", "0x123", VALID[2:], "0x" + "g" * 40, VALID + "0"])
    def test_invalid_address(self, address):
        assert not is_valid_ethereum_address(address)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PROXY_WALLET", raising=False)
        monkeypatch.delenv("DATA_API_URL", raising=False)
        monkeypatch.delenv("REQUEST_TIMEOUT_MS", raising=False)
        settings = Settings(_env_file=None)
        assert settings.proxy_wallet == ""
        assert settings.data_api_url == "https://data-api.polymarket.com"
        assert settings.request_timeout == 10.0

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PROXY_WALLET", VALID)
        monkeypatch.setenv("REQUEST_TIMEOUT_MS", "2500")
        settings = Settings(_env_file=None)
        assert settings.proxy_wallet == VALID
        assert settings.request_timeout == 2.5

    def test_invalid_proxy_wallet_rejected(self):
        with pytest.raises(ValidationError, match="Invalid address format"):
            Settings(_env_file=None, proxy_wallet="not-an-address")

    def test_invalid_usdc_contract_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, usdc_contract_address="0x1234")

    def test_address_whitespace_stripped(self):
        settings = Settings(_env_file=None, proxy_wallet=f"  {VALID}\n")
        assert settings.proxy_wallet == VALID
