import pytest

from cabinet_quote.config import Settings, load_settings
from cabinet_quote.quote import QuoteSettings


def test_load_settings_defaults() -> None:
    assert load_settings({}) == Settings()


def test_load_settings_reads_environment() -> None:
    settings = load_settings(
        {
            "PRICING_API_BASE_URL": " https://pricing.example.com ",
            "PRICING_API_TOKEN": "token",
            "PRICING_API_TIMEOUT": "2.5",
            "QUOTE_TAX_RATE": "0.0825",
            "QUOTE_SURCHARGE_RATE": "0",
            "CABINET_QUOTE_LOG_LEVEL": "debug",
        }
    )

    assert settings.pricing_api_base_url == "https://pricing.example.com"
    assert settings.pricing_api_token == "token"
    assert settings.pricing_api_timeout == 2.5
    assert settings.quote == QuoteSettings(surcharge_rate=0.0, tax_rate=0.0825)
    assert settings.log_level == "DEBUG"


def test_load_settings_rejects_bad_numbers() -> None:
    with pytest.raises(ValueError, match="QUOTE_TAX_RATE"):
        load_settings({"QUOTE_TAX_RATE": "seven percent"})
