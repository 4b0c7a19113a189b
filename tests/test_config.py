import pytest
from pydantic import ValidationError

from resto_orders.core.config import EnvironmentMode, Settings
from resto_orders.services.auth import PassphraseValidator


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.env_mode == EnvironmentMode.DEVELOPMENT
    assert settings.is_development
    assert not settings.use_real_services
    assert settings.admin_passphrase == "letmein"


def test_env_mode_is_case_insensitive():
    assert Settings(_env_file=None, env_mode="STAGING").env_mode == EnvironmentMode.STAGING


def test_invalid_env_mode():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, env_mode="qa")


def test_cors_origins_list():
    settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")

    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


def test_production_config_lists_missing_twilio_keys():
    settings = Settings(
        _env_file=None,
        env_mode="production",
        twilio_account_sid="AC123",
        twilio_auth_token=None,
        twilio_whatsapp_from=None,
        kitchen_whatsapp_number="+919800000000",
    )

    assert settings.validate_production_config() == ["TWILIO_AUTH_TOKEN", "TWILIO_WHATSAPP_FROM"]


def test_development_needs_no_twilio_keys():
    assert Settings(_env_file=None).validate_production_config() == []


def test_passphrase_validator():
    validator = PassphraseValidator("s3cret")

    assert validator.validate("s3cret")
    assert not validator.validate("S3CRET")
    assert not validator.validate("")
    assert not validator.validate(None)


def test_empty_passphrase_not_allowed():
    with pytest.raises(ValueError):
        PassphraseValidator("")
