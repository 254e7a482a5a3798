from __future__ import annotations

import pytest
from pydantic import ValidationError

from juvo.core.config import Settings


def test_default_secret_key_allowed_in_development() -> None:
    settings = Settings(_env_file=None, app_env="development", secret_key="change-me")
    assert settings.secret_key == "change-me"


def test_default_secret_key_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, app_env="production", secret_key="change-me")


def test_placeholder_secret_key_prefix_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, app_env="prod", secret_key="change-me-in-production")


def test_debug_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, app_env="production", secret_key="super-secure-value", debug=True)


def test_custom_secret_key_allowed_in_production() -> None:
    settings = Settings(_env_file=None, app_env="production", secret_key="super-secure-value")
    assert settings.secret_key == "super-secure-value"


def test_booking_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.schedule_conflict_policy == "date"
    assert settings.schedule_default_slot_hours == 2
    assert settings.booking_confirm_payment_requires_completion is False
    assert settings.settlement_completion_provider == "stripe"
    assert settings.settlement_default_payment_provider == "razorpay"


def test_conflict_policy_is_case_insensitive() -> None:
    settings = Settings(_env_file=None, schedule_conflict_policy=" Interval ")
    assert settings.schedule_conflict_policy == "interval"


def test_unknown_conflict_policy_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, schedule_conflict_policy="week")


def test_slot_hours_bounded() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, schedule_default_slot_hours=0)
