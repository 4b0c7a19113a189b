import asyncio
from datetime import datetime
from types import SimpleNamespace

import pytest
from twilio.base.exceptions import TwilioException

from resto_orders.core.config import Settings, get_settings
from resto_orders.models import Order, OrderItem
from resto_orders.services.notifications import (
    MockKitchenNotifier,
    TwilioKitchenNotifier,
    build_kitchen_message,
    build_kitchen_notifier,
    get_kitchen_notifier,
    reset_kitchen_notifier,
)


class FakeMessages:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(sid="SM0001")


def _order(**overrides):
    fields = dict(
        id="o1",
        order_no="ORD-261018-00042",
        created_at=datetime(2026, 10, 18, 12, 0, 0),
        updated_at=datetime(2026, 10, 18, 12, 0, 0),
        guest_name="A. Rao",
        room_no="204",
        notes="Less spicy",
        total=230,
        items=[
            OrderItem(id="l1", order_id="o1", item_key="soup_03", name="Tomato Soup", price=100, qty=2),
            OrderItem(id="l2", order_id="o1", item_key="bread_04", name="Roti (Per Piece)", price=30),
        ],
    )
    fields.update(overrides)
    return Order(**fields)


def _twilio_settings(**overrides):
    values = dict(
        _env_file=None,
        env_mode="production",
        twilio_whatsapp_from="+14155238886",
        kitchen_whatsapp_number="whatsapp:+919800000000",
        restaurant_name="Harbour View Kitchen",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def fresh_factory(monkeypatch):
    def configure(mode):
        monkeypatch.setenv("ENV_MODE", mode)
        get_settings.cache_clear()
        reset_kitchen_notifier()
        return get_kitchen_notifier()

    yield configure

    get_settings.cache_clear()
    reset_kitchen_notifier()


def test_kitchen_message_lists_lines_and_notes():
    message = build_kitchen_message(_order(), "Harbour View Kitchen")

    assert message.splitlines()[0] == "*Harbour View Kitchen* - New ticket ORD-261018-00042"
    assert "Room: 204 | Guest: A. Rao" in message
    assert "2 x Tomato Soup" in message
    assert "1 x Roti (Per Piece)" in message
    assert message.endswith("Notes: Less spicy")


def test_kitchen_message_without_guest_details():
    message = build_kitchen_message(_order(guest_name="", room_no="", notes=""), "Resto")

    assert "Room: - | Guest: -" in message
    assert "Notes" not in message


def test_factory_uses_mock_in_development(fresh_factory):
    notifier = fresh_factory("development")

    assert isinstance(notifier, MockKitchenNotifier)
    assert get_kitchen_notifier() is notifier


def test_factory_uses_twilio_in_production(fresh_factory, monkeypatch):
    monkeypatch.delenv("TWILIO_ACCOUNT_SID", raising=False)
    monkeypatch.delenv("TWILIO_AUTH_TOKEN", raising=False)

    notifier = fresh_factory("production")

    assert isinstance(notifier, TwilioKitchenNotifier)
    assert notifier.provider_name == "twilio"


def test_mock_notifier_records_messages():
    notifier = MockKitchenNotifier(restaurant_name="Resto")

    result = asyncio.run(notifier.send_order_to_kitchen(_order()))

    assert result.success
    assert result.message_id.startswith("wa_mock_")
    assert len(notifier.sent) == 1


def test_twilio_sends_whatsapp_message():
    messages = FakeMessages()
    notifier = TwilioKitchenNotifier(_twilio_settings(), client=SimpleNamespace(messages=messages))

    result = asyncio.run(notifier.send_order_to_kitchen(_order()))

    assert result.success
    assert result.message_id == "SM0001"
    assert result.provider == "twilio"
    call = messages.calls[0]
    assert call["from_"] == "whatsapp:+14155238886"
    assert call["to"] == "whatsapp:+919800000000"
    assert "2 x Tomato Soup" in call["body"]


def test_twilio_error_is_reported_not_raised():
    messages = FakeMessages(error=TwilioException("Unable to create record"))
    notifier = TwilioKitchenNotifier(_twilio_settings(), client=SimpleNamespace(messages=messages))

    result = asyncio.run(notifier.send_order_to_kitchen(_order()))

    assert not result.success
    assert "Unable to create record" in result.error_message


def test_twilio_without_configuration():
    notifier = TwilioKitchenNotifier(_twilio_settings(twilio_whatsapp_from=None))

    result = asyncio.run(notifier.send_order_to_kitchen(_order()))

    assert not result.success
    assert result.error_message == "Twilio WhatsApp not configured"
    assert asyncio.run(notifier.health_check()) is False


def test_twilio_transport_failure_is_reported_not_raised():
    messages = FakeMessages(error=ConnectionError("api.twilio.com unreachable"))
    notifier = TwilioKitchenNotifier(_twilio_settings(), client=SimpleNamespace(messages=messages))

    result = asyncio.run(notifier.send_order_to_kitchen(_order()))

    assert not result.success
    assert result.provider == "twilio"
    assert result.error_message == "api.twilio.com unreachable"


def test_builder_picks_mock_for_development():
    notifier = build_kitchen_notifier(Settings(_env_file=None, restaurant_name="Harbour View Kitchen"))

    assert isinstance(notifier, MockKitchenNotifier)
    assert notifier.restaurant_name == "Harbour View Kitchen"


def test_builder_returns_disabled_twilio_when_keys_missing(caplog):
    settings = Settings(
        _env_file=None,
        env_mode="staging",
        twilio_account_sid=None,
        twilio_auth_token=None,
        twilio_whatsapp_from=None,
        kitchen_whatsapp_number=None,
    )

    notifier = build_kitchen_notifier(settings)

    assert isinstance(notifier, TwilioKitchenNotifier)
    assert "KITCHEN_WHATSAPP_NUMBER" in caplog.text
    result = asyncio.run(notifier.send_order_to_kitchen(_order()))
    assert result.error_message == "Twilio WhatsApp not configured"
