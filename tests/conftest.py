from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from resto_orders import main
from resto_orders.core.config import Settings, get_settings
from resto_orders.services.auth import PassphraseValidator, get_credential_validator
from resto_orders.services.notifications import MockKitchenNotifier, get_kitchen_notifier
from resto_orders.store import OrderStore

PASSPHRASE = "letmein"
AUTH = {"x-passphrase": PASSPHRASE}


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 18, 12, 0, 0))


@pytest.fixture
def store(clock):
    return OrderStore(clock=clock)


@pytest.fixture
def notifier():
    return MockKitchenNotifier(restaurant_name="Harbour View Kitchen")


@pytest.fixture
def app_settings():
    return Settings(restaurant_name="Harbour View Kitchen", currency_symbol="Rs.")


@pytest.fixture
def client(store, notifier, app_settings):
    main.app.dependency_overrides[main.get_order_store] = lambda: store
    main.app.dependency_overrides[get_kitchen_notifier] = lambda: notifier
    main.app.dependency_overrides[get_settings] = lambda: app_settings
    main.app.dependency_overrides[get_credential_validator] = lambda: PassphraseValidator(PASSPHRASE)

    with TestClient(main.app) as test_client:
        yield test_client

    main.app.dependency_overrides.clear()
