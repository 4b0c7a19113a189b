"""
Staff Passphrase Check

Every order API call carries the shared staff passphrase, either in the
``x-passphrase`` header or the ``pass`` query parameter. The API layer
only asks an injected validator whether a credential is acceptable and
never sees the secret itself.
"""

import hmac
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional

from resto_orders.core.config import get_settings


class CredentialValidator(ABC):
    """Capability: decide whether a presented credential is valid."""

    @abstractmethod
    def validate(self, credential: Optional[str]) -> bool:
        pass


class PassphraseValidator(CredentialValidator):
    """Constant-time comparison against a single shared passphrase."""

    def __init__(self, passphrase: str):
        if not passphrase:
            raise ValueError("Admin passphrase must not be empty")
        self._passphrase = passphrase.encode("utf-8")

    def validate(self, credential: Optional[str]) -> bool:
        if not credential:
            return False
        return hmac.compare_digest(credential.encode("utf-8"), self._passphrase)


@lru_cache()
def get_credential_validator() -> CredentialValidator:
    """Validator built from ADMIN_PASSPHRASE."""
    return PassphraseValidator(get_settings().admin_passphrase)
