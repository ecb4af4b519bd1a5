"""Currency bookkeeping for user balances."""

from __future__ import annotations

from sqlalchemy.orm import Session

from myriad_api.models import Currency, UserCurrency
from myriad_api.repositories import CurrencyRepository, UserCurrencyRepository


class CurrencyService:
    def __init__(self, db: Session) -> None:
        self.currency_repository = CurrencyRepository(db)
        self.user_currency_repository = UserCurrencyRepository(db)

    def add_user_currencies(self, user_id: str, network_id: str) -> list[UserCurrency]:
        """Track every currency of ``network_id`` for a user, native coin first.

        Currencies the user already tracks are left untouched; new ones are
        appended after the user's current lowest priority.
        """
        currencies = self.currency_repository.find(network_id=network_id)
        currencies.sort(key=lambda currency: (not currency.native, currency.symbol))

        owned = self.user_currency_repository.find(user_id=user_id)
        owned_ids = {row.currency_id for row in owned}
        priority = max((row.priority for row in owned), default=0)

        added = []
        for currency in currencies:
            if currency.id in owned_ids:
                continue
            priority += 1
            added.append(
                self.user_currency_repository.create(
                    user_id=user_id,
                    currency_id=currency.id,
                    network_id=network_id,
                    priority=priority,
                )
            )
        return added

    def find_by_reference(self, network_id: str, reference_id: str | None) -> Currency | None:
        return self.currency_repository.find_one(network_id=network_id, reference_id=reference_id)
