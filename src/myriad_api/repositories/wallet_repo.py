"""Data access helpers for networks, wallets, currencies and tips."""
from __future__ import annotations

from myriad_api.models import Currency, Network, Transaction, UserCurrency, Wallet

from .base import Repository

__all__ = [
    "CurrencyRepository",
    "NetworkRepository",
    "TransactionRepository",
    "UserCurrencyRepository",
    "WalletRepository",
]


class NetworkRepository(Repository[Network]):
    model = Network


class WalletRepository(Repository[Wallet]):
    model = Wallet


class CurrencyRepository(Repository[Currency]):
    model = Currency


class UserCurrencyRepository(Repository[UserCurrency]):
    model = UserCurrency


class TransactionRepository(Repository[Transaction]):
    model = Transaction
