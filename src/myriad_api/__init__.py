"""Myriad API: social content backend with wallets, tipping and reputation."""

__version__ = "0.1.0"
