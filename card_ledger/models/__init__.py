"""Domain models for the credit card ledger."""

from card_ledger.models.account import Account, AccountSnapshot
from card_ledger.models.enums import CardBrand
from card_ledger.models.purchase import Purchase

__all__ = ["Account", "AccountSnapshot", "CardBrand", "Purchase"]
