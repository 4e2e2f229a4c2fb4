"""Synthetic data generators."""

from card_ledger.generators.purchase import PurchaseGenerator

__all__ = ["PurchaseGenerator"]
