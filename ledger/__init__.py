"""
PennyWise Ledger
"""
from ledger.savings_ledger import SavingsLedger

__all__ = ["SavingsLedger"]
