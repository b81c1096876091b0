"""
MiniDB Transactions Module
==========================
Transaction identity shared by the storage and catalog layers.

Components:
  - transaction_id.py: TransactionId (process-wide, monotonic, thread-safe ids)
"""

from transactions.transaction_id import TransactionId
