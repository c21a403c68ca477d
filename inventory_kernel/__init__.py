"""
Inventory Kernel

A single-user inventory ledger with:
- A product catalog with upsert/delete semantics
- Append-only stock movements applied against product quantities
- Pure derivations (search, stock status, recent movements, statistics)
- Pluggable key-value persistence (in-memory or SQL)
"""

__version__ = "0.1.0"
