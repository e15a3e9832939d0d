"""
Homebook - Source Package

Two small household utilities sharing one architecture:
an expense ledger and a to-do list.

DESIGN PRINCIPLES:
1. One repository owns each storage key
2. Views render, controllers decide
3. Storage failures degrade, they never crash the UI
4. Every task mutation is auditable
5. Storage backend is swappable
"""

__version__ = "1.0.0"
__author__ = "Homebook Team"
