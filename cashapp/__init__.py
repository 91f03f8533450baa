"""
CashApp - Source Package

A small personal expense tracker. Expenses are recorded into two
independent lists (private and business) that survive restarts.

DESIGN PRINCIPLES:
1. In-memory state is authoritative for the running process
2. Every mutation is persisted immediately
3. Corrupt stored data never crashes the app
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "CashApp Team"
