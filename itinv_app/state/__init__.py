"""
Inventory state, lifecycle and registry module.

Holds the immutable state snapshot and the pure operations over it:
device status derivation from repair events (PENDING/IN_PROGRESS → In Repair,
last active repair closed → In Storage) and the category registry cascade.
"""
