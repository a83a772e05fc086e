"""
Data ingestion module.

Normalizes raw device/repair dictionaries into typed records and builds
inventory state from seed documents.
"""
