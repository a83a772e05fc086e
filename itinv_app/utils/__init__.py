"""
Utility functions module.

Date handling shared by the record normalizer and the reporting views.

Date Semantics:
- Record dates are calendar dates stored as ISO ``YYYY-MM-DD`` strings
- Reports take an explicit ``as_of`` date and fall back to today's date
"""
