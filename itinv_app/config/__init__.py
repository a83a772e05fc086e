"""
Configuration module.

Frozen dataclass defaults, YAML overrides from the config directory, and
validation of the merged result.
"""
