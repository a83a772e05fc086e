#!/usr/bin/env python3
"""Configuration and seed validation script."""

import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from itinv_app.config.loader import ConfigLoader
from itinv_app.config.validation import ConfigIssue, ConfigValidator
from itinv_app.data.seed import build_state
from itinv_app.engine import CommandError


def validate_settings(loader: ConfigLoader, overrides: Optional[dict] = None) -> List[ConfigIssue]:
    """Validate the merged settings for a config directory."""
    config = loader.merge_config(overrides)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating inventory configuration in {loader.config_dir}...")

    all_valid = True

    print("\n📊 Validating settings.yaml...")
    issues = validate_settings(loader)
    if issues:
        print(f"❌ Found {len(issues)} validation errors:")
        for issue in issues:
            print(f"  • {issue.field}: {issue.message} (value: {issue.value})")
        all_valid = False
    else:
        print("✅ Settings are valid")

    print("\n📦 Validating seed.yaml...")
    try:
        state = build_state(loader.load_seed(), loader.load_config().budgets)
        print(
            f"✅ Seed is consistent: {len(state.devices)} devices, "
            f"{len(state.repairs)} repairs, {len(state.device_categories)} device categories, "
            f"{len(state.repair_categories)} repair categories, {len(state.locations)} locations"
        )
    except CommandError as e:
        print(f"❌ Seed rejected: {e}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
