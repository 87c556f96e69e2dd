#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import yaml  # noqa: E402

from freefall_app.config.loader import ConfigLoader  # noqa: E402
from freefall_app.config.validation import ConfigValidator  # noqa: E402
from freefall_app.errors import ConfigurationError  # noqa: E402


def main() -> None:
    """Validate config/settings.yaml (if present) and the bundled example."""
    print("🔍 Validating freefall configuration...")

    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else project_root / "config"
    all_valid = True

    print(f"\n📁 Merged configuration from {config_dir}...")
    try:
        config = ConfigLoader.create(config_dir).load_config()
        print(f"✅ Configuration is valid (db_path={config.storage.db_path})")
    except (ConfigurationError, yaml.YAMLError) as e:
        print(f"❌ {e}")
        all_valid = False

    example_file = config_dir / "settings.example.yaml"
    if example_file.exists():
        print(f"\n📋 Validating {example_file.name}...")
        with open(example_file) as f:
            example = yaml.safe_load(f) or {}

        errors = ConfigValidator.validate_config(example)
        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"✅ {example_file.name} is valid")

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
