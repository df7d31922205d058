#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from breaktimer_app.config.loader import ConfigLoader
from breaktimer_app.config.validation import ConfigValidator
from breaktimer_app.errors import ConfigurationError


def main(config_dir: str = None) -> int:
    """Validate timer.yaml merged over the defaults."""
    loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
    config_file = loader.config_dir / "timer.yaml"
    print(f"Validating {config_file}...")

    try:
        config = loader.merge_config()
    except ConfigurationError as e:
        print(f"Cannot read configuration: {e}")
        return 1

    errors = ConfigValidator.validate_config(config)
    if errors:
        print(f"Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  - {error.field}: {error.message} (value: {error.value!r})")
        return 1

    try:
        app_config = loader.load()
    except ConfigurationError as e:
        print(f"Configuration rejected: {e}")
        return 1

    print("Configuration is valid")
    print(f"  work duration: {app_config.timer.default_work_minutes} minutes")
    print(f"  database:      {app_config.storage.db_path}")
    print(f"  log level:     {app_config.logging.level}")
    channels = [
        name for name, enabled in (
            ("os_alert", app_config.notification.os_alert.enabled),
            ("sound", app_config.notification.sound.enabled),
            ("toast", app_config.notification.toast.enabled),
        ) if enabled
    ]
    print(f"  channels:      {', '.join(channels) or 'none'}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else None))
