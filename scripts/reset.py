#!/usr/bin/env python3
"""Reset script for Ledger.

This script will:
1. Apply any pending migrations
2. Delete every expense and category
3. Restore the default categories (optionally with sample expenses)
"""

import sys

from cli.migrate import apply_pending
from config import load_config
from logger import setup_logging
from services.base import Services


def reset():
    """Reset the ledger to its initial state."""
    print("Ledger Reset Script")
    print("=" * 50)

    config = load_config()
    setup_logging(config)

    if not config.enable_reset:
        print("\nReset is disabled in configuration (enable_reset=false).")
        print("To enable reset, set enable_reset=true under [maintenance] in ~/.config/ledger.toml")
        sys.exit(1)

    print(f"\nDatabase: {config.db_path}")

    response = input("\nThis will delete ALL expenses and categories. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    services = Services(config)
    apply_pending(services.db_manager)

    result = services.maintenance.clear_all_data()
    if not result.success:
        print(f"\n{result.message}")
        sys.exit(1)

    samples = input("Add sample expenses? (yes/no): ")
    if samples.lower() == "yes":
        added = services.maintenance.initialize(seed_samples=True)
        print(f"✓ Added {added} sample expense(s)")

    print("\n" + "=" * 50)
    print("Reset complete! Default categories have been restored.")


if __name__ == "__main__":
    reset()
