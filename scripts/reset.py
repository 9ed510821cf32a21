#!/usr/bin/env python3
"""Reset script for VenceHoje.

Deletes the database and logs, keeps the backup directory unless
--include-backups is given, then recreates an empty database with the
main profile and its built-in categories.
"""

import argparse
import shutil
import sys

from config import load_config
from db.manager import DatabaseManager
from cli.migrate import apply_pending


def reset(include_backups=False):
    """Reset the application state."""
    print("VenceHoje Reset Script")
    print("=" * 50)

    config = load_config()

    targets = [config.db_data_dir, config.log_dir]
    if include_backups:
        targets.append(config.backup_dir)

    print("\nWill delete:")
    for target in targets:
        print(f"  {target}")
    if not include_backups:
        print(f"Keeping backups in {config.backup_dir}")

    response = input("\nThis will delete ALL bills and profiles. Continue? (yes/no): ")
    if response.strip().lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    for target in targets:
        if target.exists():
            shutil.rmtree(target)
            print(f"✓ Deleted {target}")

    print("\nRecreating database...")
    applied = apply_pending(DatabaseManager(config))

    print("\n" + "=" * 50)
    print(f"Reset complete! Applied {len(applied)} migration(s).")
    print(f"Database location: {config.db_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Reset VenceHoje data")
    parser.add_argument(
        "--include-backups", action="store_true", help="Also delete CSV backups"
    )
    reset(parser.parse_args().include_backups)
