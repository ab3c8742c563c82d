"""
Reset the configured storage and re-seed the built-in dataset.

This script:
1. Shows how many records each collection holds
2. Removes every stored collection and the login session
3. Loads the store again, which writes the seed dataset

Usage:
    python scripts/reset_store.py [--yes]
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dentaldesk.core.config import get_settings
from dentaldesk.services.data_store import DataStore
from dentaldesk.services.storage_service import StorageBackend, StorageKeys, build_storage


def count_records(store: DataStore) -> dict:
    """Count records in all collections."""
    return {
        "users": len(store.users),
        "patients": len(store.patients),
        "incidents": len(store.incidents),
        "attachments": sum(len(i.files) for i in store.incidents),
    }


def print_counts(title: str, counts: dict):
    """Print collection counts."""
    print(f"\n{'=' * 60}")
    print(f"{title}")
    print(f"{'=' * 60}")
    total = 0
    for name, count in counts.items():
        print(f"  {name:<25} {count:>6} records")
        total += count
    print(f"{'=' * 60}")
    print(f"  {'TOTAL':<25} {total:>6} records")
    print(f"{'=' * 60}\n")


def clear_storage(storage: StorageBackend):
    for key in StorageKeys.COLLECTIONS + (StorageKeys.AUTH,):
        storage.remove(key)


def reset_store(assume_yes: bool = False):
    """Wipe stored collections and seed again."""
    settings = get_settings()
    storage = build_storage(settings)

    try:
        print("\n🚀 Starting store reset...\n")

        stored = any(storage.get(key) for key in StorageKeys.COLLECTIONS)
        before = DataStore(storage, seed_on_empty=False).load()
        print_counts("BEFORE RESET", count_records(before))

        if not assume_yes and stored:
            response = input("⚠️  This will delete ALL data. Continue? (yes/no): ")
            if response.lower() != "yes":
                print("❌ Reset cancelled.")
                return

        print("🗑️  Deleting all data...")
        clear_storage(storage)
        print("✅ All data deleted successfully!\n")

        print("🌱 Writing seed dataset...")
        after = DataStore(storage, seed_on_empty=True).load()
        print_counts("FINAL STATE", count_records(after))

        print("🎉 Store reset complete!")
        print("\n📝 Seed logins:")
        for user in after.users:
            print(f"   {user.role.value:<8} {user.email:<22} {user.password}")
        print("\n")

    except Exception as e:
        print(f"\n❌ Error during reset: {e}")
        raise
    finally:
        storage.close()


if __name__ == "__main__":
    reset_store(assume_yes="--yes" in sys.argv[1:])
