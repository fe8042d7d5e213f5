"""
Reset the Pomodoro session history.
This deletes every recorded session; settings are kept unless you ask.
"""

import os
from BackEnd.core.paths import db_path, settings_path
from BackEnd.repos.session_repo import SessionRepo

def reset_all_stats():
    """Clear the session log after confirmation."""
    db_file = db_path()

    if db_file.exists():
        store = SessionRepo(db_file)
        print(f"Found {store.count()} sessions in: {db_file}")

        confirm = input("Are you sure you want to reset all stats? This cannot be undone. (yes/no): ")

        if confirm.lower() in ['yes', 'y']:
            store.clear()
            print("✓ Session history cleared")
        else:
            print("Reset cancelled.")
    else:
        print("No database found. Stats are already at 0.")

    # Also offer to reset settings back to defaults
    config_file = settings_path()
    if config_file.exists():
        confirm_settings = input("\nAlso reset your settings to defaults? (yes/no): ")
        if confirm_settings.lower() in ['yes', 'y']:
            try:
                os.remove(config_file)
                print("✓ Settings reset")
            except OSError as e:
                print(f"✗ Error deleting settings: {e}")

if __name__ == "__main__":
    print("=" * 50)
    print("Pomodoro Tray - Reset Stats")
    print("=" * 50)
    reset_all_stats()
