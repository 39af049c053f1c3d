# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "LANEBOARD_APP_NAME": "App display name (default: laneboard).",
    "LANEBOARD_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "LANEBOARD_DATA_DIR": "Local data directory for the board file and logs (default: .local/laneboard).",
    "LANEBOARD_BOARD_PATH": "Board JSON file (default: <data_dir>/board.json).",
    "LANEBOARD_STORAGE_KEY": "Key the task list is stored under inside the board file (default: tasks_v5_simple).",
    # Board
    "LANEBOARD_MONITOR_INTERVAL": "Seconds between expiration scans (default: 1.0).",
    "LANEBOARD_CURRENT_USER": "Name recorded in the activity log for your actions (default: Project Lead).",
    "LANEBOARD_TEAM": "Comma separated team members offered in the edit dialog.",
    # Console
    "LANEBOARD_CONSOLE_COLOR": "Colored console output (true/false, default: true).",
}
