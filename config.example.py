# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING; the log file always gets DEBUG).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory (default: .local/todo).",
    "TODO_TASKS_DB_PATH": "Task SQLite path (default: <data_dir>/tasks.sqlite3).",
    "TODO_LOG_DIR": "Directory for todo.log (default: <data_dir>).",
    # Persistence
    "TODO_PERSISTENCE_ENABLED": "Keep tasks in SQLite between runs (true/false, default: true).",
    "TODO_ASYNC_SAVE": (
        "Save in a background thread (true/false, default: true). "
        "false writes to SQLite inside every mutation while the task list is locked, "
        "so edits and reads wait for the disk; use it only for debugging or tests."
    ),
    # Console
    "TODO_SEED_EXAMPLES": "Add sample tasks when the list is empty (true/false, default: true).",
    "TODO_DEFAULT_SORT": "Initial sort order: asc or desc (default: asc).",
}
