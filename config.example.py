# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TIDY_APP_NAME": "App display name (default: tidy-tasks).",
    "TIDY_LOG_LEVEL": "File log level (default: INFO). Console shows WARNING+ only.",
    # Paths (gitignored)
    "TIDY_DATA_DIR": "Local data directory for logs and storage (default: .local/tidy).",
    "TIDY_STORAGE_DIR": "Key-value storage directory (default: <data_dir>/storage).",
    # Persistence
    "TIDY_PERSIST": "Persist tasks to disk (true/false, default: true).",
    "TIDY_STORAGE_KEY": "Storage key holding the task list (default: tasks).",
    # Animation timing
    "TIDY_ANIMATIONS": "Run timed animations (true/false, default: true).",
    "TIDY_DELETE_DURATION_MS": "Slide-out duration before a task is removed (default: 300).",
    "TIDY_DELETE_SLIDE_DISTANCE": "Slide-out target offset (default: -300).",
    "TIDY_PULSE_DURATION_MS": "Duration of each half of the creation pulse (default: 300).",
}
