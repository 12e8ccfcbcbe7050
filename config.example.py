# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Backend
    "TODO_API_BASE_URL": "Base URL of the task server (default: http://localhost:8080).",
    "TODO_HTTP_TIMEOUT_SECONDS": "Per-request timeout in seconds (default: 5.0).",
    # List
    "TODO_DEFAULT_SORT": "Initial sort by creation date: asc | desc (default: asc).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory holding todo.log (default: .local/todo).",
}
