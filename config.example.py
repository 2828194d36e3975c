# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "CLEANNEST_APP_NAME": "App display name (default: cleannest).",
    "CLEANNEST_LOG_LEVEL": "Console logging level (default: INFO).",
    "CLEANNEST_DATA_DIR": "Local directory for the log file (default: .local/cleannest).",
    # Simulated backend latency, seconds (negative values clamp to 0)
    "CLEANNEST_AUTH_DELAY": "Sign-in / sign-up delay (default: 1.0).",
    "CLEANNEST_SIGN_OUT_DELAY": "Sign-out delay (default: 0.5).",
    "CLEANNEST_LOAD_DELAY": "Load / refetch delay (default: 0.5).",
    "CLEANNEST_CREATE_DELAY": "Add task / item delay (default: 0.5).",
    "CLEANNEST_MUTATE_DELAY": "Update / delete / toggle delay (default: 0.3).",
    # Behaviour
    "CLEANNEST_STRICT_IDS": "Raise on unknown ids instead of ignoring them (true/false, default: false).",
    # Demo identity returned by sign-in
    "CLEANNEST_DEMO_USER_ID": "Demo user id (default: mock-user-123).",
    "CLEANNEST_DEMO_USER_EMAIL": "Demo user email (default: demo@cleannest.com).",
}
