# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets; keep the API key in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "ZENITH_APP_NAME": "App display name (default: zenith).",
    "ZENITH_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Local data
    "ZENITH_DATA_DIR": "Directory for the task file and zenith.log (default: .local/zenith).",
    "ZENITH_STORAGE_KEY": "Name of the task slot, stored as <data dir>/<key>.json (default: zenith_tasks_v2).",
    # Task editing
    "ZENITH_AUTO_STATUS": "Derive status from the checklist when toggling items (true/false, default: true).",
    # AI advisor
    "ZENITH_AI_API_KEY": "API key for the AI service (GEMINI_API_KEY and API_KEY are read as fallbacks).",
    "ZENITH_AI_BASE_URL": "OpenAI-compatible base URL (default: Gemini's OpenAI endpoint).",
    "ZENITH_AI_MODEL": "Model name (default: gemini-2.5-flash).",
    "ZENITH_AI_LANGUAGE": "Language of the generated subtasks (default: English).",
    "ZENITH_AI_SUBTASK_COUNT": "How many subtasks to ask for (default: 5).",
    "ZENITH_AI_TIMEOUT_SECONDS": "Request timeout in seconds (default: 30).",
}

EXAMPLE_DOTENV = """
ZENITH_AI_API_KEY=
ZENITH_AI_LANGUAGE=English
ZENITH_LOG_LEVEL=INFO
""".strip()
