"""
Paperless Summarizer Configuration Module
Centralized constants and defaults for the application.

Runtime values (tokens, URLs, model selection) are resolved once at startup
by settings.py; this module only holds the defaults they fall back to.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Pick up a .env file from the working directory (OS environment wins)
load_dotenv(override=False)

# Debug Mode Configuration
DEBUG_MODE = os.environ.get('DEBUG', 'false').lower() == 'true'

# Application Paths
APP_NAME = "PaperlessSummarizer"
APPDATA_DIR = Path(os.environ.get('APPDATA', os.path.expanduser('~/.config'))) / APP_NAME
LOGS_DIR = APPDATA_DIR / "logs"

# Summarizer Defaults (overridable via environment or SUMMARIZER_CONFIG_FILE)
DEFAULT_MODEL_NAME = "llama3.2"
DEFAULT_CONTEXT_LENGTH = 8096
DEFAULT_SUMMARY_PROMPT = "Summarize the given text: "
DEFAULT_SUMMARY_MARKER = "AI_SUMMARY"

# Label that precedes the JSON configuration snapshot in a summary note
MODEL_CONFIGURATION_LABEL = "Model-Configuration:"

# Ollama Configuration
OLLAMA_API_BASE = "http://localhost:11434"  # Default Ollama API endpoint

# Document Service Configuration
DOCUMENTS_ORDERING = "-id"  # Newest documents first
AUTH_HEADER_SCHEME = "Token"

# Cleanup Configuration
CLEANUP_REQUEST_TIMEOUT_SECONDS = 30  # Per listing request in all-mode cleanup
CLEANUP_MAX_PAGE_TIMEOUTS = 3         # Consecutive timeouts before the crawl ends
CLEANUP_MAX_WORKERS = 4               # Concurrent note deletions per page
CLEANUP_ALL_TOKEN = "all"

# Local Output
SUMMARY_FILE_SUFFIX = "_summary.txt"

# Logging Configuration
LOG_FILE = LOGS_DIR / "processing.log"
LOG_FORMAT = "[%(levelname)s %(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
