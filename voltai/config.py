"""
VoltAI Configuration Module
Centralized configuration for the indexer, retriever and Ollama integration.
"""

import os
from pathlib import Path
from typing import Any

import yaml

# Debug Mode Configuration
DEBUG_MODE = os.environ.get('DEBUG', 'false').lower() == 'true'

# Application Paths
APP_NAME = "VoltAI"
APPDATA_DIR = Path(
    os.environ.get('VOLTAI_HOME')
    or Path(os.environ.get('APPDATA', os.path.expanduser('~/.config'))) / APP_NAME
)
LOGS_DIR = APPDATA_DIR / "logs"

# Ensure directories exist
for directory in [APPDATA_DIR, LOGS_DIR]:
    directory.mkdir(parents=True, exist_ok=True)

# Logging Configuration
LOG_FILE = LOGS_DIR / "voltai.log"
DEBUG_FLOW_FILE = LOGS_DIR / "debug_flow.txt"
LOG_FORMAT = "[%(levelname)s %(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# Index Configuration
DEFAULT_INDEX_FILE = "voltai_index.json"
# Plain text, markdown, CSV, JSON and PDF (extracted with pdfplumber)
ALLOWED_EXTENSIONS = frozenset({'.txt', '.md', '.csv', '.json', '.pdf'})
# Norm floor for L2 normalization; all-zero vectors stay all-zero
NORM_EPSILON = 1e-9

# Query Classification Policy
# A query is "general" (whole-corpus summary) when any token is a trigger word
# or when it has fewer than MIN_SPECIFIC_TOKENS tokens.
DEFAULT_TRIGGER_WORDS = frozenset({
    'summarize', 'summarise', 'summary', 'summaries', 'overview',
    'list', 'all', 'documents', 'everything',
})
MIN_SPECIFIC_TOKENS = 3
GENERAL_QUERY_MAX_DOCS = 10  # Context cap for general queries
DEFAULT_TOP_K = 3

# Prompt Assembly
PROMPT_KEYWORDS_PER_DOC = 8
FALLBACK_KEYWORDS_PER_DOC = 6

# AI Model Configuration
OLLAMA_BACKEND = "cli"  # cli | http
OLLAMA_BACKEND_ENV_VAR = "VOLTAI_OLLAMA_BACKEND"
OLLAMA_EXECUTABLE = "ollama"
OLLAMA_API_BASE = "http://localhost:11434"  # Default Ollama API endpoint
OLLAMA_MODEL_NAME = "mistral"  # Hard-coded default when nothing else is found
OLLAMA_MODEL_ENV_VAR = "OLLAMA_MODEL"
OLLAMA_PREFERRED_MODELS = ("llama2:1b", "gemma3:1b", "mistral")  # Fast models first
OLLAMA_TIMEOUT_SECONDS = 600  # 10 minutes for long answers
OLLAMA_PROBE_TIMEOUT_SECONDS = 10

# Parallel Processing Configuration
# Auto-detect: min(cpu_count, 4); file reads and PDF parsing release the GIL
PARALLEL_MAX_WORKERS = min(os.cpu_count() or 4, 4)

# --- YAML Settings File ---
SETTINGS_FILE = Path(
    os.environ.get('VOLTAI_CONFIG')
    or Path(__file__).parent.parent / "config" / "voltai.yaml"
)


class Settings:
    """
    Loads and provides access to user-editable settings.

    Reads the YAML settings file and merges it over DEFAULTS, so any key
    missing from the file (or the whole file) falls back to the built-in
    value.
    """

    DEFAULTS = {
        "index": {
            "allowed_extensions": sorted(ALLOWED_EXTENSIONS),
            "output": DEFAULT_INDEX_FILE,
        },
        "query": {
            "top_k": DEFAULT_TOP_K,
            "trigger_words": sorted(DEFAULT_TRIGGER_WORDS),
            "min_specific_tokens": MIN_SPECIFIC_TOKENS,
            "general_max_docs": GENERAL_QUERY_MAX_DOCS,
        },
        "ollama": {
            "backend": OLLAMA_BACKEND,
            "executable": OLLAMA_EXECUTABLE,
            "api_base": OLLAMA_API_BASE,
            "default_model": OLLAMA_MODEL_NAME,
            "preferred_models": list(OLLAMA_PREFERRED_MODELS),
            "timeout_seconds": OLLAMA_TIMEOUT_SECONDS,
        },
        "parallel": {
            "max_workers": PARALLEL_MAX_WORKERS,
        },
    }

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path else SETTINGS_FILE
        self._params = self._load_params()

    def _load_params(self) -> dict[str, Any]:
        """
        Load settings from the YAML file.

        Returns:
            dict: DEFAULTS with the file's values merged on top
        """
        from voltai.logging_config import debug_log

        if not self.path.exists():
            debug_log(f"[CONFIG] Settings file not found at {self.path}. Using defaults.")
            return _merge({}, self.DEFAULTS)

        try:
            with open(self.path, encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            debug_log(f"[CONFIG] ERROR: Failed to load or parse settings file: {e}")
            return _merge({}, self.DEFAULTS)

        if not isinstance(data, dict):
            debug_log(f"[CONFIG] WARNING: {self.path} is not a mapping. Using defaults.")
            return _merge({}, self.DEFAULTS)

        debug_log(f"[CONFIG] Loaded settings from {self.path}")
        return _merge(data, self.DEFAULTS)

    def get(self, *keys, default=None) -> Any:
        """
        Get a setting by nested keys.

        Example:
            settings.get('query', 'top_k')  # Returns 3
        """
        value = self._params
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    @property
    def allowed_extensions(self) -> frozenset[str]:
        exts = self.get('index', 'allowed_extensions', default=[])
        return frozenset(
            (e if e.startswith('.') else f".{e}").lower() for e in exts
        )

    @property
    def top_k(self) -> int:
        return int(self.get('query', 'top_k', default=DEFAULT_TOP_K))

    @property
    def max_workers(self) -> int:
        # Enforce bounds (1 minimum, 8 maximum)
        workers = int(self.get('parallel', 'max_workers', default=PARALLEL_MAX_WORKERS))
        return max(1, min(8, workers))


def _merge(overrides: dict, defaults: dict) -> dict:
    """Recursively merge ``overrides`` on top of a copy of ``defaults``."""
    merged = {}
    for key, value in defaults.items():
        if isinstance(value, dict):
            section = overrides.get(key)
            merged[key] = _merge(section if isinstance(section, dict) else {}, value)
        elif key in overrides:
            merged[key] = overrides[key]
        else:
            merged[key] = list(value) if isinstance(value, list) else value
    for key, value in overrides.items():
        if key not in merged:
            merged[key] = value
    return merged


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide Settings instance (loaded once)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
