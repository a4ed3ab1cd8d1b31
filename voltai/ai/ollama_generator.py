"""
Ollama Generator for VoltAI
Sends a finished prompt to a local Ollama install and returns the answer.

Two backends, chosen by the constructor argument, then the
VOLTAI_OLLAMA_BACKEND environment variable, then the 'ollama.backend' setting:
- cli:  runs `ollama run <model> <prompt>` as a subprocess (default; works
        wherever the ollama binary is on PATH, no server port needed)
- http: posts to <api_base>/api/generate with requests

Model selection (first match wins):
1. Explicit override (--model)
2. OLLAMA_MODEL environment variable
3. First installed model from the preferred list
4. Any installed model
5. Hard-coded default "mistral"

No retries: a failed call raises GenerationError and the caller decides
whether to fall back.
"""

import os
import subprocess
import time

import requests

from voltai.config import (
    OLLAMA_BACKEND_ENV_VAR,
    OLLAMA_MODEL_ENV_VAR,
    OLLAMA_MODEL_NAME,
    OLLAMA_PROBE_TIMEOUT_SECONDS,
    Settings,
    get_settings,
)
from voltai.errors import GenerationError
from voltai.logging_config import debug_log, info

BACKENDS = ("cli", "http")


class OllamaGenerator:
    """
    Text generation through a local Ollama install.

    Args:
        backend: "cli" or "http" (defaults to the configured backend)
        settings: Settings instance (defaults to the process-wide settings)

    Example:
        generator = OllamaGenerator()
        model = generator.select_model()
        answer = generator.generate("Explain docker containers", model)
    """

    def __init__(self, backend: str | None = None, settings: Settings | None = None):
        settings = settings or get_settings()
        # Explicit argument, then environment, then settings file
        backend = (
            backend
            or os.environ.get(OLLAMA_BACKEND_ENV_VAR)
            or settings.get('ollama', 'backend', default="cli")
        )
        self.backend = str(backend).strip().lower()
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown Ollama backend '{self.backend}' (expected one of {BACKENDS})")

        self.executable = settings.get('ollama', 'executable', default="ollama")
        self.api_base = str(settings.get('ollama', 'api_base')).rstrip('/')
        self.default_model = settings.get('ollama', 'default_model', default=OLLAMA_MODEL_NAME)
        self.preferred_models = list(settings.get('ollama', 'preferred_models', default=[]))
        self.timeout = settings.get('ollama', 'timeout_seconds')

    # -------------------------------------------------------------------------
    # Model discovery
    # -------------------------------------------------------------------------

    def list_models(self) -> list[str]:
        """
        Names of the models installed in Ollama.

        Returns an empty list when Ollama cannot be reached; probing is
        best-effort and only feeds model selection.
        """
        if self.backend == "http":
            return self._list_models_http()
        return self._list_models_cli()

    def _list_models_cli(self) -> list[str]:
        try:
            completed = subprocess.run(
                [self.executable, "list"],
                capture_output=True,
                text=True,
                timeout=OLLAMA_PROBE_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            debug_log(f"[OLLAMA] Could not list models: {e}")
            return []

        if completed.returncode != 0:
            debug_log(f"[OLLAMA] 'ollama list' exited with {completed.returncode}")
            return []

        models = []
        for line in completed.stdout.splitlines():
            parts = line.split()
            # First column is the model name; skip the NAME header
            if parts and parts[0].lower() != "name":
                models.append(parts[0])

        debug_log(f"[OLLAMA] Found {len(models)} models: {models}")
        return models

    def _list_models_http(self) -> list[str]:
        try:
            response = requests.get(f"{self.api_base}/api/tags", timeout=OLLAMA_PROBE_TIMEOUT_SECONDS)
        except requests.exceptions.RequestException as e:
            debug_log(f"[OLLAMA] Connection error: Cannot reach {self.api_base}: {e}")
            return []

        if response.status_code != 200:
            debug_log(f"[OLLAMA] Listing models failed: Status {response.status_code}")
            return []

        try:
            body = response.json()
        except ValueError as e:
            debug_log(f"[OLLAMA] Listing models failed: unreadable response: {e}")
            return []

        entries = body.get('models', []) if isinstance(body, dict) else []
        if not isinstance(entries, list):
            entries = []
        models = [m['name'] for m in entries if isinstance(m, dict) and 'name' in m]
        debug_log(f"[OLLAMA] Found {len(models)} models: {models}")
        return models

    def select_model(self, override: str | None = None) -> str:
        """
        Choose the model to run.

        Args:
            override: Explicit model name; wins over everything else

        Returns:
            Model name (never empty)
        """
        if override:
            return override

        from_env = os.environ.get(OLLAMA_MODEL_ENV_VAR)
        if from_env:
            return from_env

        installed = self.list_models()
        for preferred in self.preferred_models:
            for name in installed:
                if name == preferred or name == f"{preferred}:latest":
                    return name

        if installed:
            return installed[0]

        return self.default_model

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(self, prompt: str, model: str | None = None) -> str:
        """
        Run the prompt through Ollama.

        Args:
            prompt: Finished prompt text
            model: Model name (selected automatically when omitted)

        Returns:
            The model's output text

        Raises:
            GenerationError: If Ollama cannot be started or reports failure
        """
        model = model or self.select_model()

        debug_log(f"\n[OLLAMA GENERATE] Backend: {self.backend}, model: {model}")
        debug_log(f"[OLLAMA GENERATE] Prompt length: {len(prompt)} chars")

        start_time = time.perf_counter()
        if self.backend == "http":
            output = self._generate_http(prompt, model)
        else:
            output = self._generate_cli(prompt, model)
        elapsed = time.perf_counter() - start_time

        info(f"[OLLAMA GENERATE] {model} answered in {elapsed:.1f}s ({len(output)} chars)")
        return output

    def _generate_cli(self, prompt: str, model: str) -> str:
        try:
            completed = subprocess.run(
                [self.executable, "run", model, prompt],
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise GenerationError(f"ollama timed out after {self.timeout}s") from e
        except OSError as e:
            raise GenerationError(f"failed to invoke ollama: {e}") from e

        if completed.returncode != 0:
            raise GenerationError(f"ollama failed: {completed.stderr.strip()}")

        return completed.stdout

    def _generate_http(self, prompt: str, model: str) -> str:
        payload = {
            "model": model,
            "prompt": prompt,
            "stream": False,  # Non-streaming to avoid UTF-8 issues
        }
        try:
            response = requests.post(f"{self.api_base}/api/generate", json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise GenerationError(f"Ollama timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise GenerationError(f"Cannot reach Ollama at {self.api_base}: {e}") from e

        if response.status_code != 200:
            raise GenerationError(f"Ollama returned status {response.status_code}: {response.text}")

        try:
            body = response.json()
        except ValueError as e:
            raise GenerationError(f"Ollama returned an unreadable response: {e}") from e
        if not isinstance(body, dict):
            raise GenerationError(f"Ollama returned an unexpected response: {body!r}")
        return body.get('response', '')
