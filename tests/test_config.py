"""
Tests for the YAML-backed Settings.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from voltai.config import DEFAULT_TOP_K, Settings


def write_settings(tmp_path, content: str) -> Path:
    path = tmp_path / "voltai.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestSettings:
    """Tests for Settings loading and accessors."""

    def test_defaults_without_file(self, tmp_path):
        """A missing file gives the built-in defaults."""
        settings = Settings(tmp_path / "missing.yaml")
        assert settings.top_k == DEFAULT_TOP_K
        assert settings.get('ollama', 'backend') in ("cli", "http")
        assert ".pdf" in settings.allowed_extensions

    def test_file_values_merge_over_defaults(self, tmp_path):
        """Keys in the file override; missing keys keep their defaults."""
        settings = Settings(write_settings(tmp_path, "query:\n  top_k: 5\n"))
        assert settings.top_k == 5
        assert "summarize" in settings.get('query', 'trigger_words')
        assert settings.get('ollama', 'default_model') == "mistral"

    def test_missing_key_returns_default(self, tmp_path):
        """get() falls back to the given default."""
        settings = Settings(tmp_path / "missing.yaml")
        assert settings.get('query', 'nope', default=7) == 7
        assert settings.get('nope') is None

    def test_broken_yaml_uses_defaults(self, tmp_path):
        """Unparseable YAML is ignored."""
        settings = Settings(write_settings(tmp_path, "query: [unclosed\n"))
        assert settings.top_k == DEFAULT_TOP_K

    def test_non_mapping_uses_defaults(self, tmp_path):
        """A top-level list is ignored."""
        settings = Settings(write_settings(tmp_path, "- a\n- b\n"))
        assert settings.top_k == DEFAULT_TOP_K

    def test_non_mapping_section_uses_defaults(self, tmp_path):
        """A scalar where a section is expected keeps the section's defaults."""
        settings = Settings(write_settings(tmp_path, "query: 5\n"))
        assert settings.top_k == DEFAULT_TOP_K

    def test_extensions_are_normalized(self, tmp_path):
        """Extensions gain a leading dot and are lowercased."""
        settings = Settings(write_settings(tmp_path, "index:\n  allowed_extensions: [TXT, .Md]\n"))
        assert settings.allowed_extensions == frozenset({".txt", ".md"})

    def test_max_workers_is_clamped(self, tmp_path):
        """Worker count stays between 1 and 8."""
        assert Settings(write_settings(tmp_path, "parallel:\n  max_workers: 99\n")).max_workers == 8
        assert Settings(write_settings(tmp_path, "parallel:\n  max_workers: 0\n")).max_workers == 1

    def test_repository_settings_file_loads(self):
        """The shipped config/voltai.yaml is valid."""
        settings = Settings(Path(__file__).parent.parent / "config" / "voltai.yaml")
        assert settings.get('ollama', 'preferred_models')[0] == "llama2:1b"
        assert settings.top_k == 3
