"""
VoltAI - local, offline document index with Ollama-backed answers.

Builds a sparse term-weight index over a directory of text-like files and
answers queries by cosine-similarity retrieval, optionally forwarding the
retrieved context to a local Ollama model.
"""

__version__ = "0.3.0"
