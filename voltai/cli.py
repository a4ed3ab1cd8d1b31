"""
VoltAI command-line interface.

Subcommands:
    index      Build an index over a directory and write it to a JSON file
    query      Answer a question from an index (Ollama, or keyword fallback)
    stats      Show document count, vocabulary size and most common terms
    entities   List named entities found in a file
    sentiment  Lexicon sentiment of a file
    summarize  Extractive summary of a file

Errors are printed to stderr and give exit code 1.
"""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from voltai import __version__
from voltai.config import DEFAULT_INDEX_FILE, get_settings
from voltai.errors import VoltAIError
from voltai.index import index_directory, load_index
from voltai.logging_config import close_debug_log, debug_log
from voltai.nlp import analyze_sentiment, extract_entities, summarize_text
from voltai.qa import QueryEngine

STATS_TOP_TERMS = 10


def _default_index_file() -> str:
    return str(get_settings().get('index', 'output', default=DEFAULT_INDEX_FILE))


def _print_progress(completed: int, total: int, path: str):
    print(f"  [{completed}/{total}] {Path(path).name}", file=sys.stderr)


def cmd_index(args: argparse.Namespace) -> int:
    progress = None if args.quiet else _print_progress
    index = index_directory(args.dir, args.out, progress=progress)
    print(f"Indexed {index.document_count} documents ({len(index.vocabulary)} terms) -> {args.out}")
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    engine = QueryEngine(index_path=args.index)
    answer = engine.answer(args.q, k=args.k, model=args.model, generate=not args.no_generate)

    print(answer.answer)
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    index = load_index(args.index)
    vocabulary = index.vocabulary
    print(f"Documents: {index.document_count}")
    print(f"Vocabulary: {len(vocabulary)} terms")
    if len(vocabulary):
        print("Most common terms (document frequency):")
        for term in vocabulary.terms[:STATS_TOP_TERMS]:
            print(f"  {term}: {vocabulary.document_frequency.get(term, 0)}")
    return 0


def cmd_entities(args: argparse.Namespace) -> int:
    entities = extract_entities(args.file)
    print(json.dumps([asdict(e) for e in entities], indent=2, ensure_ascii=False))
    return 0


def cmd_sentiment(args: argparse.Namespace) -> int:
    sentiment = analyze_sentiment(args.file)
    print(json.dumps(asdict(sentiment), indent=2))
    return 0


def cmd_summarize(args: argparse.Namespace) -> int:
    print(summarize_text(args.file))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voltai",
        description="VoltAI - local offline document index and question answering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Index a folder of notes
  voltai index --dir ./docs --out voltai_index.json

  # Ask a question (uses OLLAMA_MODEL or the first installed preferred model)
  voltai query --q "Explain docker containers" --k 2

  # Whole-corpus overview without calling Ollama
  voltai query --q "summarize all documents" --no-generate

  # Debug mode (verbose logging)
  DEBUG=true voltai query --q "kubernetes deployment best practices"
        """
    )
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest='command', required=True)

    index_parser = subparsers.add_parser('index', help='Build an index over a directory')
    index_parser.add_argument('-d', '--dir', required=True, help='Directory of documents to index')
    index_parser.add_argument(
        '-o', '--out',
        default=_default_index_file(),
        help=f'Output index file (default: {DEFAULT_INDEX_FILE})'
    )
    index_parser.add_argument('--quiet', action='store_true', help='Do not print per-file progress')
    index_parser.set_defaults(func=cmd_index)

    query_parser = subparsers.add_parser('query', help='Answer a question from an index')
    query_parser.add_argument('-i', '--index', default=_default_index_file(), help='Index file to query')
    query_parser.add_argument('-q', '--q', required=True, help='Question or request')
    query_parser.add_argument('-k', '--k', type=int, default=None, help='Documents to use for specific queries')
    query_parser.add_argument('-m', '--model', default=None, help='Ollama model to run (overrides OLLAMA_MODEL)')
    query_parser.add_argument(
        '--no-generate',
        action='store_true',
        help='Skip Ollama and print the keyword description of the selected documents'
    )
    query_parser.set_defaults(func=cmd_query)

    stats_parser = subparsers.add_parser('stats', help='Show index statistics')
    stats_parser.add_argument('-i', '--index', default=_default_index_file(), help='Index file to inspect')
    stats_parser.set_defaults(func=cmd_stats)

    for name, func, help_text in (
        ('entities', cmd_entities, 'List named entities in a file'),
        ('sentiment', cmd_sentiment, 'Analyze the sentiment of a file'),
        ('summarize', cmd_summarize, 'Summarize a file'),
    ):
        nlp_parser = subparsers.add_parser(name, help=help_text)
        nlp_parser.add_argument('file', help='Text, markdown, CSV, JSON or PDF file')
        nlp_parser.set_defaults(func=func)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return args.func(args)
    except (VoltAIError, OSError) as e:
        debug_log(f"[CLI] {args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        close_debug_log()


if __name__ == "__main__":
    sys.exit(main())
