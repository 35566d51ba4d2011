"""CLI entry point for pdfsearch."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from pdfsearch.config import AppConfig, load_config
from pdfsearch.errors import PdfSearchError
from pdfsearch.indexer import DirectoryWatcher, auto_index_all, index_source
from pdfsearch.service import SearchService, format_outcome

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_PDF = "AGLC4.pdf"


def index(config: AppConfig, pdf: Optional[str] = None) -> None:
    """Build the index for one PDF.

    Args:
        config: Application configuration
        pdf: PDF path; relative paths resolve against the PDF directory
    """
    pdf_path = Path(pdf or DEFAULT_PDF)
    if not pdf_path.is_absolute():
        pdf_path = config.pdf_dir / pdf_path
    if not pdf_path.exists():
        logger.error(f"Missing PDF at {pdf_path}. Place the file and re-run.")
        sys.exit(1)

    result = index_source(pdf_path, config)
    logger.info(f"Indexed {result.source}: {len(result.index)} chunks")


def serve(config: AppConfig, transport: str = "stdio") -> None:
    """Start the MCP server, indexing new or changed PDFs first.

    Args:
        config: Application configuration
        transport: Transport protocol (stdio or sse)
    """
    service = SearchService(config)
    service.get_index()

    if config.auto_index:
        try:
            for result in auto_index_all(config):
                service.on_indexed(result)
        except (PdfSearchError, OSError) as e:
            logger.warning(f"Auto-index error: {e}")
        if config.watch:
            DirectoryWatcher(config, on_indexed=service.on_indexed).start()

    summary = service.summary()
    logger.info(f"[pdfsearch] {summary.render()}")
    if summary.stale and summary.pdf_path:
        logger.info(f"[pdfsearch] Re-index recommended: pdfsearch index --pdf {summary.pdf_path}")

    # Import here to avoid loading MCP unless needed
    from pdfsearch.server import create_mcp_server

    from typing import cast, Literal

    mcp = create_mcp_server(service)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def search(config: AppConfig, query: str, limit: int = 5, source: Optional[str] = None) -> None:
    """Print the top matches for a query."""
    service = SearchService(config)
    print(format_outcome(service.search({"query": query, "limit": limit, "source": source})))


def call(config: AppConfig, arguments: str) -> None:
    """Run the search tool with raw JSON arguments, as an MCP client would."""
    try:
        payload = json.loads(arguments)
    except json.JSONDecodeError as e:
        logger.error(f"Arguments must be a JSON object: {e}")
        sys.exit(2)
    if not isinstance(payload, dict):
        logger.error("Arguments must be a JSON object")
        sys.exit(2)

    service = SearchService(config)
    try:
        outcome = service.search(payload)
    except ValidationError as e:
        logger.error(f"Invalid arguments:\n{e}")
        sys.exit(2)
    print(format_outcome(outcome))


def info(config: AppConfig, source: Optional[str] = None) -> None:
    """Show information about an index."""
    service = SearchService(config)
    path = service.index_path(source)
    summary = service.summary(source)

    print(f"Index: {path}")
    if path.exists():
        print(f"  Size: {path.stat().st_size / 1024:.1f} KB")
    print(f"  {summary.render()}")
    if summary.pdf_path:
        print(f"  PDF: {summary.pdf_path}")
    if summary.stale:
        print(f"  Re-index recommended: pdfsearch index --pdf {summary.pdf_path}")


def deck() -> None:
    """Launch the Search Deck TUI for interactive indexing and querying."""
    from pdfsearch.search_deck import main as search_deck_main

    search_deck_main()


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="pdfsearch",
        description="pdfsearch - offline full-text search over PDFs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # index command
    index_parser = subparsers.add_parser(
        "index",
        help="Build the search index for a PDF",
    )
    index_parser.add_argument(
        "--pdf",
        default=None,
        help=f"PDF to index (default: $PDF_PATH or {DEFAULT_PDF} in the PDF directory)",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the MCP server",
    )
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="Query an index from the command line",
    )
    search_parser.add_argument("query", nargs="+", help="Search query")
    search_parser.add_argument("-n", "--limit", type=int, default=5, help="Max results (default: 5)")
    search_parser.add_argument("--source", default=None, help="Document name or PDF path")

    # call command
    call_parser = subparsers.add_parser(
        "call",
        help="Run the search tool with JSON arguments",
    )
    call_parser.add_argument("arguments", help='e.g. \'{"query": "neutral citation", "limit": 3}\'')

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show information about an index",
    )
    info_parser.add_argument("--source", default=None, help="Document name or PDF path")

    # deck command
    subparsers.add_parser(
        "deck",
        help="Launch the Search Deck TUI",
    )

    args = parser.parse_args()

    if args.command == "deck":
        deck()
        return

    config = load_config()
    try:
        if args.command == "index":
            index(config, args.pdf or os.environ.get("PDF_PATH"))
        elif args.command == "serve":
            serve(config, args.transport)
        elif args.command == "search":
            search(config, " ".join(args.query), args.limit, args.source)
        elif args.command == "call":
            call(config, args.arguments)
        elif args.command == "info":
            info(config, args.source)
    except PdfSearchError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
