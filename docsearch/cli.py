"""
Command line interface.

    docsearch index  <folder> [-o index.json]
    docsearch search <index-file> [query] [-n TOP]
    docsearch serve  <index-file> [address]
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import config
from .errors import DocSearchError
from .logging_config import setup_logging
from .storage import load_model, save_model
from .tfidf.index_builder import index_folder
from .tfidf.model import document_count
from .tfidf.scorer import TfIdfRanker

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    """argparse type for counts where 0 means "no limit" """
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docsearch", description="TF-IDF document search")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Console log level")
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only")
    subparsers = parser.add_subparsers(dest="command", metavar="SUBCOMMAND")
    subparsers.required = True

    index_parser = subparsers.add_parser("index", help="Index a folder of documents")
    index_parser.add_argument("folder", help="Folder to index (recursively)")
    index_parser.add_argument("-o", "--output", default=config.INDEX_PATH, help="Index file to write")

    search_parser = subparsers.add_parser("search", help="Inspect an index, optionally run a query")
    search_parser.add_argument("index_file", help="Index file to load")
    search_parser.add_argument("query", nargs="?", help="Query text")
    search_parser.add_argument("-n", "--top", type=non_negative_int, default=config.RESULT_LIMIT, help="Number of results to show (0 = all)")

    serve_parser = subparsers.add_parser("serve", help="Serve the search page and API over HTTP")
    serve_parser.add_argument("index_file", help="Index file to load")
    serve_parser.add_argument("address", nargs="?", default=config.DEFAULT_ADDRESS, help="host:port to bind")

    return parser


def parse_address(address: str):
    """Split "host:port" into (host, port)"""
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"Invalid address {address!r}, expected host:port")
    return host, int(port)


def cmd_index(args):
    model = index_folder(args.folder)
    save_model(model, args.output)


def cmd_search(args):
    model = load_model(args.index_file)
    print(f"{args.index_file} contains {document_count(model)} files")

    if args.query:
        for doc_id, rank in TfIdfRanker(model).search(args.query, limit=args.top):
            print(f"{doc_id} => {rank:0.4f}")


def cmd_serve(args):
    import uvicorn

    from .main import create_app

    host, port = parse_address(args.address)
    app = create_app(model=load_model(args.index_file))
    logger.info(f"Listening at address: {host}:{port}")
    uvicorn.run(app, host=host, port=port, log_config=None)


COMMANDS = {
    "index": cmd_index,
    "search": cmd_search,
    "serve": cmd_serve,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        log_file=None if args.no_log_file else config.LOG_FILE,
        console_level=getattr(logging, args.log_level.upper(), logging.INFO),
    )

    try:
        COMMANDS[args.command](args)
    except (DocSearchError, OSError, ValueError) as e:
        print(f"Program failed with error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
