#!/usr/bin/env python3
"""Run the kingdom spellers API server.

Word banks, speech and the undo policy are read from SPELLERS_WORD_BANK_FILE,
SPELLERS_SPEECH and SPELLERS_UNDO_POLICY when the app starts.
"""

import argparse

import uvicorn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Serve Kingdom Spellers puzzles over HTTP')
    parser.add_argument('--host', default='0.0.0.0', help='Interface to bind (default: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=8000, help='Port to listen on (default: 8000)')
    parser.add_argument('--no-reload', dest='reload', action='store_false',
                        help='Disable auto-reload on code changes')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    print("Starting Kingdom Spellers API server...")
    print(f"API documentation available at: http://localhost:{args.port}/docs")
    uvicorn.run(
        "server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload
    )


if __name__ == "__main__":
    main()
