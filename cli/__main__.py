"""Entry point for kingdom spellers CLI client."""

import argparse
import sys

from cli.api_client import SpellersAPIClient
from cli.console import ConsoleUI


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Play Kingdom Spellers in the terminal: fill the blanks of each '
                    'word with numbered letter tiles, earn xp and keep your three lives.'
    )
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Game server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='Player name; each player has their own puzzle and lives (default: default)'
    )
    parser.add_argument(
        '--grade',
        type=int,
        default=None,
        help='Word bank grade to start with (default: the server\'s starting grade)'
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    client = SpellersAPIClient(base_url=args.server, user_id=args.user)
    ui = ConsoleUI(client, grade=args.grade)

    try:
        ui.run()
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
