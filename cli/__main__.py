"""Entry point for cardquiz CLI client."""

import argparse
import sys
from pathlib import Path

import requests

from cli.api_client import CardQuizAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Card Quiz - trading card name and price drill')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument('--user', help='Switch to this player before starting')
    parser.add_argument('--import', dest='import_file', metavar='FILE',
                        help='Replace the deck with a CSV or JSON file and exit')
    parser.add_argument('--export', dest='export_file', metavar='FILE',
                        help='Write the result history as CSV and exit')
    args = parser.parse_args()

    client = CardQuizAPIClient(base_url=args.server)

    try:
        if args.user:
            client.update_settings(user=args.user)

        if args.import_file:
            path = Path(args.import_file)
            fmt = 'json' if path.suffix.lower() == '.json' else 'csv'
            result = client.import_cards(path.read_text(encoding='utf-8'), fmt)
            print(f"Imported {result['imported']} cards")
            return

        if args.export_file:
            Path(args.export_file).write_text(client.export_results(), encoding='utf-8')
            print(f"Wrote {args.export_file}")
            return
    except requests.HTTPError as e:
        print(f"Error: {client.error_detail(e)}")
        sys.exit(1)

    ui = ConsoleUI(client)
    try:
        ui.run()
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
