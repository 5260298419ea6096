#!/usr/bin/env python3
"""Install a CSV or JSON deck into the local state file without the server."""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.errors import CardImportError
from core.importer import parse_cards
from core.models import QuizState
from server.file_storage import FileStorage


def main():
    parser = argparse.ArgumentParser(description='Import a card deck into the quiz state')
    parser.add_argument('deck', help='CSV or JSON deck file')
    parser.add_argument('--state-file', help='State file (default: $CARDQUIZ_STATE_FILE or ~/.config/cardquiz/state.json)')
    args = parser.parse_args()

    path = Path(args.deck)
    fmt = 'json' if path.suffix.lower() == '.json' else 'csv'
    try:
        cards = parse_cards(path.read_text(encoding='utf-8'), fmt)
    except CardImportError as e:
        print(f"Import failed: {e}")
        return 1

    storage = FileStorage(args.state_file)
    saved = storage.load_state()
    state = QuizState.from_dict(saved) if saved else QuizState()
    state.replace_cards(cards)
    storage.save_state(state.to_dict())

    print(f"Imported {len(cards)} cards into {storage.state_file}")
    print("Miss counts were reset; result history was kept.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
