"""File-based storage implementation."""

import json
import logging
import os
import tempfile
import threading

from core.config import STATE_FILE_ENV
from core.interfaces import Storage

logger = logging.getLogger(__name__)

# Background saves run in the threadpool; one writer at a time
_save_lock = threading.Lock()


class FileStorage(Storage):
    """Keeps the whole quiz state in one JSON file."""

    def __init__(self, state_file: str = None):
        self.state_file = (
            state_file
            or os.environ.get(STATE_FILE_ENV)
            or os.path.expanduser('~/.config/cardquiz/state.json')
        )

    def load_state(self) -> dict | None:
        if not os.path.exists(self.state_file):
            return None
        try:
            with open(self.state_file, 'r', encoding='utf-8') as f:
                state = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read state file {self.state_file}: {e}")
            return None
        if not isinstance(state, dict):
            logger.warning(f"Ignoring state file {self.state_file}: not a JSON object")
            return None
        return state

    def save_state(self, state: dict) -> None:
        directory = os.path.dirname(self.state_file) or '.'
        with _save_lock:
            os.makedirs(directory, exist_ok=True)
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=directory,
                                             suffix='.tmp', delete=False) as f:
                json.dump(state, f, indent=2, ensure_ascii=False)
            os.replace(f.name, self.state_file)
