"""
Durable snapshot storage for the item store.

The snapshot is a small JSON document with two logical keys, one for the
ordered item collection and one for the item counter. Persistence is best
effort: read problems fall back to an empty ledger and write problems are
reported on stderr, never raised to the caller.
"""
import json
import os
import re
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as ModelValidationError

from .models import InventoryItem, Snapshot, empty_snapshot


ITEMS_KEY = "inventory_items"
COUNTER_KEY = "item_counter"
VERSION_KEY = "version"
SNAPSHOT_VERSION = 1

DEFAULT_LEDGER_FILE = "ledger.json"
LEDGER_ENV_VAR = "INVENTORY_LEDGER"

_ITEM_NUMBER = re.compile(r'^Item (\d+)$')


def default_ledger_path() -> Path:
    """Ledger file from $INVENTORY_LEDGER, else ledger.json in the current directory."""
    configured = os.environ.get(LEDGER_ENV_VAR)
    if configured:
        return Path(configured).expanduser()
    return Path.cwd() / DEFAULT_LEDGER_FILE


def encode_snapshot(items: List[InventoryItem], counter: int) -> Dict[str, Any]:
    """Build the on-disk document for a snapshot."""
    return {
        VERSION_KEY: SNAPSHOT_VERSION,
        ITEMS_KEY: [item.model_dump() for item in items],
        COUNTER_KEY: str(counter),
    }


def next_counter_from_items(items: List[InventoryItem]) -> int:
    """Rebuild a lost counter: one past the highest 'Item n' seen, at least 1."""
    highest = 0
    for item in items:
        match = _ITEM_NUMBER.match(item.name)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest + 1


def decode_snapshot(data: Any) -> Snapshot:
    """
    Turn a parsed JSON document back into a Snapshot.

    Raises:
        ValueError: if the document or any item record is unusable
    """
    if not isinstance(data, dict):
        raise ValueError("snapshot is not a JSON object")

    version = data.get(VERSION_KEY, SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version!r}")

    records = data.get(ITEMS_KEY, [])
    if not isinstance(records, list):
        raise ValueError(f"'{ITEMS_KEY}' is not a list")
    try:
        items = [InventoryItem.model_validate(record) for record in records]
    except ModelValidationError as e:
        raise ValueError(f"invalid item record: {e}") from e

    ids = [item.id for item in items]
    if len(set(ids)) != len(ids):
        raise ValueError("duplicate item ids")

    minimum = next_counter_from_items(items)
    try:
        counter = int(str(data[COUNTER_KEY]).strip())
    except (KeyError, TypeError, ValueError):
        counter = minimum
    # Never hand out a number that is already in use.
    counter = max(counter, minimum)

    return Snapshot(items=items, counter=counter)


class MemoryPersistence:
    """In-process adapter with the same contract as the file adapter."""

    def __init__(self, snapshot: Optional[Snapshot] = None):
        self.document: Optional[Dict[str, Any]] = None
        self.saves = 0
        if snapshot is not None:
            self.document = encode_snapshot(snapshot.items, snapshot.counter)

    def load(self) -> Snapshot:
        if self.document is None:
            return empty_snapshot()
        try:
            return decode_snapshot(self.document)
        except ValueError as e:
            print(f"⚠️  Ignoring stored ledger: {e}", file=sys.stderr)
            return empty_snapshot()

    def save(self, items: List[InventoryItem], counter: int) -> bool:
        self.document = encode_snapshot(items, counter)
        self.saves += 1
        return True


class JsonFilePersistence:
    """Stores the ledger snapshot in a single JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Snapshot:
        """
        Read the snapshot from disk.

        Returns:
            The stored snapshot, or an empty one if the file is missing or
            cannot be used
        """
        if not self.path.exists():
            return empty_snapshot()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return decode_snapshot(data)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            print(f"⚠️  Could not read ledger {self.path}: {e}", file=sys.stderr)
            print("   Starting with an empty ledger", file=sys.stderr)
            return empty_snapshot()

    def save(self, items: List[InventoryItem], counter: int) -> bool:
        """
        Write the snapshot, replacing the previous file in one step.

        Returns:
            True if the write succeeded, False otherwise
        """
        document = encode_snapshot(items, counter)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
            return True
        except OSError as e:
            print(f"⚠️  Failed to save ledger {self.path}: {e}", file=sys.stderr)
            if tmp_name and os.path.exists(tmp_name):
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
            return False
