#!/usr/bin/env python3
"""
Migrate a browser backup (thaiMasterData / thai_vocab_backup.json) into
the server-side vocabulary storage.

Browser backups use camelCase keys (folderId, partOfSpeech, dateAdded, ...);
this script converts them and merges cards and folders whose ids are new.

Usage:
    cd backend
    python scripts/migrate_local_storage.py ~/Downloads/thai_vocab_backup.json

    # Preview without writing:
    python scripts/migrate_local_storage.py backup.json --dry-run
"""

import argparse
import json
import sys
from pathlib import Path

from thaimaster.core.vocab import VocabCard, VocabData, VocabFolder, VocabService, VocabStorage

CARD_KEY_MAP = {
    "folderId": "folder_id",
    "partOfSpeech": "part_of_speech",
    "exampleThai": "example_thai",
    "exampleEnglish": "example_english",
    "dateAdded": "date_added",
}

FOLDER_KEY_MAP = {
    "createdAt": "created_at",
}


def convert_keys(raw: dict, key_map: dict) -> dict:
    """Rename camelCase keys; snake_case keys pass through."""
    return {key_map.get(key, key): value for key, value in raw.items()}


def load_backup(path: Path) -> VocabData:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if "vocabulary" not in raw:
        raise ValueError("Backup has no 'vocabulary' list")

    return VocabData(
        vocabulary=[VocabCard(**convert_keys(c, CARD_KEY_MAP)) for c in raw["vocabulary"]],
        folders=[VocabFolder(**convert_keys(f, FOLDER_KEY_MAP)) for f in raw.get("folders") or []],
    )


def migrate(backup_path: Path, storage_path: Path = None, dry_run: bool = False) -> bool:
    try:
        data = load_backup(backup_path)
    except (OSError, ValueError, TypeError) as e:
        print(f"Could not read backup {backup_path}: {e}")
        return False

    print(f"Backup contains {len(data.vocabulary)} cards and {len(data.folders)} folders")
    if dry_run:
        return True

    service = VocabService(VocabStorage(storage_path))
    summary = service.import_data(data)
    print(f"Imported {summary.cards_added} new cards and {summary.folders_added} new folders")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import a browser vocabulary backup")
    parser.add_argument("backup", type=Path, help="Path to the exported JSON file")
    parser.add_argument("--storage", type=Path, default=None, help="Vocabulary file (default from settings)")
    parser.add_argument("--dry-run", action="store_true", help="Only report what would be imported")
    args = parser.parse_args()

    success = migrate(args.backup, args.storage, args.dry_run)
    sys.exit(0 if success else 1)
