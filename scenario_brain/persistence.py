"""
Profile Persistence

Export and import persona profiles as JSON documents:

    {
      "schemaVersion": 1,
      "exportedAt": "2026-01-01T12:00:00",
      "summary": "Persona summary: ...",
      "profile": { ...full profile record... }
    }

Re-importing an exported document reconstructs an equal Profile.
"""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .narrative import describe_persona
from .profile import Profile, ProfileValidationError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class ProfileImportError(ValueError):
    """Raised when a profile document cannot be read back."""
    pass


def slugify(text: str) -> str:
    return re.sub(r'[^a-z0-9]+', '-', text.lower()).strip('-')


def export_filename(profile: Profile) -> str:
    """neural-profile-<background or age-group slug>.json"""
    source = profile.background.strip() or f"{profile.age_group.value} persona"
    return f"neural-profile-{slugify(source) or 'character'}.json"


def build_export_document(profile: Profile, exported_at: Optional[datetime] = None) -> Dict[str, Any]:
    return {
        'schemaVersion': SCHEMA_VERSION,
        'exportedAt': (exported_at or datetime.now()).isoformat(),
        'summary': describe_persona(profile),
        'profile': profile.to_dict(),
    }


def parse_export_document(document: Any) -> Profile:
    """
    Rebuild a Profile from an export document or a bare profile record.

    Raises:
        ProfileImportError: unsupported schema version or malformed record
    """
    if not isinstance(document, dict):
        raise ProfileImportError(f"Expected a JSON object, got {type(document).__name__}")

    if 'profile' in document:
        version = document.get('schemaVersion', SCHEMA_VERSION)
        if version != SCHEMA_VERSION:
            raise ProfileImportError(
                f"Unsupported schemaVersion {version!r} (expected {SCHEMA_VERSION})"
            )
        record = document['profile']
    else:
        record = document

    try:
        return Profile.from_dict(record)
    except ProfileValidationError as e:
        raise ProfileImportError(f"Invalid profile record: {e}") from e


class ProfilePersistence:
    """
    Reads and writes profile documents in an export directory.

    Existing files are rotated to .backupN before being overwritten.
    """

    def __init__(self, export_directory: Union[str, Path] = "./profiles", max_backups: int = 3):
        self.export_directory = Path(export_directory)
        self.max_backups = max_backups

    def export(self, profile: Profile, filepath: Optional[Union[str, Path]] = None,
               create_backup: bool = True) -> str:
        """
        Write the export document for profile.

        Args:
            profile: Profile to export
            filepath: Optional explicit path; defaults to export_filename()
                inside the export directory
            create_backup: Rotate an existing file before overwriting

        Returns:
            Path of the written file
        """
        if filepath is None:
            filepath = self.export_directory / export_filename(profile)
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        if create_backup and filepath.exists():
            self._rotate_backups(filepath)

        document = build_export_document(profile)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2, ensure_ascii=False)

        logger.info(f"Exported profile to {filepath}")
        return str(filepath)

    def load(self, filepath: Union[str, Path]) -> Profile:
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Profile file not found: {filepath}")

        try:
            with open(filepath, encoding='utf-8') as f:
                document = json.load(f)
        except UnicodeDecodeError as e:
            raise ProfileImportError(f"{filepath} is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise ProfileImportError(f"{filepath} is not valid JSON: {e}") from e

        profile = parse_export_document(document)
        logger.info(f"Imported profile from {filepath}")
        return profile

    def list_exports(self) -> List[Dict[str, Any]]:
        """Exported profiles in the directory, newest first."""
        exports = []
        if not self.export_directory.exists():
            return exports
        for path in self.export_directory.glob("neural-profile-*.json"):
            try:
                with open(path, encoding='utf-8') as f:
                    document = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Skipping unreadable export {path}: {e}")
                continue
            if not isinstance(document, dict):
                continue
            exports.append({
                'path': str(path),
                'name': path.stem,
                'exported_at': document.get('exportedAt', ''),
                'summary': document.get('summary', ''),
            })
        return sorted(exports, key=lambda x: x['exported_at'], reverse=True)

    def _rotate_backups(self, filepath: Path):
        for i in range(self.max_backups - 1, 0, -1):
            old_backup = filepath.with_suffix(f'.backup{i}')
            new_backup = filepath.with_suffix(f'.backup{i + 1}')
            if old_backup.exists():
                old_backup.replace(new_backup)
        filepath.replace(filepath.with_suffix('.backup1'))


def export_profile(profile: Profile, filepath: Optional[Union[str, Path]] = None,
                   directory: Union[str, Path] = "./profiles") -> str:
    """Export with a throwaway ProfilePersistence."""
    return ProfilePersistence(export_directory=directory).export(profile, filepath)


def import_profile(filepath: Union[str, Path]) -> Profile:
    """Load a profile document from filepath."""
    return ProfilePersistence().load(filepath)
