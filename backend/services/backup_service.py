"""
Backup export and restore.

A snapshot holds every stored record:

    {"version": 1, "timestamp": "<ISO-8601>",
     "data": {"settings": {...} | null, "memories": [...], "plans": [...]}}

Restoring is destructive: the store is wiped and refilled from the snapshot.
The whole snapshot is validated before anything is touched. The wipe and the
re-insert are separate transactions; the store's exclusive lock keeps other
callers out until both are done.
"""

import json
import logging
from typing import Any, Mapping, Union

from core.clock import Clock
from domain.exceptions import ImportValidationError
from domain.value_objects.enums import Collection
from pydantic import ValidationError
from schemas import SNAPSHOT_FORMAT_VERSION, ImportSummary, Snapshot, SnapshotData

from services.persistent_store import PersistentStore

logger = logging.getLogger("BackupCodec")

DEFAULT_FILENAME_PREFIX = "lovesync_backup"

RawSnapshot = Union[Mapping[str, Any], str, bytes, bytearray]


class BackupCodec:
    """Handles backup export and restore for one store."""

    def __init__(self, store: PersistentStore, clock: Clock, filename_prefix: str = DEFAULT_FILENAME_PREFIX):
        self.store = store
        self.clock = clock
        self.filename_prefix = filename_prefix

    async def export(self) -> Snapshot:
        """
        Capture every record currently in the store.

        Returns:
            Snapshot with the current timestamp

        Raises:
            UnreadableRecord: If a stored document no longer validates; a
                snapshot that silently left it out would lose it on restore
        """
        data = SnapshotData(
            settings=await self.store.get_settings(strict=True),
            memories=await self.store.get_all(Collection.MEMORIES, strict=True),
            plans=await self.store.get_all(Collection.PLANS, strict=True),
        )
        snapshot = Snapshot(
            format_version=SNAPSHOT_FORMAT_VERSION,
            exported_at=self.clock.now().isoformat(timespec="seconds"),
            data=data,
        )
        logger.info(f"Exported snapshot with {len(data.memories)} memories and {len(data.plans)} plans")
        return snapshot

    async def export_json(self) -> str:
        """Export rendered as indented JSON text."""
        snapshot = await self.export()
        return json.dumps(snapshot.to_document(), ensure_ascii=False, indent=2)

    def backup_filename(self) -> str:
        """Suggested download name, e.g. lovesync_backup_2024-05-01.json."""
        return f"{self.filename_prefix}_{self.clock.now():%Y-%m-%d}.json"

    @staticmethod
    def parse(raw: RawSnapshot) -> Snapshot:
        """
        Validate a snapshot without touching the store.

        Args:
            raw: Parsed mapping, JSON text or UTF-8 encoded JSON bytes

        Returns:
            Validated snapshot

        Raises:
            ImportValidationError: If the input is not a complete, valid snapshot
        """
        if isinstance(raw, (bytes, bytearray)):
            try:
                raw = bytes(raw).decode("utf-8")
            except UnicodeDecodeError as e:
                raise ImportValidationError("file is not UTF-8 text") from e

        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                raise ImportValidationError(f"not valid JSON ({e.msg} at line {e.lineno})") from e

        if not isinstance(raw, Mapping):
            raise ImportValidationError("top level must be an object")
        if raw.get("data") is None:
            raise ImportValidationError("missing 'data' section")

        try:
            return Snapshot.model_validate(dict(raw))
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            first = errors[0] if errors else {}
            location = ".".join(str(part) for part in first.get("loc", ()))
            raise ImportValidationError(f"{location}: {first.get('msg', 'invalid value')}", errors=errors) from e

    async def import_snapshot(self, raw: RawSnapshot) -> ImportSummary:
        """
        Replace the whole store with the contents of a snapshot.

        Raises:
            ImportValidationError: If the snapshot is invalid (nothing is changed)
            StorageUnavailable: If the store fails part-way through the restore
        """
        snapshot = self.parse(raw)
        data = snapshot.data

        async with self.store.exclusive():
            logger.info("Restoring snapshot: clearing store")
            await self.store.clear_all()
            if data.settings is not None:
                await self.store.save_settings(data.settings)
            for memory in data.memories:
                await self.store.put(Collection.MEMORIES, memory)
            for plan in data.plans:
                await self.store.put(Collection.PLANS, plan)

        summary = ImportSummary(
            settings_restored=data.settings is not None,
            memories=len(data.memories),
            plans=len(data.plans),
        )
        logger.info(
            f"Restored snapshot from {snapshot.exported_at or 'unknown time'}: "
            f"{summary.memories} memories, {summary.plans} plans, settings={summary.settings_restored}"
        )
        return summary
