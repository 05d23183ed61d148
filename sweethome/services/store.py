"""Entry stores: a flat JSON document or a SQL table, behind one interface."""

import json
import logging
import threading
from pathlib import Path

import pydantic
from sqlalchemy.orm import sessionmaker

from sweethome.models.entry import EntryRow
from sweethome.schemas.entry import Entry

logger = logging.getLogger(__name__)


class EntryStore:
    """Capability interface the lifecycle service persists through."""

    def load(self) -> dict[str, Entry]:
        raise NotImplementedError

    def save(self, entries: dict[str, Entry]) -> None:
        raise NotImplementedError

    def get(self, entry_id: str) -> Entry | None:
        raise NotImplementedError

    def put(self, entry: Entry) -> None:
        raise NotImplementedError


class JsonEntryStore(EntryStore):
    """Holds every entry in memory and mirrors the whole mapping to one JSON file.

    The mapping is read once when the store is created. Every ``put`` rewrites
    the complete document; there are no partial writes and the last writer wins.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()
        self._entries = self.load()

    def load(self) -> dict[str, Entry]:
        """Read the document. Absent or unreadable files yield an empty mapping."""
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return {entry_id: Entry.model_validate(record) for entry_id, record in raw.items()}
        except (OSError, ValueError, AttributeError, pydantic.ValidationError) as e:
            logger.warning("Ignoring unreadable entry store %s, starting empty: %s", self.path, e)
            return {}

    def save(self, entries: dict[str, Entry]) -> None:
        """Overwrite the document with the given mapping. Write errors propagate."""
        with self._lock:
            snapshot = dict(entries)
            document = {entry_id: entry.model_dump(mode="json", by_alias=True) for entry_id, entry in snapshot.items()}
            self.path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")

    def get(self, entry_id: str) -> Entry | None:
        return self._entries.get(entry_id)

    def put(self, entry: Entry) -> None:
        with self._lock:
            self._entries[entry.id] = entry
            self.save(self._entries)


class SqlEntryStore(EntryStore):
    """Stores each entry as a JSON document in its own SQL row."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def load(self) -> dict[str, Entry]:
        entries = {}
        with self._session_factory() as db:
            for row in db.query(EntryRow).all():
                entry = self._parse(row)
                if entry is not None:
                    entries[entry.id] = entry
        return entries

    def save(self, entries: dict[str, Entry]) -> None:
        with self._session_factory() as db:
            db.query(EntryRow).filter(EntryRow.id.notin_(list(entries))).delete(synchronize_session=False)
            for entry in entries.values():
                self._upsert(db, entry)
            db.commit()

    def get(self, entry_id: str) -> Entry | None:
        with self._session_factory() as db:
            row = db.get(EntryRow, entry_id)
            return self._parse(row) if row else None

    def put(self, entry: Entry) -> None:
        with self._session_factory() as db:
            self._upsert(db, entry)
            db.commit()

    def _upsert(self, db, entry: Entry) -> None:
        row = db.get(EntryRow, entry.id)
        if row is None:
            row = EntryRow(id=entry.id, created_at=entry.created_at)
            db.add(row)
        row.status = entry.status.value
        row.document = entry.model_dump_json(by_alias=True)

    def _parse(self, row: EntryRow) -> Entry | None:
        try:
            return Entry.model_validate_json(row.document)
        except pydantic.ValidationError as e:
            logger.warning("Skipping unreadable entry row %s: %s", row.id, e)
            return None
