"""Entry lifecycle service: create, process, get and reply."""

import logging
import random
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from sweethome.config import get_settings
from sweethome.errors import NotFoundError, ProcessingNotImplementedError, ValidationError
from sweethome.schemas.entry import AudioInfo, Entry, EntryMeta, EntryStatus
from sweethome.services.analyzer import analyze_demo
from sweethome.services.store import EntryStore, JsonEntryStore, SqlEntryStore
from sweethome.services.upload import UploadReceiver

logger = logging.getLogger(__name__)

REPLY_NOTIFICATION_TEXT = "孩子已回應 ❤️"


def now_iso() -> str:
    """Current UTC time as ISO 8601 with milliseconds and a 'Z' suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_entry_id() -> str:
    """Timestamp prefix plus a 3-digit random suffix, e.g. ``e_20261019081530_042``."""
    ts = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"e_{ts}_{random.randint(0, 999):03d}"


def parse_demo_mode_field(value: str | None) -> bool:
    """Form field rule: only the literal string "false" turns demo mode off."""
    return value != "false"


def resolve_demo_mode(override: Any, stored: bool | None) -> bool:
    """Explicit override first, then the entry's stored flag, then demo mode on.

    Only a literal ``False`` turns demo mode off; any other non-null override keeps it on.
    """
    value = override if override is not None else stored
    return value is not False


class EntryService:
    """Owns the entry state machine and is the only writer to the store.

    UPLOADED -> PROCESSING -> READY | FAILED, and any state -> REPLIED.
    """

    def __init__(self, store: EntryStore, receiver: UploadReceiver) -> None:
        self.store = store
        self.receiver = receiver
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _entry_lock(self, entry_id: str) -> Iterator[None]:
        """Serialize mutations of one known entry. Unknown ids raise before a lock is made."""
        self._require(entry_id)
        with self._locks_guard:
            lock = self._locks.setdefault(entry_id, threading.Lock())
        with lock:
            yield

    def _require(self, entry_id: str) -> Entry:
        entry = self.store.get(entry_id)
        if entry is None:
            raise NotFoundError("entry not found")
        return entry

    def create(self, audio: AudioInfo, demo_mode: str | None = None) -> Entry:
        """Create an UPLOADED entry for a stored audio file and persist it."""
        entry = Entry(
            id=generate_entry_id(),
            created_at=now_iso(),
            status=EntryStatus.UPLOADED,
            audio=audio,
            meta=EntryMeta(demo_mode=parse_demo_mode_field(demo_mode)),
        )
        self.store.put(entry)
        logger.info("Created entry %s for %s", entry.id, audio.original_name)
        return entry

    def process(self, entry_id: str, demo_mode: Any = None) -> Entry:
        """Run analysis on an entry.

        The PROCESSING status is persisted before analysis starts, so an
        interrupted run stays visible as PROCESSING. With demo mode off the
        entry is marked FAILED and ProcessingNotImplementedError is raised.
        """
        with self._entry_lock(entry_id):
            entry = self._require(entry_id)
            effective_demo_mode = resolve_demo_mode(demo_mode, entry.meta.demo_mode)

            entry.status = EntryStatus.PROCESSING
            self.store.put(entry)
            start = time.monotonic()

            if not effective_demo_mode:
                entry.status = EntryStatus.FAILED
                entry.meta.processing_ms = int((time.monotonic() - start) * 1000)
                self.store.put(entry)
                logger.info("Entry %s failed: non-demo processing requested", entry_id)
                raise ProcessingNotImplementedError("non-demo processing not implemented yet")

            analysis = analyze_demo(entry.audio.original_name)
            entry.transcript = analysis.transcript
            entry.ai = analysis.to_ai_result()
            entry.status = EntryStatus.READY
            entry.meta.processing_ms = int((time.monotonic() - start) * 1000)
            self.store.put(entry)

        logger.info("Entry %s ready (emotion=%s)", entry_id, entry.ai.emotion)
        return entry

    def get(self, entry_id: str) -> Entry:
        return self._require(entry_id)

    def reply(self, entry_id: str, text: str | None) -> Entry:
        """Record a family member's reply and the notification sent back."""
        with self._entry_lock(entry_id):
            entry = self._require(entry_id)
            text = (text or "").strip()
            if not text:
                raise ValidationError("text is required")

            entry.reply.text = text
            entry.reply.sent_at = now_iso()
            entry.status = EntryStatus.REPLIED
            entry.notification.text = REPLY_NOTIFICATION_TEXT
            entry.notification.sent_at = now_iso()
            self.store.put(entry)

        logger.info("Entry %s replied", entry_id)
        return entry


def build_store() -> EntryStore:
    """Create the store selected by STORE_BACKEND."""
    settings = get_settings()
    if settings.STORE_BACKEND == "sql":
        from sweethome.database import make_session_factory

        return SqlEntryStore(make_session_factory(settings.DATABASE_URL, echo=settings.DEBUG))
    return JsonEntryStore(settings.DB_PATH)


_entry_service: EntryService | None = None


def get_entry_service() -> EntryService:
    """Get singleton entry service instance."""
    global _entry_service
    if _entry_service is None:
        settings = get_settings()
        _entry_service = EntryService(build_store(), UploadReceiver(settings.UPLOAD_DIR))
    return _entry_service
