"""Entry API endpoints."""

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from sweethome.config import get_settings
from sweethome.rate_limit import limiter
from sweethome.schemas.entry import (
    Entry,
    EntryCreatedResponse,
    ProcessRequest,
    ProcessResponse,
    ReplyRequest,
    ReplyResponse,
)
from sweethome.services.entry import EntryService, get_entry_service

router = APIRouter(prefix="/v1/entries", tags=["Entries"])


@router.post("", response_model=EntryCreatedResponse)
@limiter.limit(get_settings().UPLOAD_RATE_LIMIT)
async def create_entry(
    request: Request,
    audio: UploadFile | None = File(None),
    demo_mode: str | None = Form(None, alias="demoMode"),
    service: EntryService = Depends(get_entry_service),
) -> EntryCreatedResponse:
    """Upload a voice check-in. `demoMode` is off only for the literal "false"."""
    stored = await service.receiver.receive(audio)
    entry = service.create(stored, demo_mode)
    return EntryCreatedResponse(id=entry.id, status=entry.status)


@router.post("/{entry_id}/process", response_model=ProcessResponse)
def process_entry(
    entry_id: str,
    body: ProcessRequest | None = None,
    service: EntryService = Depends(get_entry_service),
) -> ProcessResponse:
    """Analyze an entry. Only demo mode is implemented; otherwise 501."""
    entry = service.process(entry_id, body.demo_mode if body else None)
    return ProcessResponse(id=entry.id, status=entry.status, ai=entry.ai, meta=entry.meta)


@router.get("/{entry_id}", response_model=Entry)
def get_entry(
    entry_id: str,
    service: EntryService = Depends(get_entry_service),
) -> Entry:
    """Get the full entry record."""
    return service.get(entry_id)


@router.post("/{entry_id}/reply", response_model=ReplyResponse)
def reply_entry(
    entry_id: str,
    body: ReplyRequest | None = None,
    service: EntryService = Depends(get_entry_service),
) -> ReplyResponse:
    """Send a family member's reply."""
    entry = service.reply(entry_id, body.text if body else None)
    return ReplyResponse(id=entry.id, status=entry.status, notification=entry.notification)
