"""Pydantic schemas for entry records and endpoints."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EntryStatus(str, Enum):
    UPLOADED = "UPLOADED"
    PROCESSING = "PROCESSING"
    READY = "READY"
    FAILED = "FAILED"
    REPLIED = "REPLIED"


class AudioInfo(CamelModel):
    filename: str
    original_name: str
    content_type: str | None = None
    local_path: str


class AiResult(CamelModel):
    summary3: list[str] = []
    emotion: str | None = None
    quick_replies: list[str] = []


class SentMessage(CamelModel):
    text: str | None = None
    sent_at: str | None = None


class EntryMeta(CamelModel):
    demo_mode: bool = True
    processing_ms: int | None = None


class Entry(CamelModel):
    """A voice check-in and its derived analysis and reply state."""

    id: str
    created_at: str
    status: EntryStatus = EntryStatus.UPLOADED
    audio: AudioInfo
    transcript: str | None = None
    ai: AiResult = Field(default_factory=AiResult)
    reply: SentMessage = Field(default_factory=SentMessage)
    notification: SentMessage = Field(default_factory=SentMessage)
    meta: EntryMeta = Field(default_factory=EntryMeta)


class ProcessRequest(CamelModel):
    # Kept raw: only a JSON false disables demo mode
    demo_mode: Any = None


class ReplyRequest(CamelModel):
    text: str | None = None


class EntryCreatedResponse(CamelModel):
    id: str
    status: EntryStatus


class ProcessResponse(CamelModel):
    id: str
    status: EntryStatus
    ai: AiResult
    meta: EntryMeta


class ReplyResponse(CamelModel):
    id: str
    status: EntryStatus
    notification: SentMessage
