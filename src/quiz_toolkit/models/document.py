"""
Document models for the ingestion pipeline.

These represent data at each stage:
  Uploaded file → Document (stored) → Chunk (split + embedded)
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from quiz_toolkit.utils.helpers import utc_now


class DocumentType(str, Enum):
    """What kind of training material a document is."""

    MANUAL = "manual"
    CLUB_PROCEDURE = "club_procedure"
    LEADERSHIP = "leadership"
    BYLAWS = "bylaws"
    PROJECT_GUIDE = "project_guide"
    OTHER = "other"


class Document(BaseModel):
    """
    An uploaded training document.

    Owns its chunks and its stored file: deleting the document removes
    both.
    """

    id: UUID = Field(default_factory=uuid4)
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    file_path: str = Field(description="Where the uploaded binary is stored")
    uploaded_at: datetime = Field(default_factory=utc_now)
    uploaded_by: str = Field(description="Uploader (learner/member) reference")
    tenant_id: UUID = Field(description="Owning tenant (club)")
    is_active: bool = True
    document_type: DocumentType = DocumentType.OTHER


class DocumentUpdate(BaseModel):
    """Metadata edit payload. File and tenant never change after upload."""

    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    is_active: bool = True
    document_type: DocumentType = DocumentType.OTHER


class ChunkMetadata(BaseModel):
    """
    Free-form facts about where a chunk came from.

    Travels with the chunk from ingestion to retrieval, so downstream
    code can always cite the page a passage was taken from.
    """

    page: Optional[int] = Field(default=None, ge=1, description="1-based page number")
    length: int = Field(default=0, ge=0, description="Character count of the content")
    created: datetime = Field(default_factory=utc_now)


class Chunk(BaseModel):
    """
    A bounded slice of a document's extracted text.

    This is the unit that gets embedded, searched, and cited by quiz
    questions. Immutable after ingestion except for embedding backfill.
    """

    id: UUID = Field(default_factory=uuid4)
    document_id: UUID
    content: str = Field(description="The actual text content")
    embedding: Optional[list[float]] = Field(
        default=None,
        description="Vector embedding, populated after the embedding step",
    )
    metadata: ChunkMetadata = Field(default_factory=ChunkMetadata)
    index: int = Field(default=0, ge=0, description="Zero-based position within the document")
