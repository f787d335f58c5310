"""Database table definitions for memoized normalization results"""

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import Column, DateTime, JSON, String
from sqlmodel import Field, SQLModel


class NormalizedNote(SQLModel, table=True):
    """A normalized block sequence keyed by the hash of its raw content and engine"""
    __tablename__ = "normalized_notes"
    hash: str = Field(..., sa_column=Column(String(64), primary_key=True))
    engine: str = Field(default="lines", primary_key=True)
    blocks: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    scale: float = Field(..., nullable=False, description="Typography scale computed for the blocks")
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
