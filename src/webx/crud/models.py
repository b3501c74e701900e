"""Database table definition for stored blueprints"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class StoredBlueprint(SQLModel, table=True):
    """An encoded blueprint plus the fields it is listed and searched by"""
    __tablename__ = "blueprints"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    layout: str = Field(..., sa_column=Column(String(32), nullable=False))
    payload: str = Field(..., sa_column=Column(Text, nullable=False), description="Encoded WebX payload")
    raw_data: Dict[str, Any] = Field(..., sa_column=Column(JSON, nullable=False), description="Blueprint in wire form")
    category: Optional[str] = Field(default=None, index=True)
    author: Optional[str] = Field(default=None)
    featured: bool = Field(default=False, nullable=False)
    downloads: int = Field(default=0, nullable=False)
    content_hash: str = Field(..., sa_column=Column(String(8), nullable=False, index=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
