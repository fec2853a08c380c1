"""
Association table for the user <-> property "like" relation.
Each edge is stored exactly once; both sides of the relation are derived from it.
"""

from sqlalchemy import Table, Column, ForeignKey, DateTime, UUID, func
from app.database import Base


property_likes = Table(
    "property_likes",
    Base.metadata,
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "property_id",
        UUID(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
    Column(
        "created_at",
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    ),
)
