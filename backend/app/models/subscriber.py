"""
Glee Threads Backend — Subscriber Model
=========================================

What:  WhatsApp numbers collected by the footer "subscribe" form.

The UNIQUE constraint on whatsapp_number is what makes a second signup
for the same number an "already subscribed" no-op rather than a duplicate.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Subscriber(Base):
    __tablename__ = "subscribes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    whatsapp_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
