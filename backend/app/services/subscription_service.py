"""
Glee Threads Backend — WhatsApp Subscription Service
======================================================

What:  Stores WhatsApp numbers from the footer signup form.

Outcomes:
    invalid number      → ValidationError (400)
    already subscribed  → False  (route answers 200)
    newly subscribed    → True   (route answers 201)
"""

import logging
import re
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, ValidationError
from app.models.subscriber import Subscriber
from app.schemas.commerce import SubscriberOut

logger = logging.getLogger(__name__)

# ASCII digits only; str.isdigit() would also accept e.g. Devanagari numerals.
WHATSAPP_NUMBER = re.compile(r"[0-9]{10}")


class SubscriptionService:

    async def subscribe(self, db: AsyncSession, whatsapp_number: Optional[str]) -> bool:
        """Returns True when a new row was stored, False when the number already existed."""
        number = (whatsapp_number or "").strip()
        if not WHATSAPP_NUMBER.fullmatch(number):
            raise ValidationError(
                "Please enter a valid 10-digit WhatsApp number", field="whatsappNumber"
            )

        try:
            existing = await db.execute(
                select(Subscriber.id).where(Subscriber.whatsapp_number == number)
            )
            if existing.scalar_one_or_none() is not None:
                return False

            db.add(Subscriber(whatsapp_number=number))
            await db.flush()
        except IntegrityError:
            # A concurrent request stored the same number between our SELECT and INSERT.
            await db.rollback()
            return False
        except SQLAlchemyError as e:
            logger.error("Database error storing subscription: %s", str(e))
            raise DatabaseError(context={"operation": "subscribe"}) from e

        logger.info("New WhatsApp subscriber stored")
        return True

    async def list_all(self, db: AsyncSession) -> List[SubscriberOut]:
        try:
            result = await db.execute(
                select(Subscriber).order_by(Subscriber.created_at.desc(), Subscriber.id.desc())
            )
            return [SubscriberOut.model_validate(s) for s in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing subscribers: %s", str(e))
            raise DatabaseError(context={"operation": "list_subscribers"}) from e


subscription_service = SubscriptionService()
