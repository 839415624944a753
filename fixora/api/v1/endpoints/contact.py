"""
Public contact form. Stores the message and forwards it to the admin mailbox.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fixora.api.v1.deps import get_db, get_notifier
from fixora.core.config import settings
from fixora.core.rate_limit import limiter
from fixora.models.contact import ContactMessage
from fixora.repositories.contacts import ContactRepository
from fixora.schemas.contact import ContactCreate, ContactResponse
from fixora.services.notifications import Notifier

router = APIRouter(tags=["contact"])
logger = logging.getLogger(__name__)


@router.post("/contact", response_model=ContactResponse, status_code=201)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def submit_contact(
    request: Request,
    body: ContactCreate,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> ContactResponse:
    message = await ContactRepository(db).add(ContactMessage(**body.model_dump()))
    logger.info("Contact message %d received from %s", message.id, message.email)

    try:
        notifier.contact_received(message)
    except Exception as e:
        logger.error("❌ Could not forward contact message %d: %s", message.id, e)

    return ContactResponse(
        message="Message sent successfully! We will contact you soon.",
        contact_id=message.id,
    )
