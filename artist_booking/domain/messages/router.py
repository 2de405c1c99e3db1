"""Message router - proposal message channels"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...schemas import PageParams, get_message_page_params, success
from .schemas import MessageCreate, MessageResponse
from .service import MessageService

router = APIRouter(prefix="/api/v1/proposals", tags=["Messages"])


def get_message_service(db: Session = Depends(get_db)) -> MessageService:
    """Dependency injection for MessageService"""
    return MessageService(db)


@router.post("/{proposal_id}/messages", status_code=201)
async def post_message(
    proposal_id: int,
    data: MessageCreate,
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
):
    """Send a message on a proposal's channel"""
    message = service.post_message(proposal_id, data, current_user)
    return success({"message": MessageResponse.from_model(message)})


@router.get("/{proposal_id}/messages")
async def list_messages(
    proposal_id: int,
    current_user: User = Depends(get_current_user),
    params: PageParams = Depends(get_message_page_params),
    service: MessageService = Depends(get_message_service),
):
    """Read a proposal's channel, newest first"""
    return success(service.list_messages(proposal_id, current_user, params))
