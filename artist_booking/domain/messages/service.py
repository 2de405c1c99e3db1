"""Message service - per-proposal conversation between artist and venue"""

import logging

from sqlalchemy.orm import Session

from ...errors import AuthorizationError, NotFoundError
from ...models import Gig, Message, Proposal, User
from ...schemas import PageParams, Pagination
from ...shared.validators import utcnow
from ...utils.sanitization import sanitize_text
from ..gigs.repository import GigRepository
from ..proposals.repository import ProposalRepository
from .repository import MessageRepository
from .schemas import MessageCreate, MessageResponse

logger = logging.getLogger(__name__)

MSG_CANNOT_SEND = "You don't have permission to send messages"
MSG_CANNOT_VIEW = "You don't have permission to view these messages"


class MessageService:
    """Service layer for proposal message channels"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MessageRepository()
        self.proposals = ProposalRepository()
        self.gigs = GigRepository()

    def _authorize(self, proposal_id: int, user: User, denied_message: str) -> Proposal:
        """
        Only the proposing artist and the venue owning the gig belong to a channel.

        Existence is checked before membership, so an unknown proposal is a 404
        for everyone.
        """
        proposal = self.proposals.get_proposal_by_id(self.db, proposal_id)
        if not proposal:
            raise NotFoundError("Proposal not found")

        gig: Gig = self.gigs.get_gig_by_id(self.db, proposal.gig_id)
        if not gig:
            raise NotFoundError("Gig not found")

        if user.id not in (proposal.artist_id, gig.user_id):
            logger.warning(f"User {user.id} is not a participant of proposal {proposal.id}")
            raise AuthorizationError(denied_message)
        return proposal

    def post_message(self, proposal_id: int, data: MessageCreate, user: User) -> Message:
        proposal = self._authorize(proposal_id, user, MSG_CANNOT_SEND)
        message = self.repo.create_message(
            self.db,
            proposal_id=proposal.id,
            sender_id=user.id,
            sender_type=user.user_type,
            message=sanitize_text(data.message),
            created_at=utcnow(),
        )
        logger.info(f"Message {message.id} posted by user {user.id} on proposal {proposal.id}")
        return message

    def list_messages(self, proposal_id: int, user: User, params: PageParams) -> dict:
        proposal = self._authorize(proposal_id, user, MSG_CANNOT_VIEW)
        total, messages = self.repo.list_messages(
            self.db, proposal.id, offset=params.offset, limit=params.limit
        )
        return {
            "messages": [MessageResponse.from_model(m) for m in messages],
            "pagination": Pagination.build(total, params),
        }
