"""Message repository - Database operations for proposal message channels"""

from sqlalchemy.orm import Session

from ...models import Message


class MessageRepository:
    """Repository for message database operations"""

    @staticmethod
    def create_message(db: Session, **message_data) -> Message:
        message = Message(**message_data)
        db.add(message)
        db.commit()
        db.refresh(message)
        return message

    @staticmethod
    def list_messages(db: Session, proposal_id: int, offset: int, limit: int) -> tuple[int, list[Message]]:
        """Newest first; the id breaks ties between messages sent in the same instant"""
        query = db.query(Message).filter(Message.proposal_id == proposal_id)
        total = query.count()
        messages = (
            query.order_by(Message.created_at.desc(), Message.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return total, messages
