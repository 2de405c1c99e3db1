"""Message domain schemas"""

from datetime import datetime

from pydantic import BaseModel, field_validator

from ...models import Message
from ...shared.validators import validate_length

MAX_MESSAGE_LENGTH = 1000


class MessageCreate(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def validate_message(cls, v):
        return validate_length(v, "Message", 1, MAX_MESSAGE_LENGTH)


class MessageResponse(BaseModel):
    id: int
    proposalId: int
    senderId: int
    senderType: str
    message: str
    createdAt: datetime

    @classmethod
    def from_model(cls, message: Message) -> "MessageResponse":
        return cls(
            id=message.id,
            proposalId=message.proposal_id,
            senderId=message.sender_id,
            senderType=message.sender_type,
            message=message.message,
            createdAt=message.created_at,
        )
