from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


def message_response(message: str) -> MessageResponse:
    return MessageResponse(message=message)
