"""Pydantic payloads for the chat-platform webhook."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from domain.common import ChatEvent, Mention


class MentionPayload(BaseModel):
    mention_name: str
    name: str


class SenderPayload(BaseModel):
    name: str = ""


class MessagePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = ""
    sender: SenderPayload = Field(default_factory=SenderPayload, alias="from")
    mentions: list[MentionPayload] = Field(default_factory=list)


class RoomPayload(BaseModel):
    id: int | str


class WebhookItem(BaseModel):
    message: MessagePayload
    room: RoomPayload


class WebhookEvent(BaseModel):
    """Room-message event posted by the chat platform."""

    oauth_client_id: str
    item: WebhookItem

    def to_chat_event(self) -> ChatEvent:
        return ChatEvent(
            oauth_client_id=self.oauth_client_id,
            room_id=str(self.item.room.id),
            message=self.item.message.message,
            sender_name=self.item.message.sender.name,
            mentions=tuple(
                Mention(mention_name=mention.mention_name, name=mention.name)
                for mention in self.item.message.mentions
            ),
        )


class InstallationPayload(BaseModel):
    """Install callback sent when the bot is added to an account."""

    model_config = ConfigDict(populate_by_name=True)

    oauth_id: str = Field(alias="oauthId")
    oauth_secret: str = Field(alias="oauthSecret")


class ChatResponsePayload(BaseModel):
    message: str
    message_format: str
    notify: bool = False


class InstallationResponse(BaseModel):
    oauth_id: str
    room_count: int
