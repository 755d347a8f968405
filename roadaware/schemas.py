from __future__ import annotations

import base64
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class UploadedImage(BaseModel):
    """One uploaded file, read fully into memory."""

    filename: str = ""
    content_type: str = "application/octet-stream"
    data: bytes = Field(..., repr=False)

    @property
    def data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


# ---------------------------------------------------------------------------
# Chat-completions request (provider wire format)
# ---------------------------------------------------------------------------

class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageUrl(BaseModel):
    url: str


class ImageUrlPart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Union[TextPart, ImageUrlPart]


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: Union[str, List[ContentPart]]


class ChatCompletionRequest(BaseModel):
    """Payload posted to the provider's chat-completions endpoint."""

    messages: List[ChatMessage]
    max_tokens: int
    stream: Optional[bool] = None

    def to_payload(self) -> dict:
        """JSON-ready dict with unset optional fields omitted."""
        return self.model_dump(exclude_none=True)


def build_chat_request(
    system_prompt: str,
    user_message: Optional[str],
    images: List[UploadedImage],
    *,
    max_tokens: int,
    stream: bool = False,
) -> ChatCompletionRequest:
    """Assemble the system + user messages for a pothole analysis call.

    The user content holds the text part first (only when *user_message* is
    not blank), then one data-URL image part per upload, in upload order.
    """
    content: List[ContentPart] = []
    if user_message and user_message.strip():
        content.append(TextPart(text=user_message))
    for image in images:
        content.append(ImageUrlPart(image_url=ImageUrl(url=image.data_url)))

    return ChatCompletionRequest(
        messages=[
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=content),
        ],
        max_tokens=max_tokens,
        stream=True if stream else None,
    )
