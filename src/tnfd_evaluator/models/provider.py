"""Validated response shapes returned by the provider API."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderObject(BaseModel):
    """Any provider resource identified by an opaque id."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Provider-assigned identifier")
    object: Optional[str] = Field(default=None, description="Provider object type")


class FileObject(ProviderObject):
    """Response of the file upload endpoint."""

    filename: Optional[str] = Field(default=None, description="Name of the uploaded file")
    purpose: Optional[str] = Field(default=None, description="Purpose tag sent with the upload")


class VectorStoreObject(ProviderObject):
    """Response of the vector store creation endpoint."""

    name: Optional[str] = Field(default=None, description="Display name of the store")


class AssistantObject(ProviderObject):
    """Response of the assistant creation endpoint."""

    name: Optional[str] = Field(default=None, description="Display name of the assistant")
    model: Optional[str] = Field(default=None, description="Model backing the assistant")


class ThreadObject(ProviderObject):
    """Response of the thread creation endpoint."""


class RunMessage(BaseModel):
    """A message produced by a run."""

    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = Field(default=None, description="Author role")
    content: str = Field(..., description="Message text")

    @field_validator("content", mode="before")
    @classmethod
    def _flatten_content(cls, value: Union[str, list, None]) -> Union[str, list, None]:
        """Accept either a plain string or a list of text content blocks."""
        if not isinstance(value, list):
            return value

        parts = []
        for block in value:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                text = block.get("text")
                parts.append(text.get("value", "") if isinstance(text, dict) else str(text))
            else:
                raise ValueError(f"Unsupported content block: {block!r}")
        return "".join(parts)


class RunObject(BaseModel):
    """Response of the run creation endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(default=None, description="Run identifier")
    status: Optional[str] = Field(default=None, description="Run status")
    messages: list[RunMessage] = Field(..., min_length=1, description="Resulting messages")

    @property
    def content(self) -> str:
        """Text of the first resulting message."""
        return self.messages[0].content
