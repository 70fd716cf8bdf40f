"""Image host data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class ImageHostType(str, Enum):
    """Supported image host backends."""

    GITHUB = "github"


class GitHubImageHostConfig(BaseModel):
    """Persisted GitHub image host configuration."""

    personal_access_token: str = ""
    user_name: str = ""
    repository_name: str = ""

    @field_validator("personal_access_token", "user_name", "repository_name", mode="before")
    @classmethod
    def _string_or_empty(cls, value: Any) -> str:
        # Non-string values read as empty.
        return value if isinstance(value, str) else ""

    def is_complete(self) -> bool:
        return bool(self.personal_access_token and self.user_name and self.repository_name)


class ImageHostRecord(BaseModel):
    """Image host as stored in the hosts file."""

    type: ImageHostType = ImageHostType.GITHUB
    name: str
    config: dict[str, Any] = Field(default_factory=dict)


class GitHubContent(BaseModel):
    """Subset of a contents API item used by the image host."""

    name: str | None = None
    path: str | None = None
    sha: str | None = None
    download_url: str | None = None


class ContentWriteReply(BaseModel):
    """Reply of a contents PUT."""

    content: GitHubContent | None = None


class CreateContentRequest(BaseModel):
    """Body of a contents PUT."""

    message: str
    content: str  # Base64 encoded


class DeleteContentRequest(BaseModel):
    """Body of a contents DELETE."""

    message: str
    sha: str


class HostsFile(BaseModel):
    """Hosts file document."""

    hosts: list[ImageHostRecord] = Field(default_factory=list)
