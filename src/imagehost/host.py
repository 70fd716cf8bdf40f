"""Image hosts."""

import base64
import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from .models import (
    ContentWriteReply,
    CreateContentRequest,
    DeleteContentRequest,
    GitHubContent,
    GitHubImageHostConfig,
    ImageHostType,
)
from .network import NetworkAccess, NetworkError, RawHeaders
from .urls import purify_url

logger = logging.getLogger(__name__)


class ImageHost(ABC):
    """Remote storage for images referenced by URL."""

    def __init__(self, name: str = "", network: NetworkAccess | None = None):
        self.name = name
        self.network = network or NetworkAccess()

    @abstractmethod
    def get_type(self) -> ImageHostType: ...

    @abstractmethod
    def ready(self) -> bool:
        """Whether the host is configured well enough to talk to the service."""

    @abstractmethod
    def get_config(self) -> dict[str, Any]: ...

    @abstractmethod
    def set_config(self, config: dict[str, Any]) -> None: ...

    @abstractmethod
    def test_config(self, config: dict[str, Any]) -> tuple[bool, str]:
        """Check ``config`` against the live service without applying it."""

    @abstractmethod
    def create(self, data: bytes, path: str) -> tuple[str, str]:
        """Store ``data`` at ``path``. Returns (url, message); url is empty on failure."""

    @abstractmethod
    def owns_url(self, url: str) -> bool: ...

    @abstractmethod
    def remove(self, url: str) -> tuple[bool, str]:
        """Delete the resource behind ``url``. ``url`` must be owned by this host."""


class GitHubImageHost(ImageHost):
    """Image host backed by a GitHub repository via the contents API."""

    API_URL = "https://api.github.com"
    RAW_URL = "https://raw.githubusercontent.com"
    BRANCH = "master"

    def __init__(self, name: str = "", network: NetworkAccess | None = None):
        super().__init__(name, network)
        self._config = GitHubImageHostConfig()
        self._image_url_prefix = ""

    @property
    def image_url_prefix(self) -> str:
        return self._image_url_prefix

    def get_type(self) -> ImageHostType:
        return ImageHostType.GITHUB

    def ready(self) -> bool:
        return self._config.is_complete()

    def get_config(self) -> dict[str, Any]:
        return self._config.model_dump()

    def set_config(self, config: dict[str, Any]) -> None:
        self._config = GitHubImageHostConfig.model_validate(config)
        self._image_url_prefix = (
            f"{self.RAW_URL}/{self._config.user_name}/{self._config.repository_name}/{self.BRANCH}/"
        )

    def test_config(self, config: dict[str, Any]) -> tuple[bool, str]:
        candidate = GitHubImageHostConfig.model_validate(config)
        if not candidate.is_complete():
            return False, "PersonalAccessToken/UserName/RepositoryName should not be empty."

        logger.info(
            "Testing GitHub image host config: %s/%s",
            candidate.user_name,
            candidate.repository_name,
        )
        url = f"{self.API_URL}/repos/{candidate.user_name}/{candidate.repository_name}"
        reply = self.network.request(url, self.prepare_common_headers(candidate.personal_access_token))
        return reply.ok, reply.text or reply.error_str

    @staticmethod
    def prepare_common_headers(token: str) -> RawHeaders:
        return {
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github.v3+json",
        }

    def _contents_url(self, path: str) -> str:
        return (
            f"{self.API_URL}/repos/{self._config.user_name}/"
            f"{self._config.repository_name}/contents/{path}"
        )

    def create(self, data: bytes, path: str) -> tuple[str, str]:
        if not path:
            return "", "Failed to create image with empty path."
        return self._create_resource(data, path)

    def _create_resource(self, content: bytes, path: str) -> tuple[str, str]:
        if not self.ready():
            return "", "Invalid GitHub image host configuration."

        headers = self.prepare_common_headers(self._config.personal_access_token)
        url = self._contents_url(path)
        logger.info("Creating resource: %s", path)

        # Never overwrite an existing file.
        reply = self.network.request(url, headers)
        if reply.error is NetworkError.NO_ERROR:
            return "", f"The resource already exists at the image host ({path})."
        if reply.error is not NetworkError.CONTENT_NOT_FOUND:
            logger.warning("Failed to query resource %s: %s", path, reply.error_str)
            return "", (
                f"Failed to query the resource at the image host "
                f"({url}) ({reply.error_str}) ({reply.text})."
            )

        body = CreateContentRequest(
            message=f"VX_ADD: {path}",
            content=base64.b64encode(content).decode("ascii"),
        )
        reply = self.network.put(url, headers, body.model_dump_json().encode("utf-8"))
        failure = (
            f"Failed to create resource at the image host "
            f"({url}) ({reply.error_str}) ({reply.text})."
        )
        if not reply.ok:
            logger.warning("Failed to create resource %s: %s", path, reply.error_str)
            return "", failure

        try:
            written = ContentWriteReply.model_validate_json(reply.data)
        except ValidationError as e:
            logger.warning("Malformed create reply for %s: %s", path, e)
            return "", failure

        target_url = written.content.download_url if written.content else None
        if not target_url:
            logger.warning("Create reply for %s has no download_url", path)
            return "", failure

        logger.info("Created resource: %s", target_url)
        return target_url, ""

    def owns_url(self, url: str) -> bool:
        return url.startswith(self._image_url_prefix)

    def remove(self, url: str) -> tuple[bool, str]:
        assert self.owns_url(url), f"URL not owned by this image host: {url}"

        if not self.ready():
            return False, "Invalid GitHub image host configuration."

        resource_path = purify_url(url[len(self._image_url_prefix):])
        headers = self.prepare_common_headers(self._config.personal_access_token)
        contents_url = self._contents_url(resource_path)
        logger.info("Removing resource: %s", resource_path)

        # Deletion needs the current blob SHA.
        reply = self.network.request(contents_url, headers)
        if not reply.ok:
            logger.warning("Failed to fetch resource %s: %s", resource_path, reply.error_str)
            return False, f"Failed to fetch information about the resource ({resource_path})."

        try:
            sha = GitHubContent.model_validate_json(reply.data).sha
        except ValidationError as e:
            logger.debug("Malformed contents reply for %s: %s", resource_path, e)
            sha = None
        if not sha:
            return False, f"Failed to fetch SHA about the resource ({resource_path}) ({reply.text})."

        body = DeleteContentRequest(message=f"VX_DEL: {resource_path}", sha=sha)
        reply = self.network.delete_resource(contents_url, headers, body.model_dump_json().encode("utf-8"))
        if not reply.ok:
            logger.warning("Failed to delete resource %s: %s", resource_path, reply.error_str)
            return False, f"Failed to delete resource ({resource_path}) ({reply.text})."

        logger.info("Deleted resource: %s", resource_path)
        return True, ""


def new_image_host(
    host_type: ImageHostType, name: str = "", network: NetworkAccess | None = None
) -> ImageHost:
    """Create an unconfigured image host of ``host_type``."""
    if host_type is ImageHostType.GITHUB:
        return GitHubImageHost(name, network)
    raise ValueError(f"Unsupported image host type: {host_type}")
