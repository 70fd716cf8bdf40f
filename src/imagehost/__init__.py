"""Store images in a GitHub repository through the contents API."""

from .config import ConfigError, find_host, get_token, load_hosts, save_hosts
from .host import GitHubImageHost, ImageHost, new_image_host
from .models import GitHubImageHostConfig, ImageHostRecord, ImageHostType
from .network import NetworkAccess, NetworkError, NetworkReply

__all__ = [
    "ImageHost",
    "GitHubImageHost",
    "new_image_host",
    "ImageHostType",
    "GitHubImageHostConfig",
    "ImageHostRecord",
    "NetworkAccess",
    "NetworkError",
    "NetworkReply",
    "ConfigError",
    "find_host",
    "get_token",
    "load_hosts",
    "save_hosts",
]
