"""Image host configuration store and token resolution."""

import json
import logging
import os
import subprocess
from pathlib import Path

from pydantic import ValidationError

from .host import ImageHost, new_image_host
from .models import HostsFile, ImageHostRecord
from .network import NetworkAccess

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Hosts file cannot be read or has an invalid layout."""


GH_CLI_TIMEOUT = 5  # seconds
TOKEN_ENV_VARS = ("GH_TOKEN", "GITHUB_TOKEN")


def get_token_from_gh_cli() -> str | None:
    """Ask an authenticated ``gh`` for its token; None when gh is missing or logged out."""
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=GH_CLI_TIMEOUT,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.debug("Cannot read token from gh: %s", e)
        return None
    token = result.stdout.strip()
    if result.returncode != 0 or not token:
        return None
    logger.info("Image host token taken from gh")
    return token


def get_token(token: str | None = None, use_gh_cli: bool = False) -> str | None:
    """
    Pick the personal access token for a new image host.

    An explicit ``token`` wins over the environment (see TOKEN_ENV_VARS);
    ``gh auth token`` is consulted last and only with ``use_gh_cli``.
    """
    if token:
        return token
    for var in TOKEN_ENV_VARS:
        if os.environ.get(var):
            logger.info("Image host token taken from $%s", var)
            return os.environ[var]
    return get_token_from_gh_cli() if use_gh_cli else None


def load_hosts(path: Path) -> list[ImageHostRecord]:
    """Load host records; a missing file yields no hosts."""
    if not path.exists():
        logger.debug("No hosts file at %s", path)
        return []
    try:
        with path.open("r", encoding="utf-8") as f:
            return HostsFile.model_validate(json.load(f)).hosts
    except (OSError, ValueError) as e:
        # ValidationError is a ValueError
        raise ConfigError(f"Invalid hosts file {path}: {e}") from e


def save_hosts(path: Path, hosts: list[ImageHostRecord]) -> None:
    """Save host records."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(
            HostsFile(hosts=hosts).model_dump(mode="json"),
            f,
            ensure_ascii=False,
            indent=2,
        )
    logger.info("Saved %d image host(s) to %s", len(hosts), path)


def upsert_host(hosts: list[ImageHostRecord], record: ImageHostRecord) -> list[ImageHostRecord]:
    """Replace the host with the same name, or append ``record``."""
    kept = [h for h in hosts if h.name != record.name]
    replaced = len(kept) != len(hosts)
    logger.debug("%s image host %s", "Replacing" if replaced else "Adding", record.name)
    return kept + [record]


def find_host(
    hosts: list[ImageHostRecord],
    name: str | None = None,
    network: NetworkAccess | None = None,
) -> ImageHost:
    """Build a configured image host by name, or the first one if name is None."""
    if not hosts:
        raise ConfigError("No image host configured")
    if name is None:
        record = hosts[0]
    else:
        matches = [h for h in hosts if h.name == name]
        if not matches:
            raise ConfigError(f"Unknown image host: {name}")
        record = matches[0]

    host = new_image_host(record.type, record.name, network)
    try:
        host.set_config(record.config)
    except ValidationError as e:
        raise ConfigError(f"Invalid config for image host {record.name}: {e}") from e
    return host
