import json

import httpx
import pytest

from imagehost.host import GitHubImageHost
from imagehost.network import NetworkAccess

CONFIG = {
    "personal_access_token": "ghp_test",
    "user_name": "u",
    "repository_name": "r",
}
CONTENTS = "https://api.github.com/repos/u/r/contents"
RAW_PREFIX = "https://raw.githubusercontent.com/u/r/master/"


class FakeGitHub:
    """Routes (method, url) to canned replies and records every request."""

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, url: str, status: int, body: object = None) -> None:
        self.routes[(method, url)] = (status, body)

    def methods(self) -> list[str]:
        return [r.method for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, str(request.url))
        if key not in self.routes:
            return httpx.Response(404, json={"message": "Not Found"})
        status, body = self.routes[key]
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, content=json.dumps(body or {}).encode())


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def network(github: FakeGitHub) -> NetworkAccess:
    return NetworkAccess(transport=httpx.MockTransport(github.handler))


@pytest.fixture
def host(network: NetworkAccess) -> GitHubImageHost:
    h = GitHubImageHost("default", network)
    h.set_config(dict(CONFIG))
    return h
