import httpx

from imagehost.network import NetworkAccess, NetworkError, classify_status


class TestClassifyStatus:
    """Test suite for status classification."""

    def test_success_codes(self):
        assert classify_status(200) is NetworkError.NO_ERROR
        assert classify_status(201) is NetworkError.NO_ERROR

    def test_not_found(self):
        assert classify_status(404) is NetworkError.CONTENT_NOT_FOUND

    def test_other_errors(self):
        for code in (401, 403, 409, 422, 500):
            assert classify_status(code) is NetworkError.OTHER


class TestNetworkAccess:
    """Test suite for NetworkAccess."""

    def test_request_sends_headers(self, github, network):
        """GET carries the given headers and returns body bytes."""
        github.add("GET", "https://example.com/x", 200, {"a": 1})

        reply = network.request("https://example.com/x", {"Authorization": "token t"})

        assert reply.ok
        assert reply.status_code == 200
        assert reply.text == '{"a": 1}'
        assert github.requests[0].headers["Authorization"] == "token t"

    def test_put_and_delete_send_json_body(self, github, network):
        github.add("PUT", "https://example.com/x", 201, {})
        github.add("DELETE", "https://example.com/x", 200, {})

        assert network.put("https://example.com/x", {}, b'{"k": "v"}').ok
        assert network.delete_resource("https://example.com/x", {}, b'{"sha": "s"}').ok

        put, delete = github.requests
        assert put.method == "PUT"
        assert put.content == b'{"k": "v"}'
        assert put.headers["Content-Type"] == "application/json"
        assert delete.method == "DELETE"
        assert delete.content == b'{"sha": "s"}'

    def test_not_found_reply(self, network):
        reply = network.request("https://example.com/missing", {})

        assert reply.error is NetworkError.CONTENT_NOT_FOUND
        assert reply.error_str == "404 Not Found"
        assert b"Not Found" in reply.data

    def test_transport_exception_becomes_other(self):
        """Connection failures are reported, not raised."""

        def boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        network = NetworkAccess(transport=httpx.MockTransport(boom))

        reply = network.request("https://example.com/x", {})

        assert reply.error is NetworkError.OTHER
        assert reply.status_code is None
        assert "connection refused" in reply.error_str
        assert reply.data == b""
