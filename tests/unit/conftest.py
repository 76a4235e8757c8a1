import re
import pytest
import httpx
from unittest.mock import MagicMock
from src.adapter.services.http_api_client import HttpApiClient
from src.app.services.api_client import ApiClient


class FakeArchiveServer:
    """In-memory stand-in for the import/export endpoints, served through httpx.MockTransport"""

    def __init__(self, archive: bytes = b""):
        self.archive = archive
        self.export_status = "none"
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.raw_path.decode()

        if request.method == "POST" and path.endswith("/export"):
            self.export_status = "scheduled"
            return httpx.Response(202, json={"message": "202 Accepted"})
        if request.method == "GET" and path.endswith("/export"):
            payload = {
                "id": 1,
                "description": "Itaque perspiciatis minima aspernatur",
                "name": "Gitlab Test",
                "name_with_namespace": "Gitlab Org / Gitlab Test",
                "path": "gitlab-test",
                "path_with_namespace": "gitlab-org/gitlab-test",
                "created_at": "2017-08-29T04:36:44.383Z",
                "export_status": self.export_status,
            }
            if self.export_status == "finished":
                payload["_links"] = {
                    "api_url": "https://gitlab.example.com/api/v4/projects/1/export/download",
                    "web_url": "https://gitlab.example.com/gitlab-org/gitlab-test/download_export",
                }
            return httpx.Response(200, json=payload)
        if request.method == "GET" and path.endswith("/export/download"):
            if self.export_status != "finished":
                return httpx.Response(404, json={"message": "404 Not found"})
            return httpx.Response(200, content=self.archive)
        return httpx.Response(404, json={"message": "404 Not found"})


@pytest.fixture
def fake_server():
    return FakeArchiveServer(archive=b"\x1f\x8b\x08\x00 project archive \r\n\x00\xff")


@pytest.fixture
def http_api_client(fake_server):
    client = HttpApiClient(
        base_url="https://gitlab.example.com",
        private_token="test-token",
        transport=httpx.MockTransport(fake_server.handler),
    )
    yield client
    client.close()


@pytest.fixture
def mock_api_client():
    """ApiClient double that builds real requests and records every call"""
    client = MagicMock(spec=ApiClient)

    def new_request(method, path, body=None, options=None):
        return httpx.Request(method, f"https://gitlab.example.com/api/v4/{path}")

    client.new_request.side_effect = new_request
    return client


@pytest.fixture
def parse_form():
    """Split an encoded multipart form into (name, headers, content) triples, in order"""

    def parse(form):
        boundary = form.content_type.split("boundary=", 1)[1].encode()
        segments = form.body.split(b"--" + boundary)
        assert segments[0] == b""
        assert segments[-1] == b"--\r\n"

        parts = []
        for segment in segments[1:-1]:
            assert segment.startswith(b"\r\n")
            head, _, content = segment[2:].partition(b"\r\n\r\n")
            assert content.endswith(b"\r\n")
            headers = dict(line.split(": ", 1) for line in head.decode().split("\r\n"))
            name = re.search(r'; name="([^"]*)"', headers["Content-Disposition"]).group(1)
            parts.append((name, headers, content[:-2]))
        return parts

    return parse

