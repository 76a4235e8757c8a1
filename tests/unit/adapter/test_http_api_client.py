"""Unit tests for HTTP API Client

Tests request building and response handling against httpx.MockTransport.
"""
import io
import json
import pytest
import httpx
from src.adapter.services.http_api_client import HttpApiClient, api_root
from src.app.services.api_client import ApiError, RequestOptions, TransportError
from src.app.services.import_export_dtos import ScheduleExportOptions
from src.app.services.multipart_encoder import MultipartForm


def make_client(handler, **kwargs):
    return HttpApiClient(
        base_url="https://gitlab.example.com",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.parametrize("base_url,expected", [
    ("https://gitlab.example.com", "https://gitlab.example.com/api/v4/"),
    ("https://gitlab.example.com/", "https://gitlab.example.com/api/v4/"),
    ("https://gitlab.example.com/api/v4", "https://gitlab.example.com/api/v4/"),
    ("https://example.com/gitlab/", "https://example.com/gitlab/api/v4/"),
])
def test_api_root(base_url, expected):
    assert api_root(base_url) == expected


class TestNewRequest:

    def test_path_is_resolved_against_api_root(self):
        client = make_client(lambda request: httpx.Response(200))

        request = client.new_request("GET", "projects/gitlab-org%2Fgitlab-test/export")

        assert request.url.raw_path == b"/api/v4/projects/gitlab-org%2Fgitlab-test/export"
        assert request.method == "GET"

    def test_private_token_header_is_sent_when_configured(self):
        client = make_client(lambda request: httpx.Response(200), private_token="secret")

        request = client.new_request("GET", "projects/1/export")

        assert request.headers["PRIVATE-TOKEN"] == "secret"

    def test_model_body_is_sent_as_json_without_unset_fields(self):
        client = make_client(lambda request: httpx.Response(200))

        request = client.new_request("POST", "projects/1/export", ScheduleExportOptions(description="x"))

        assert json.loads(request.content) == {"description": "x"}
        assert request.headers["Content-Type"] == "application/json"

    def test_multipart_form_is_sent_verbatim(self):
        # Arrange
        client = make_client(lambda request: httpx.Response(200))
        form = MultipartForm(body=b"--abc\r\nbody\r\n--abc--\r\n", content_type="multipart/form-data; boundary=abc")

        # Act
        request = client.new_request("POST", "groups/import", form)

        # Assert
        assert request.content == form.body
        assert request.headers["Content-Type"] == form.content_type

    def test_request_options_apply_headers_sudo_and_timeout(self):
        client = make_client(lambda request: httpx.Response(200))
        options = RequestOptions(headers={"X-Trace": "1"}, timeout=2.5, sudo="root")

        request = client.new_request("GET", "projects/1/import", options=options)

        assert request.headers["X-Trace"] == "1"
        assert request.headers["Sudo"] == "root"
        assert request.extensions["timeout"]["read"] == 2.5


class TestDo:

    def test_success_returns_response(self):
        client = make_client(lambda request: httpx.Response(200, json={"id": 1}))

        response = client.do(client.new_request("GET", "projects/1/import"))

        assert response.json() == {"id": 1}

    def test_sink_receives_raw_body(self):
        payload = bytes(range(256)) * 64
        client = make_client(lambda request: httpx.Response(200, content=payload))
        sink = io.BytesIO()

        client.do(client.new_request("GET", "projects/1/export/download"), sink)

        assert sink.getvalue() == payload

    @pytest.mark.parametrize("body,expected", [
        ({"message": "404 Project Not Found"}, "404 Project Not Found"),
        ({"error": "invalid_token"}, "invalid_token"),
        ({"message": {"name": ["has already been taken"]}}, "{name: [has already been taken]}"),
        ({"message": ["first", "second"]}, "[first, second]"),
    ])
    def test_non_success_raises_api_error(self, body, expected):
        client = make_client(lambda request: httpx.Response(400, json=body))

        with pytest.raises(ApiError) as exc_info:
            client.do(client.new_request("GET", "projects/1/export"))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == expected
        assert "GET https://gitlab.example.com/api/v4/projects/1/export" in str(exc_info.value)

    def test_non_success_with_sink_leaves_sink_empty(self):
        client = make_client(lambda request: httpx.Response(404, json={"message": "404 Not found"}))
        sink = io.BytesIO()

        with pytest.raises(ApiError):
            client.do(client.new_request("GET", "projects/1/export/download"), sink)

        assert sink.getvalue() == b""

    def test_connection_failure_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(TransportError) as exc_info:
            client.do(client.new_request("GET", "projects/1/export"))

        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    def test_context_manager_closes_client(self):
        with make_client(lambda request: httpx.Response(200)) as client:
            pass

        assert client.client.is_closed
