"""HTTP API Client Implementation

Concrete implementation of ApiClient using a synchronous httpx client.
No retries: every call is a single round trip.
"""
import logging
from typing import Any, BinaryIO, Optional
import httpx
from pydantic import BaseModel
from src.app.services.api_client import ApiClient, ApiError, RequestOptions, TransportError
from src.app.services.multipart_encoder import MultipartForm

logger = logging.getLogger(__name__)

API_VERSION_PATH = "api/v4/"


def api_root(base_url: str) -> str:
    """Normalize a server URL to its versioned API root, e.g. https://host/api/v4/"""
    url = base_url.rstrip("/") + "/"
    if not url.endswith("/" + API_VERSION_PATH):
        url += API_VERSION_PATH
    return url


class HttpApiClient(ApiClient):
    """
    HTTP implementation of ApiClient using httpx.

    Features:
    - Paths resolved against the versioned API root
    - JSON bodies from pydantic models or mappings, multipart forms sent verbatim
    - Non-2xx responses mapped to ApiError, connection failures to TransportError
    """

    def __init__(
        self,
        base_url: str,
        private_token: Optional[str] = None,
        timeout: float = 30.0,
        user_agent: str = "project-archive-client",
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize HTTP API client.

        Args:
            base_url: Server URL (e.g., "https://gitlab.example.com")
            private_token: Optional access token forwarded as PRIVATE-TOKEN
            timeout: Default request timeout in seconds (default: 30.0)
            user_agent: User-Agent header value
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self.base_url = api_root(base_url)
        self.timeout = timeout
        headers = {"User-Agent": user_agent, "Accept": "application/json"}
        if private_token:
            headers["PRIVATE-TOKEN"] = private_token
        self.client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def new_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: Optional[RequestOptions] = None,
    ) -> httpx.Request:
        headers = {}
        kwargs = {}

        if isinstance(body, MultipartForm):
            # the boundary in the header must match the one in the body
            headers["Content-Type"] = body.content_type
            kwargs["content"] = body.body
        elif isinstance(body, BaseModel):
            kwargs["json"] = body.model_dump(mode="json", exclude_none=True)
        elif body is not None:
            kwargs["json"] = body

        if options is not None:
            headers.update(options.headers)
            if options.sudo is not None:
                headers["Sudo"] = str(options.sudo)
            if options.timeout is not None:
                kwargs["timeout"] = options.timeout

        return self.client.build_request(method, path.lstrip("/"), headers=headers, **kwargs)

    def do(self, request: httpx.Request, sink: Optional[BinaryIO] = None) -> httpx.Response:
        try:
            response = self.client.send(request, stream=sink is not None)
        except httpx.HTTPError as e:
            logger.error(f"Request {request.method} {request.url} failed: {e}")
            raise TransportError(f"{request.method} {request.url} failed: {e}", cause=e) from e

        try:
            if not response.is_success:
                if sink is not None:
                    response.read()
                error = ApiError.from_response(response)
                logger.warning(f"API error: {error}")
                raise error

            if sink is not None:
                for chunk in response.iter_bytes():
                    sink.write(chunk)
        except httpx.HTTPError as e:
            logger.error(f"Reading response of {request.method} {request.url} failed: {e}")
            raise TransportError(f"{request.method} {request.url} failed: {e}", cause=e) from e
        finally:
            if sink is not None:
                response.close()

        return response

    def close(self):
        """Close the HTTP client connection"""
        self.client.close()

    def __enter__(self) -> "HttpApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
