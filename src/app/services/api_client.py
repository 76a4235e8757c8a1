"""API Client Interface

Abstract transport shared by every resource service, plus the helpers
for turning project references into URL path segments.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
from typing import Any, BinaryIO, Dict, Optional, Type, TypeVar, Union
from urllib.parse import quote
import httpx
from pydantic import BaseModel
from src.app.services.errors import InvalidInputError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


# Custom Exceptions


class TransportError(Exception):
    """Raised when the request never produced an HTTP response"""
    code = "TRANSPORT_ERROR"

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class ApiError(Exception):
    """Raised when the server answers with a non-success status code"""
    code = "API_ERROR"

    def __init__(self, message: str, status_code: int, response: Optional[httpx.Response] = None):
        self.message = message
        self.status_code = status_code
        self.response = response
        text = f"{status_code} {message}"
        if response is not None:
            try:
                request = response.request
            except RuntimeError:
                # responses built by hand carry no request
                request = None
            if request is not None:
                text = f"{request.method} {request.url}: {text}"
        super().__init__(text)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and "message" in data:
            message = _flatten_error(data["message"])
        elif isinstance(data, dict) and "error" in data:
            message = _flatten_error(data["error"])
        else:
            message = response.text or response.reason_phrase
        return cls(message, status_code=response.status_code, response=response)


class DecodeError(Exception):
    """Raised when a success response body does not match the expected shape"""
    code = "DECODE_ERROR"

    def __init__(self, message: str, response: Optional[httpx.Response] = None):
        self.message = message
        self.response = response
        super().__init__(message)


def _flatten_error(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, list):
        return "[" + ", ".join(_flatten_error(item) for item in raw) + "]"
    if isinstance(raw, dict):
        return ", ".join(sorted(f"{{{key}: {_flatten_error(value)}}}" for key, value in raw.items()))
    return f"failed to parse unexpected error type: {type(raw).__name__}"


# Request options


@dataclass
class RequestOptions:
    """Per-request overrides applied by the transport"""
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None
    sudo: Optional[Union[int, str]] = None


# Project references


ProjectRef = Union[int, str]


def parse_project_ref(project_ref: ProjectRef) -> str:
    """
    Normalize a project reference to its string form.

    Accepts a numeric ID or a non-empty path such as "group/project".
    """
    # bool is an int subclass but never a valid ID
    if isinstance(project_ref, bool):
        raise InvalidInputError(f"invalid ID type {project_ref!r}, the ID must be an int or a string")
    if isinstance(project_ref, int):
        return str(project_ref)
    if isinstance(project_ref, str):
        if not project_ref.strip():
            raise InvalidInputError("project reference must not be empty")
        return project_ref
    raise InvalidInputError(
        f"invalid ID type {type(project_ref).__name__}, the ID must be an int or a string"
    )


def path_escape(segment: str) -> str:
    """Escape a value for use as a single URL path segment"""
    return quote(segment, safe="").replace(".", "%2E")


def project_path(project_ref: ProjectRef, *suffix: str) -> str:
    return "/".join(("projects", path_escape(parse_project_ref(project_ref))) + suffix)


# API Client Interface


class ApiClient(ABC):
    """
    Abstract interface for the shared HTTP transport.

    Owns connection handling, authentication headers and error decoding;
    resource services only build requests and interpret bodies.
    """

    @abstractmethod
    def new_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: Optional[RequestOptions] = None,
    ) -> httpx.Request:
        """
        Build a request relative to the versioned API root.

        Args:
            method: HTTP method
            path: Path relative to the API root, already escaped
            body: Pydantic model or mapping sent as JSON, or an encoded
                multipart form sent verbatim with its own content type
            options: Optional per-request overrides

        Returns:
            The prepared request
        """
        pass

    @abstractmethod
    def do(self, request: httpx.Request, sink: Optional[BinaryIO] = None) -> httpx.Response:
        """
        Send a request.

        Args:
            request: Request built by new_request
            sink: Optional binary stream receiving the raw response body

        Returns:
            The success response

        Raises:
            TransportError: When no response was received
            ApiError: When the server answered with a non-2xx status
        """
        pass


def decode_response(response: httpx.Response, model: Type[M]) -> M:
    """Decode a JSON success body into a model, raising DecodeError on mismatch"""
    # pydantic's ValidationError and json errors are both ValueErrors
    try:
        return model.model_validate(response.json())
    except ValueError as e:
        logger.error(f"Unexpected {model.__name__} payload: {e}")
        raise DecodeError(f"failed to decode {model.__name__}: {e}", response=response) from e
