"""Multipart Import Encoder

Serializes an import submission into a multipart/form-data body held in
memory, with the archive as the first part. httpx renders the parts and
picks the boundary.
"""
import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, List, Optional, Tuple
import httpx
from libs.stringify import stringify
from src.app.services.errors import ArchiveFileError, EncodingError, InvalidInputError

logger = logging.getLogger(__name__)

# only the rendered body and its Content-Type are kept from this request
FORM_URL = "http://localhost/groups/import"


@dataclass(frozen=True)
class MultipartForm:
    """An encoded form body and the content type naming its boundary"""
    body: bytes
    content_type: str


class MultipartImportEncoder:
    """
    Builds the request body for importing a project archive.

    The archive goes first under the "file" field, followed by namespace,
    path and whichever optional fields are set. The returned body is
    complete or an exception is raised; nothing partial escapes.
    """

    FILE_FIELD = "file"
    # informational only, the server ignores the real source name
    ARCHIVE_FILENAME = "group.*.tar.gz"
    ARCHIVE_CONTENT_TYPE = "application/octet-stream"

    def encode(
        self,
        file: BinaryIO,
        namespace: str,
        path: str,
        name: Optional[str] = None,
        overwrite: Optional[bool] = None,
        override_params: Any = None,
    ) -> MultipartForm:
        """
        Encode an archive and its fields.

        The caller owns the file handle and is responsible for closing it.

        Raises:
            InvalidInputError: namespace or path is missing
            ArchiveFileError: the archive could not be read
            EncodingError: a field could not be encoded
        """
        require_field("namespace", namespace)
        require_field("path", path)

        fields = [
            ("namespace", namespace),
            ("path", path),
        ]
        if name is not None:
            fields.append(("name", name))
        if overwrite is not None:
            fields.append(("overwrite", "true" if overwrite else "false"))
        if override_params is not None:
            fields.append(("override_params", stringify(override_params)))

        files: List[Tuple[str, Any]] = [
            (self.FILE_FIELD, (self.ARCHIVE_FILENAME, file, self.ARCHIVE_CONTENT_TYPE)),
        ]
        files.extend((field, (None, encode_field(field, value))) for field, value in fields)

        try:
            request = httpx.Request("POST", FORM_URL, files=files)
        except TypeError as e:
            # httpx refuses text-mode handles
            raise ArchiveFileError("archive must be opened in binary mode", reason=str(e)) from e
        except (OSError, ValueError) as e:
            # ValueError covers a closed handle
            raise ArchiveFileError("failed to open archive for reading", reason=str(e)) from e

        try:
            body = request.read()
        except (OSError, ValueError) as e:
            raise ArchiveFileError("failed to read archive", reason=str(e)) from e

        logger.debug(f"Encoded import form: fields={[field for field, _ in fields]}, body={len(body)} bytes")
        return MultipartForm(body=body, content_type=request.headers["Content-Type"])


def encode_field(field_name: str, value: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(f"failed to encode {field_name}", reason=str(e)) from e


def require_field(field_name: str, value: Optional[str]) -> None:
    if value is None or not str(value).strip():
        raise InvalidInputError(f"{field_name} is required")
