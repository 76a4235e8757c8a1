"""Import File Use Case

Uploads a project archive to create a new project.
"""
import logging
from contextlib import closing
from typing import BinaryIO, Callable, Optional
from libs.result import Error, Result, Return
from src.app.services.api_client import (
    ApiClient,
    ApiError,
    DecodeError,
    RequestOptions,
    TransportError,
    decode_response,
)
from src.app.services.errors import ArchiveFileError, ArchiveTransferError
from src.app.services.multipart_encoder import (
    MultipartForm,
    MultipartImportEncoder,
    require_field,
)
from src.domain.import_job import ImportJob
from .dtos import ImportSubmission

logger = logging.getLogger(__name__)


class ImportFileUseCase:
    """
    Use case: Import File

    Opens the archive, encodes it with its fields into a multipart form and
    submits it to the import endpoint. Returns the server's initial ImportJob
    as soon as the upload is accepted; progress is tracked by polling
    ProjectImportExportService.import_status().
    """

    IMPORT_PATH = "groups/import"

    def __init__(
        self,
        api_client: ApiClient,
        encoder: Optional[MultipartImportEncoder] = None,
        opener: Callable[..., BinaryIO] = open,
    ):
        self.api_client = api_client
        self.encoder = encoder or MultipartImportEncoder()
        self.opener = opener

    def execute(
        self,
        submission: ImportSubmission,
        request_options: Optional[RequestOptions] = None,
    ) -> Result[ImportJob]:
        """
        Submit an archive for import

        Args:
            submission: Target namespace/path, optional settings and archive path
            request_options: Optional per-request overrides

        Returns:
            Result[ImportJob]: The freshly created import job, or an error whose
            code is INVALID_INPUT, ARCHIVE_FILE_ERROR, ENCODING_ERROR,
            TRANSPORT_ERROR, API_ERROR or DECODE_ERROR. Server messages are
            carried over unmodified.
        """
        try:
            require_field("namespace", submission.namespace)
            require_field("path", submission.path)
            require_field("file", str(submission.file) if submission.file else None)

            form = self._encode(submission)

            request = self.api_client.new_request("POST", self.IMPORT_PATH, form, request_options)
            response = self.api_client.do(request)
            job = decode_response(response, ImportJob)
        except ArchiveTransferError as e:
            logger.warning(f"Import of {submission.namespace}/{submission.path} not submitted: {e.message}")
            return Return.err(Error(code=e.code, message=e.message, reason=e.reason))
        except ApiError as e:
            logger.error(f"Import of {submission.namespace}/{submission.path} rejected: {e}")
            return Return.err(Error(
                code=e.code,
                message=e.message,
                reason=str(e),
                status_code=e.status_code,
            ))
        except (TransportError, DecodeError) as e:
            logger.error(f"Import of {submission.namespace}/{submission.path} failed: {e}")
            return Return.err(Error(code=e.code, message=e.message, reason=str(e)))

        logger.info(
            f"Import accepted for {submission.namespace}/{submission.path}: "
            f"job {job.id} is {job.status.value}"
        )
        return Return.ok(job)

    def _encode(self, submission: ImportSubmission) -> MultipartForm:
        try:
            archive = self.opener(submission.file, "rb")
        except OSError as e:
            logger.error(f"Cannot open archive {submission.file}: {e}")
            raise ArchiveFileError(f"cannot open archive {submission.file}", reason=str(e)) from e

        # released exactly once, whether encoding succeeds or not
        with closing(archive):
            return self.encoder.encode(
                archive,
                namespace=submission.namespace,
                path=submission.path,
                name=submission.name,
                overwrite=submission.overwrite,
                override_params=submission.override_params,
            )
