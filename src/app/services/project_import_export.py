"""Project Import/Export Service

Export scheduling, status polling and archive download, plus import
status polling. Every call is a single request/decode round trip;
completion is only ever observed by polling.
"""
import io
import logging
from typing import Optional
import httpx
from src.app.services.api_client import (
    ApiClient,
    ProjectRef,
    RequestOptions,
    decode_response,
    project_path,
)
from src.app.services.import_export_dtos import ScheduleExportOptions
from src.domain.export_job import ExportJob
from src.domain.import_job import ImportJob

logger = logging.getLogger(__name__)


class ProjectImportExportService:
    """
    Client for the project import/export endpoints.

    Transport and API errors raised by the ApiClient propagate unchanged.
    Malformed project references raise InvalidInputError before any request
    is built.
    """

    def __init__(self, api_client: ApiClient):
        self.api_client = api_client

    def schedule_export(
        self,
        project_ref: ProjectRef,
        options: Optional[ScheduleExportOptions] = None,
        request_options: Optional[RequestOptions] = None,
    ) -> httpx.Response:
        """
        Ask the server to start exporting a project.

        Returns as soon as the server acknowledges the request; the export
        itself runs server-side and is tracked with export_status().
        """
        path = project_path(project_ref, "export")
        body = options.to_payload() if options is not None else None

        request = self.api_client.new_request("POST", path, body, request_options)
        response = self.api_client.do(request)
        logger.info(f"Scheduled export for project {project_ref}")
        return response

    def export_status(
        self,
        project_ref: ProjectRef,
        request_options: Optional[RequestOptions] = None,
    ) -> ExportJob:
        """Fetch a fresh snapshot of the project's export job"""
        path = project_path(project_ref, "export")

        request = self.api_client.new_request("GET", path, None, request_options)
        response = self.api_client.do(request)
        job = decode_response(response, ExportJob)
        if job.is_finished:
            logger.info(f"Export of project {project_ref} is ready for download")
        else:
            logger.debug(f"Export status for project {project_ref}: {job.status.value}")
        return job

    def export_download(
        self,
        project_ref: ProjectRef,
        request_options: Optional[RequestOptions] = None,
    ) -> bytes:
        """
        Download the finished export archive.

        Readiness is not checked locally: calling this before the export
        has finished surfaces the server's error response.
        """
        path = project_path(project_ref, "export", "download")

        request = self.api_client.new_request("GET", path, None, request_options)
        sink = io.BytesIO()
        self.api_client.do(request, sink)
        archive = sink.getvalue()
        logger.info(f"Downloaded export for project {project_ref} ({len(archive)} bytes)")
        return archive

    def import_status(
        self,
        project_ref: ProjectRef,
        request_options: Optional[RequestOptions] = None,
    ) -> ImportJob:
        """Fetch a fresh snapshot of the project's import job"""
        path = project_path(project_ref, "import")

        request = self.api_client.new_request("GET", path, None, request_options)
        response = self.api_client.do(request)
        job = decode_response(response, ImportJob)
        logger.debug(f"Import status for project {project_ref}: {job.status.value}")
        return job

