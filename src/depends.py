import logging
from config import ApplicationConfig
from src.adapter.services.http_api_client import HttpApiClient
from src.app.services.api_client import ApiClient
from src.app.services.project_import_export import ProjectImportExportService
from src.app.use_cases.imports import ImportFileUseCase


def configure_logging(config=ApplicationConfig) -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def get_api_client(config=ApplicationConfig) -> HttpApiClient:
    """API client configured from an explicit config object"""
    return HttpApiClient(
        base_url=config.API_URL,
        private_token=config.PRIVATE_TOKEN or None,
        timeout=config.REQUEST_TIMEOUT,
        user_agent=config.USER_AGENT,
    )


def get_import_export_service(api_client: ApiClient) -> ProjectImportExportService:
    return ProjectImportExportService(api_client)


def get_import_file_use_case(api_client: ApiClient) -> ImportFileUseCase:
    return ImportFileUseCase(api_client)
