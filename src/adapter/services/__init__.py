from src.adapter.services.http_api_client import HttpApiClient

__all__ = ["HttpApiClient"]
