"""Import/Export request DTOs

Options accepted by the export scheduling endpoint.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict


class ExportUploadOptions(BaseModel):
    """Push the finished archive to a URL instead of keeping it for download"""
    url: Optional[str] = None
    http_method: Optional[str] = None


class ScheduleExportOptions(BaseModel):
    """
    Options for scheduling a project export.
    Only fields that are set are sent.
    """
    description: Optional[str] = None
    upload: Optional[ExportUploadOptions] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(exclude_none=True)
        if not payload.get("upload"):
            payload.pop("upload", None)
        return payload

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "description": "Nightly backup",
            "upload": {
                "url": "https://storage.example.com/exports/project.tar.gz",
                "http_method": "PUT"
            }
        }
    })
