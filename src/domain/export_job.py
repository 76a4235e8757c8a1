"""ExportJob snapshot

Read-only view of a server-side project export, as returned by the
export status endpoint.
"""
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from libs.stringify import stringify
from src.domain.enums import ExportStatus


class ExportLinks(BaseModel):
    """Download locations, only published once the export has finished"""
    model_config = ConfigDict(frozen=True)

    api_url: Optional[str] = None
    web_url: Optional[str] = None


class ExportJob(BaseModel):
    """
    Snapshot of a project export.

    The server owns the job; every status query yields a fresh snapshot
    and the client never mutates one.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int
    description: Optional[str] = None
    name: str = ""
    name_with_namespace: str = ""
    path: str = ""
    path_with_namespace: str = ""
    created_at: Optional[datetime] = None
    status: ExportStatus = Field(default=ExportStatus.none, alias="export_status")
    message: Optional[str] = None
    links: Optional[ExportLinks] = Field(default=None, alias="_links")

    @model_validator(mode="before")
    @classmethod
    def _links_only_when_finished(cls, data: Any) -> Any:
        # links are meaningless before the archive exists
        if isinstance(data, dict):
            status = data.get("export_status", data.get("status"))
            if status != ExportStatus.finished:
                data = {k: v for k, v in data.items() if k not in ("_links", "links")}
        return data

    @property
    def is_finished(self) -> bool:
        return self.status == ExportStatus.finished

    def __str__(self) -> str:
        return stringify(self)
