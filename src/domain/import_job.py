"""ImportJob snapshot

Read-only view of a server-side project import.
"""
from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from libs.stringify import stringify
from src.domain.enums import ImportStatus


class ImportJob(BaseModel):
    """Snapshot of a project import, created when the server accepts an archive"""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int
    description: Optional[str] = None
    name: str = ""
    name_with_namespace: str = ""
    path: str = ""
    path_with_namespace: str = ""
    # older servers spell it create_at
    created_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("created_at", "create_at")
    )
    status: ImportStatus = Field(default=ImportStatus.none, alias="import_status")

    def __str__(self) -> str:
        return stringify(self)
