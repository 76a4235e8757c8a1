"""Import DTOs

Data Transfer Objects for project archive import.
"""
from pathlib import Path
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict
from src.domain.project_options import CreateProjectOptions


class ImportSubmission(BaseModel):
    """Everything needed to build one import request"""
    namespace: str
    path: str
    file: Union[str, Path]
    name: Optional[str] = None
    overwrite: Optional[bool] = None
    override_params: Optional[Union[CreateProjectOptions, Dict[str, Any]]] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "namespace": "my-group",
            "path": "imported-project",
            "file": "/tmp/project-export.tar.gz",
            "name": "Imported Project",
            "overwrite": False,
            "override_params": {"visibility": "private"}
        }
    })
