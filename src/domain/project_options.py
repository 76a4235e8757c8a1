from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from libs.stringify import stringify
from src.domain.enums import Visibility


class CreateProjectOptions(BaseModel):
    """Project creation settings that override those stored in an imported archive"""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    path: Optional[str] = None
    description: Optional[str] = None
    default_branch: Optional[str] = None
    visibility: Optional[Visibility] = None
    issues_enabled: Optional[bool] = None
    merge_requests_enabled: Optional[bool] = None
    wiki_enabled: Optional[bool] = None
    snippets_enabled: Optional[bool] = None
    lfs_enabled: Optional[bool] = None
    request_access_enabled: Optional[bool] = None
    build_timeout: Optional[int] = None
    ci_config_path: Optional[str] = None
    topics: Optional[List[str]] = None

    def __str__(self) -> str:
        return stringify(self)
