from enum import Enum


class ExportStatus(str, Enum):
    """Server-side state of a project export"""
    none = "none"
    scheduled = "scheduled"
    started = "started"
    finished = "finished"
    failed = "failed"
    regeneration_in_progress = "regeneration_in_progress"

    @property
    def is_terminal(self) -> bool:
        return self in (ExportStatus.finished, ExportStatus.failed)


class ImportStatus(str, Enum):
    """Server-side state of a project import"""
    none = "none"
    scheduled = "scheduled"
    started = "started"
    finished = "finished"
    failed = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ImportStatus.finished, ImportStatus.failed)


class Visibility(str, Enum):
    private = "private"
    internal = "internal"
    public = "public"
