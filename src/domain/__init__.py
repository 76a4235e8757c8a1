from src.domain.enums import ExportStatus, ImportStatus, Visibility
from src.domain.export_job import ExportJob, ExportLinks
from src.domain.import_job import ImportJob
from src.domain.project_options import CreateProjectOptions

__all__ = [
    # Enums
    "ExportStatus",
    "ImportStatus",
    "Visibility",
    # Snapshots
    "ExportJob",
    "ExportLinks",
    "ImportJob",
    # Options
    "CreateProjectOptions",
]
