from .dtos import ImportSubmission
from .import_file_use_case import ImportFileUseCase

__all__ = [
    "ImportSubmission",
    "ImportFileUseCase",
]
