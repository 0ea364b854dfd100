from app.services.converter_factory import ConverterFactory
from app.services.file_manager import FileManager
from app.services.job_service import Job, JobService
from app.services.retention import OutputRetention

__all__ = [
    "ConverterFactory",
    "FileManager",
    "Job",
    "JobService",
    "OutputRetention",
]
