"""Output services for region listings."""
from .export import FORMATS, ExportService, export_service

__all__ = ["FORMATS", "ExportService", "export_service"]
