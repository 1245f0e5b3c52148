"""JSON export and import of arena data."""

from .services import ExportData, JsonExportService, collect_export

__all__ = ["ExportData", "JsonExportService", "collect_export"]
