# shiftgen/io - Input/output handling
from .csv_loader import load_shifts, load_templates, save_shifts, save_templates
from .excel_export import export_preview_to_csv, export_preview_to_excel

__all__ = [
    "load_templates", "load_shifts", "save_shifts", "save_templates",
    "export_preview_to_excel", "export_preview_to_csv",
]
