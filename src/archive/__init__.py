"""Archive entry selection package."""

from src.archive.selector import select_first_pdf_entry, select_pdf_entries

__all__ = ["select_first_pdf_entry", "select_pdf_entries"]
