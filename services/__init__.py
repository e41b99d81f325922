"""
Services layer for Confecção OP.

Infrastructure services that support the operations layer.
"""

from .excel_reader import GradeSheetReader, read_grade_sheet

__all__ = [
    # Excel Reader
    "GradeSheetReader",
    "read_grade_sheet",
]
