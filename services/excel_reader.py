"""
Excel Reader Service.

Reads size grades (grade de tamanhos) from Excel sheets: one row per
product and size with the planned quantity.

Uses pandas and openpyxl for Excel processing.
"""

import logging
from pathlib import Path
from typing import List, Dict, Any, Optional
import pandas as pd

from config.constants import (
    EXCEL_EXTENSIONS,
    GRADE_CODE_VARIANTS,
    GRADE_PRODUCT_VARIANTS,
    GRADE_QUANTITY_VARIANTS,
    GRADE_SIZE_VARIANTS,
    SIZE_SEPARATOR,
)
from domain.exceptions import ImportValidationError
from domain.validators import validate_file_path
from operations.size_sort_ops import sort_by_size

logger = logging.getLogger(__name__)


class GradeSheetReader:
    """
    Excel reader for size grade sheets.

    Expected columns (flexible names): Produto, Tamanho, Quantidade and
    optionally Código.
    """

    def __init__(self, file_path: Path):
        """
        Initialize reader.

        Args:
            file_path: Path to Excel file (.xlsx or .xls)

        Raises:
            ValidationError: If file doesn't exist or has the wrong extension
        """
        self.file_path = validate_file_path(
            file_path,
            must_exist=True,
            allowed_extensions=EXCEL_EXTENSIONS,
        )
        logger.info(f"Initialized grade sheet reader for: {self.file_path}")

    def _find_column(self, columns: List[str], search_terms: List[str]) -> Optional[str]:
        """
        Find column name using flexible matching.

        Tries exact match first, then partial match (case-insensitive).
        """
        for term in search_terms:
            for col in columns:
                if term.lower() == str(col).strip().lower():
                    return col

        for term in search_terms:
            for col in columns:
                if term.lower() in str(col).lower():
                    logger.debug(f"Found partial match: '{col}' contains '{term}'")
                    return col

        return None

    def read_dataframe(self, sheet_name: Optional[str] = None) -> pd.DataFrame:
        """
        Read Excel file into pandas DataFrame.

        Raises:
            ImportValidationError: If file cannot be read
        """
        try:
            df = pd.read_excel(self.file_path, sheet_name=sheet_name or 0)
        except Exception as e:
            raise ImportValidationError(
                f"Não foi possível ler o arquivo Excel: {e}",
                details={"file": str(self.file_path), "error": str(e)},
            )

        df = df.dropna(how="all")
        df = df.where(pd.notnull(df), None)
        logger.debug(f"Read {len(df)} rows from {self.file_path.name}")
        return df

    def _safe_str(self, value, default: str = "") -> str:
        """
        Convert value to string safely, handling None/NaN.

        Whole floats read by pandas ("42.0") become "42".
        """
        if value is None or pd.isna(value):
            return default
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()

    def read_grades(self, sheet_name: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Read grade lines, sorted by product and size.

        Returns:
            List of grade dicts with codigo, nome ("<produto>;TAMANHO:<tamanho>")
            and quantidadePrevista

        Raises:
            ImportValidationError: If required columns are missing or a
                quantity is not a number
        """
        df = self.read_dataframe(sheet_name)
        columns = list(df.columns)

        product_col = self._find_column(columns, GRADE_PRODUCT_VARIANTS)
        size_col = self._find_column(columns, GRADE_SIZE_VARIANTS)
        quantity_col = self._find_column(columns, GRADE_QUANTITY_VARIANTS)
        code_col = self._find_column(columns, GRADE_CODE_VARIANTS)

        missing = [
            name
            for name, col in [("produto", product_col), ("tamanho", size_col), ("quantidade", quantity_col)]
            if col is None
        ]
        if missing:
            raise ImportValidationError(
                f"Colunas obrigatórias ausentes: {', '.join(missing)}",
                details={"file": str(self.file_path), "columns": [str(c) for c in columns]},
            )

        grades = []
        for row_number, (_, row) in enumerate(df.iterrows(), start=2):
            product = self._safe_str(row[product_col])
            size = self._safe_str(row[size_col])
            if not product or not size:
                logger.debug(f"Skipping row {row_number}: missing product or size")
                continue

            raw_quantity = row[quantity_col]
            try:
                quantity = 0 if raw_quantity is None or pd.isna(raw_quantity) else int(float(raw_quantity))
            except (TypeError, ValueError):
                raise ImportValidationError(
                    f"Quantidade inválida na linha {row_number}: {raw_quantity!r}",
                    details={"file": str(self.file_path), "row": row_number},
                )

            grades.append({
                "codigo": self._safe_str(row[code_col]) if code_col else "",
                "nome": f"{product}{SIZE_SEPARATOR}{size}",
                "quantidadePrevista": quantity,
            })

        logger.info(f"Read {len(grades)} grade lines from {self.file_path.name}")
        return sort_by_size(grades, "nome")


def read_grade_sheet(file_path: Path, sheet_name: Optional[str] = None) -> List[Dict[str, Any]]:
    """Convenience wrapper: read a grade sheet in size order."""
    return GradeSheetReader(file_path).read_grades(sheet_name)
