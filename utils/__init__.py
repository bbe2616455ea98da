"""
Export helpers: a company's scheme suggestions as CSV / Excel
"""
from .report_generator import (
    COLUMNS,
    suggestions_dataframe,
    generate_csv,
    generate_excel,
)

__all__ = [
    'COLUMNS',
    'suggestions_dataframe',
    'generate_csv',
    'generate_excel',
]
