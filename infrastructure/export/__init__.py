"""
Export de fichiers tabulaires
"""

from infrastructure.export.csv_writer import CsvSummaryWriter

__all__ = [
    "CsvSummaryWriter"
]
