"""
Análisis descriptivo de los registros recuperados.
"""

from .ranking import RankedEntry, frequency_table, top_n

__all__ = ["RankedEntry", "frequency_table", "top_n"]
