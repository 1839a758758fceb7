"""
Corpus - словарь распознаваемых слов.

Каждая строка словаря - группа синонимов, первое слово группы
является каноническим значением.
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union


@dataclass
class NormalizationOptions:
    """
    Параметры нормализации текста.

    Attributes:
        case_sensitive: Не приводить к нижнему регистру
        keep_accents: Не удалять диакритические знаки
    """
    case_sensitive: bool = False
    keep_accents: bool = False


def _remove_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


class Corpus:
    """Словарь слов с нормализацией и поиском канонического значения."""

    def __init__(self, matrix: Sequence[Union[str, Sequence[str]]]):
        self.matrix: List[List[str]] = [
            [row] if isinstance(row, str) else list(row) for row in matrix
        ]

    @staticmethod
    def normalize(text: str, options: Optional[NormalizationOptions] = None) -> str:
        """
        Нормализация текста: регистр, диакритика, пробелы.

        Args:
            text: Исходный текст
            options: Параметры нормализации

        Returns:
            str: Нормализованный текст
        """
        options = options or NormalizationOptions()
        normalized = text
        if not options.case_sensitive:
            normalized = normalized.lower()
        if not options.keep_accents:
            normalized = _remove_accents(normalized)
        return re.sub(r"\s+", " ", normalized).strip()

    def get_words(self) -> List[str]:
        """Все слова словаря в порядке объявления."""
        return [word for row in self.matrix for word in row]

    def get_value(self, word: str, options: Optional[NormalizationOptions] = None) -> Any:
        """Каноническое значение для нормализованного слова или None."""
        for row in self.matrix:
            for candidate in row:
                if self.normalize(candidate, options) == word:
                    return self.get_row_value(row)
        return None

    def get_row_value(self, row: List[str]) -> Any:
        return row[0]
