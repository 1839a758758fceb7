"""Boolean corpus: yes/no words per locale."""

from typing import Any, List

from utils.errors import ConfigurationError
from .corpus import Corpus

BOOLEAN_WORDS = {
    "en": (
        ["yes", "yep", "yeah", "sure", "of course", "ok", "okay", "right", "correct", "absolutely"],
        ["no", "nope", "nah", "not at all", "never", "wrong", "incorrect", "no way"],
    ),
    "fr": (
        ["oui", "ouais", "bien sur", "d'accord", "ok", "exact", "absolument", "tout a fait"],
        ["non", "pas du tout", "jamais", "faux", "absolument pas"],
    ),
}


class BooleanCorpus(Corpus):
    """Словарь "да"/"нет" для локали; значение слова - True или False."""

    def __init__(self, locale: str):
        if locale not in BOOLEAN_WORDS:
            raise ConfigurationError(f"Unsupported locale for boolean corpus: {locale!r}")
        true_words, false_words = BOOLEAN_WORDS[locale]
        super().__init__([true_words, false_words])

    def get_row_value(self, row: List[str]) -> Any:
        return row is self.matrix[0]
