import logging
import pathlib
import random

import requests

from config import RESERVED_WORDS, WORD_LENGTH
from errors import DictionaryUnavailable, EmptyWordList, InvalidTarget, NoTargetSet

LOG = logging.getLogger(__name__)


class WordSource:
    """The dictionary of guessable words and the word to be found.

    The dictionary never changes once built. The target only changes
    through :meth:`set_target`, which validates before it replaces.
    """

    def __init__(self, words, target=None, word_length=WORD_LENGTH):
        if not isinstance(words, frozenset):
            words = frozenset(w.strip().upper() for w in words)
        self.words = words
        self.word_length = word_length
        self._target = None
        if target is not None:
            self.set_target(target)

    def __len__(self):
        return len(self.words)

    def contains(self, word: str) -> bool:
        return len(word) == self.word_length and word.upper() in self.words

    def current_target(self) -> str:
        if self._target is None:
            raise NoTargetSet()
        return self._target

    def set_target(self, word: str):
        if not (len(word) == self.word_length and word.isalpha() and word.isupper()):
            raise InvalidTarget()
        if not self.contains(word):
            raise InvalidTarget()
        self._target = word

    def pick_random_target(self, words, rng=None) -> str:
        if not words:
            raise EmptyWordList()
        rng = rng or random
        candidates = list(words)
        rng.shuffle(candidates)
        self.set_target(candidates[0].upper())
        return self._target


def parse_words(text: str, word_length=WORD_LENGTH):
    words = []
    for line in text.splitlines():
        word = line.strip().upper()
        if len(word) != word_length or not word.isalpha():
            continue
        if word in RESERVED_WORDS:
            LOG.warning("Dropping reserved command word %s from the word list", word)
            continue
        words.append(word)
    return words


def fetch_words(url: str, timeout=10):
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        LOG.error("Failed to fetch word list from %s: %s", url, e)
        raise DictionaryUnavailable() from e
    return parse_words(response.text)


def read_words(path):
    try:
        text = pathlib.Path(path).read_text(encoding="utf-8")
    except OSError as e:
        LOG.error("Failed to read word list %s: %s", path, e)
        raise DictionaryUnavailable() from e
    return parse_words(text)


def load_words(url=None, path=None, timeout=10):
    """Load the word list from ``path`` if given, otherwise from ``url``."""
    words = read_words(path) if path else fetch_words(url, timeout=timeout)
    if not words:
        LOG.error("Word list is empty")
        raise EmptyWordList()
    LOG.info("Loaded %d words", len(words))
    return words
