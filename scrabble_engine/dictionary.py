import logging
import os
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, Optional

from nltk.corpus import words as nltk_words

from .constants import BOARD_SIZE, MINIMAL_WORD_SET

logger = logging.getLogger(__name__)

WORDS_PATH_ENV = "SCRABBLE_WORDS_PATH"


class TrieNode:
    """Single node in the prefix trie."""

    __slots__ = ("children", "is_terminal")

    def __init__(self):
        self.children: Dict[str, TrieNode] = {}
        self.is_terminal: bool = False


class Trie:
    """Prefix trie for fast word and prefix checks."""

    def __init__(self, words: Iterable[str] = ()):
        self.root = TrieNode()
        for word in words:
            self._insert(word)

    def _insert(self, word: str) -> None:
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        node.is_terminal = True

    def is_prefix(self, prefix: str) -> bool:
        return self.walk(prefix) is not None

    def walk(self, s: str) -> Optional[TrieNode]:
        node = self.root
        for ch in s:
            node = node.children.get(ch)
            if node is None:
                return None
        return node


def _normalize(words: Iterable[str]) -> FrozenSet[str]:
    cleaned = (word.strip().upper() for word in words)
    return frozenset(w for w in cleaned if 2 <= len(w) <= BOARD_SIZE and w.isalpha())


class Dictionary:
    """
    Read-only word list answering "is this a valid word?".

    Built once and never changed afterwards, so a single instance is shared by
    every game (copies of a game keep pointing at the same dictionary) and can
    be read from any number of threads without locking.
    """

    def __init__(self, words: Iterable[str], source: str = "memory"):
        self._words = _normalize(words)
        self._trie = Trie(sorted(self._words))
        self.source = source

    @classmethod
    def from_words(cls, words: Iterable[str]) -> 'Dictionary':
        return cls(words)

    @classmethod
    def from_file(cls, path: str) -> 'Dictionary':
        with open(path, 'r', encoding='utf-8') as f:
            return cls(f, source=path)

    @classmethod
    def from_nltk(cls) -> 'Dictionary':
        """Builds from the nltk ``words`` corpus (raises LookupError when it is not downloaded)."""
        return cls(nltk_words.words(), source="nltk:words")

    @property
    def trie(self) -> Trie:
        return self._trie

    def is_valid_word(self, letters: str) -> bool:
        if not letters or len(letters) < 2 or not letters.isalpha():
            return False
        return letters.upper() in self._words

    def __contains__(self, word: str) -> bool:
        return self.is_valid_word(word)

    def __len__(self) -> int:
        return len(self._words)

    def __copy__(self) -> 'Dictionary':
        return self

    def __deepcopy__(self, memo) -> 'Dictionary':
        return self

    def __repr__(self) -> str:
        return f"Dictionary({len(self._words)} words from {self.source})"


def _candidate_paths(path: Optional[str]):
    if path:
        yield path
    env_path = os.environ.get(WORDS_PATH_ENV)
    if env_path:
        yield env_path
    yield 'scrabble_words.txt'
    yield os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'scrabble_words.txt')


def load_dictionary(path: Optional[str] = None) -> Dictionary:
    """
    Finds and loads a word list.

    Tries an explicit path, then ``$SCRABBLE_WORDS_PATH``, then ``scrabble_words.txt``
    in the working directory and the project root, then the nltk ``words`` corpus,
    and finally falls back to a minimal built-in word set.
    """
    dict_path_found = next((p for p in _candidate_paths(path) if os.path.exists(p)), None)
    if dict_path_found:
        try:
            dictionary = Dictionary.from_file(dict_path_found)
        except OSError as e:
            logger.error(f"Error reading dictionary file {dict_path_found}: {e}.")
        else:
            if len(dictionary):
                logger.info(f"Successfully loaded {len(dictionary)} words from {dict_path_found}")
                return dictionary
            logger.warning(f"Dictionary file {dict_path_found} contained no valid words.")
    else:
        logger.warning("scrabble_words.txt not found at expected paths.")

    try:
        dictionary = Dictionary.from_nltk()
        logger.info(f"Loaded {len(dictionary)} words from the nltk words corpus")
        return dictionary
    except LookupError:
        logger.warning("nltk words corpus is not downloaded. Using minimal word set.")
    return Dictionary(MINIMAL_WORD_SET, source="minimal")


@lru_cache(maxsize=None)
def get_default_dictionary() -> Dictionary:
    """The process-wide dictionary, loaded on first use."""
    return load_dictionary()
