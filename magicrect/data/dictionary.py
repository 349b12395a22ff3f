"""Word list loading and the length-partitioned dictionary index."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from ..core.constants import ALPHABET, BLANK, DEFAULT_WORD_LIST
from ..core.exceptions import DictionaryLoadError, EmptyDictionary
from ..utils.logger import get_logger
from .normalization import clean_word, is_spellable


LOGGER = get_logger(__name__)

Pattern = Union[str, Sequence[Optional[str]]]


@dataclass
class DictionaryConfig:
    """Configuration for word list loading and filtering."""

    path: Path | str | None = None
    min_length: int = 1
    max_length: Optional[int] = None
    alphabet: str = ALPHABET

    def resolved_path(self) -> Path:
        return Path(self.path) if self.path else Path(DEFAULT_WORD_LIST)


def load_words(config: DictionaryConfig) -> List[str]:
    """Read one candidate word per line, normalized and filtered.

    Words that contain characters outside ``config.alphabet`` are skipped
    since the search can never spell them.
    """

    source = config.resolved_path()
    if not source.is_file():
        raise DictionaryLoadError(f"Missing word list: {source}")

    try:
        lines = source.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as exc:
        raise DictionaryLoadError(f"Cannot read word list {source}: {exc}") from exc

    seen: Set[str] = set()
    words: List[str] = []
    skipped = 0
    for line in lines:
        word = clean_word(line)
        if not word:
            continue
        if len(word) < config.min_length:
            continue
        if config.max_length is not None and len(word) > config.max_length:
            continue
        if not is_spellable(word, config.alphabet):
            skipped += 1
            continue
        if word in seen:
            continue
        seen.add(word)
        words.append(word)

    LOGGER.info("Loaded %s words from %s (%s unspellable skipped)", len(words), source, skipped)
    return words


def load_dictionary(config: DictionaryConfig) -> "DictionaryIndex":
    return DictionaryIndex.build(load_words(config))


class DictionaryIndex:
    """Accepted words partitioned by length, with pattern queries.

    Besides the length buckets the index keeps a positional map
    ``length -> (position, letter) -> words`` so pattern checks intersect a
    few small sets instead of scanning a whole bucket.
    """

    def __init__(self, words_by_length: Dict[int, Set[str]]) -> None:
        self._words_by_length: Dict[int, frozenset] = {
            length: frozenset(words) for length, words in words_by_length.items() if words
        }
        self._position_index: Dict[int, Dict[Tuple[int, str], Set[str]]] = {}
        for length, words in self._words_by_length.items():
            length_index: Dict[Tuple[int, str], Set[str]] = defaultdict(set)
            for word in words:
                for pos, char in enumerate(word):
                    length_index[(pos, char)].add(word)
            self._position_index[length] = dict(length_index)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def build(cls, words: Iterable[str]) -> "DictionaryIndex":
        """Partition ``words`` by length.

        Raises :class:`EmptyDictionary` when nothing usable was supplied.
        """

        buckets: Dict[int, Set[str]] = defaultdict(set)
        for word in words:
            if word:
                buckets[len(word)].add(word)
        if not buckets:
            raise EmptyDictionary("No words supplied; no rectangle can be built")
        index = cls(buckets)
        LOGGER.debug(
            "Indexed %s words across lengths %s", len(index), index.lengths()
        )
        return index

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def contains_exact(self, word: str) -> bool:
        return word in self._words_by_length.get(len(word), ())

    def has_match(self, pattern: Pattern, length: Optional[int] = None) -> bool:
        """True iff some word of ``length`` agrees with every fixed position.

        ``pattern`` holds one entry per position, ``None`` (or ``_`` in string
        form) marking a free position. ``length`` defaults to the pattern
        length.
        """

        cells = self._coerce(pattern)
        size = len(cells) if length is None else length
        if size not in self._words_by_length:
            return False
        length_index = self._position_index[size]

        constraints: List[Set[str]] = []
        for pos, letter in enumerate(cells):
            if letter is None:
                continue
            match_set = length_index.get((pos, letter))
            if not match_set:
                return False
            constraints.append(match_set)

        if not constraints:
            return True
        if len(constraints) == 1:
            return True

        constraints.sort(key=len)
        smallest, rest = constraints[0], constraints[1:]
        return any(all(word in other for other in rest) for word in smallest)

    def find_matches(self, pattern: Pattern) -> List[str]:
        """Return the sorted words matching ``pattern`` (e.g. ``"__mon"``)."""

        cells = self._coerce(pattern)
        bucket = self._words_by_length.get(len(cells))
        if not bucket:
            return []
        length_index = self._position_index[len(cells)]
        result: Optional[Set[str]] = None
        for pos, letter in enumerate(cells):
            if letter is None:
                continue
            match_set = length_index.get((pos, letter), set())
            result = set(match_set) if result is None else result & match_set
            if not result:
                return []
        return sorted(bucket if result is None else result)

    def count_matches(self, pattern: Pattern) -> int:
        return len(self.find_matches(pattern))

    def words(self, length: int) -> frozenset:
        return self._words_by_length.get(length, frozenset())

    def lengths(self) -> List[int]:
        return sorted(self._words_by_length)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._words_by_length.values())

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains_exact(word)

    @staticmethod
    def _coerce(pattern: Pattern) -> List[Optional[str]]:
        if isinstance(pattern, str):
            return [None if char == BLANK else char for char in pattern.lower()]
        return list(pattern)
