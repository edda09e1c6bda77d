"""Statistical extraction of likely phrases from raw text.

Candidate words are scored by frequency, cohesion (the lowest pointwise
mutual information over every split of the word) and the entropy of the
characters seen before and after them. Lengths are counted in characters.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

_PUNCTUATIONS = (
    " ", "\n", "\r", "\t", "-", ",", ".", "?", "!", "*", "\u3000",
    "，", "。", "、", "；", "：", "？", "！", "…", "“", "”", "「",
    "」", "—", "－", "（", "）", "《", "》", "．", "／", "＼",
)

WordFilter = Callable[["PhraseExtract", str], bool]


@dataclass
class Signals:
    """Statistics gathered for one word candidate."""

    frequency: int = 0
    cohesion: float = 0.0
    suffix_entropy: float = 0.0
    prefix_entropy: float = 0.0


def contains_punctuation(word: str) -> bool:
    """Whether ``word`` contains whitespace or a punctuation mark."""
    return any(mark in word for mark in _PUNCTUATIONS)


def default_pre_calculation_filter(extractor: PhraseExtract, word: str) -> bool:
    """Reject only empty words, so every counted substring passes."""
    return not word


def default_post_calculation_filter(extractor: PhraseExtract, word: str) -> bool:
    """Reject words whose cohesion or surrounding entropy is too low."""
    signals = extractor.signal(word)
    log_probability = extractor.log_probability(word)
    cohesion_score = signals.cohesion - log_probability * 0.5
    entropy_score = (
        math.sqrt(signals.prefix_entropy * (signals.suffix_entropy + 1))
        - log_probability * 0.85
    )
    accept = (
        cohesion_score > 9
        and entropy_score > 11
        and signals.prefix_entropy > 0.5
        and signals.suffix_entropy > 0
        and signals.prefix_entropy + signals.suffix_entropy > 3
    )
    return not accept


def _log(number: float) -> float:
    return math.log(number) if number > 0 else -math.inf


def _entropy(choices: Counter[str]) -> float:
    total = sum(choices.values())
    if not total:
        return 0.0
    entropy = 0.0
    for occurrence in choices.values():
        probability = occurrence / total
        entropy += probability * math.log(probability)
    return -entropy if entropy != 0 else 0.0


class PhraseExtract:
    """Finds phrases in a text from its character statistics.

    Each step runs the steps it depends on if they have not run yet;
    :meth:`extract` runs them all in order.
    """

    def __init__(
        self,
        word_min_length: int = 2,
        word_max_length: int = 2,
        prefix_set_length: int = 1,
        suffix_set_length: int = 1,
    ) -> None:
        self.word_min_length = word_min_length
        self.word_max_length = word_max_length
        self.prefix_set_length = prefix_set_length
        self.suffix_set_length = suffix_set_length
        self.reset()

    def reset(self) -> None:
        """Forget the text, all results and any custom filters."""
        self._prefixes_extracted = False
        self._suffixes_extracted = False
        self._frequencies_calculated = False
        self._word_candidates_extracted = False
        self._cohesions_calculated = False
        self._prefix_entropies_calculated = False
        self._suffix_entropies_calculated = False
        self._words_selected = False
        self._total_occurrence = 0
        self._log_total_occurrence = 0.0
        self._prefixes: list[str] = []
        self._suffixes: list[str] = []
        self._word_candidates: list[str] = []
        self._words: list[str] = []
        self._signals: dict[str, Signals] = {}
        self._full_text = ""
        self.pre_calculation_filter: WordFilter = default_pre_calculation_filter
        self.post_calculation_filter: WordFilter = default_post_calculation_filter

    def set_full_text(self, text: str) -> None:
        """Set the text to analyse."""
        self._full_text = text

    def extract(self, text: str) -> None:
        """Run every step on ``text``; the result is in :attr:`words`."""
        self.set_full_text(text)
        self.extract_suffixes()
        self.calculate_frequency()
        self.calculate_suffix_entropy()
        self.release_suffixes()
        self.extract_prefixes()
        self.calculate_prefix_entropy()
        self.release_prefixes()
        self.extract_word_candidates()
        self.calculate_cohesions()
        self.select_words()

    @property
    def words(self) -> list[str]:
        """The selected words, most frequent first."""
        return list(self._words)

    @property
    def word_candidates(self) -> list[str]:
        """The word candidates, most frequent first, then in key order."""
        return list(self._word_candidates)

    @property
    def suffixes(self) -> list[str]:
        """Text windows starting at every position, sorted."""
        return list(self._suffixes)

    @property
    def prefixes(self) -> list[str]:
        """Text windows ending at every position, sorted from the right."""
        return list(self._prefixes)

    def release_suffixes(self) -> None:
        """Drop the suffix windows to save memory."""
        self._suffixes = []
        self._suffixes_extracted = False

    def release_prefixes(self) -> None:
        """Drop the prefix windows to save memory."""
        self._prefixes = []
        self._prefixes_extracted = False

    def extract_suffixes(self) -> None:
        """Collect the window of text starting at each position."""
        span = self.word_max_length + self.suffix_set_length
        text = self._full_text
        self._suffixes = sorted(text[start : start + span] for start in range(len(text)))
        self._suffixes_extracted = True

    def extract_prefixes(self) -> None:
        """Collect the window of text ending at each position."""
        span = self.word_max_length + self.prefix_set_length
        text = self._full_text
        windows = (text[max(0, end - span) : end] for end in range(len(text), 0, -1))
        self._prefixes = sorted(windows, key=lambda window: window[::-1])
        self._prefixes_extracted = True

    def calculate_frequency(self) -> None:
        """Count every substring up to the maximum word length."""
        if not self._suffixes_extracted:
            self.extract_suffixes()
        counts: Counter[str] = Counter()
        for suffix in self._suffixes:
            for size in range(1, min(len(suffix), self.word_max_length) + 1):
                counts[suffix[:size]] += 1
        self._total_occurrence = sum(counts.values())
        self._log_total_occurrence = _log(self._total_occurrence)
        self._signals = {word: Signals(frequency=counts[word]) for word in sorted(counts)}
        self._frequencies_calculated = True

    def extract_word_candidates(self) -> None:
        """Pick the substrings that may be words, most frequent first."""
        if not self._frequencies_calculated:
            self.calculate_frequency()
        candidates = [
            word
            for word in self._signals
            if len(word) >= self.word_min_length
            and not contains_punctuation(word)
            and not self.pre_calculation_filter(self, word)
        ]
        candidates.sort(key=lambda word: (-self._signals[word].frequency, word))
        self._word_candidates = candidates
        self._word_candidates_extracted = True

    def _adjacent_entropies(
        self, windows: Iterable[str], set_length: int, from_start: bool
    ) -> Iterator[tuple[str, float]]:
        for length in range(self.word_min_length, self.word_max_length + 1):
            adjacent: Counter[str] = Counter()
            last_word = ""
            for window in windows:
                size = len(window)
                if size < length:
                    continue
                word = window[:length] if from_start else window[size - length :]
                if word != last_word:
                    if last_word:
                        yield last_word, _entropy(adjacent)
                        adjacent = Counter()
                    last_word = word
                if length + set_length <= size:
                    if from_start:
                        neighbour = window[length : length + set_length]
                    else:
                        start = size - length - set_length
                        neighbour = window[start : start + set_length]
                    adjacent[neighbour] += 1
            if last_word:
                yield last_word, _entropy(adjacent)

    def calculate_suffix_entropy(self) -> None:
        """Entropy of the characters that follow each substring."""
        if not self._suffixes_extracted:
            self.extract_suffixes()
        if not self._frequencies_calculated:
            self.calculate_frequency()
        for word, entropy in self._adjacent_entropies(
            self._suffixes, self.suffix_set_length, from_start=True
        ):
            self.signal(word).suffix_entropy = entropy
        self._suffix_entropies_calculated = True

    def calculate_prefix_entropy(self) -> None:
        """Entropy of the characters that precede each substring."""
        if not self._prefixes_extracted:
            self.extract_prefixes()
        if not self._frequencies_calculated:
            self.calculate_frequency()
        for word, entropy in self._adjacent_entropies(
            self._prefixes, self.prefix_set_length, from_start=False
        ):
            self.signal(word).prefix_entropy = entropy
        self._prefix_entropies_calculated = True

    def calculate_cohesions(self) -> None:
        """Cohesion of every word candidate."""
        if not self._word_candidates_extracted:
            self.extract_word_candidates()
        if not self._frequencies_calculated:
            self.calculate_frequency()
        for word in self._word_candidates:
            self.signal(word).cohesion = self._calculate_cohesion(word)
        self._cohesions_calculated = True

    def select_words(self) -> None:
        """Keep the candidates the post-calculation filter does not reject."""
        if not self._word_candidates_extracted:
            self.extract_word_candidates()
        if not self._cohesions_calculated:
            self.calculate_cohesions()
        if not self._prefix_entropies_calculated:
            self.calculate_prefix_entropy()
        if not self._suffix_entropies_calculated:
            self.calculate_suffix_entropy()
        self._words = [
            word
            for word in self._word_candidates
            if not self.post_calculation_filter(self, word)
        ]
        self._words_selected = True

    def signal(self, word: str) -> Signals:
        """The statistics of ``word``; KeyError if it was never counted."""
        try:
            return self._signals[word]
        except KeyError:
            raise KeyError(f"Unknown word: {word!r}") from None

    def cohesion(self, word: str) -> float:
        """Lowest pointwise mutual information over the splits of ``word``."""
        return self.signal(word).cohesion

    def entropy(self, word: str) -> float:
        """Sum of the suffix and prefix entropies."""
        return self.suffix_entropy(word) + self.prefix_entropy(word)

    def suffix_entropy(self, word: str) -> float:
        """Entropy of the characters following ``word``."""
        return self.signal(word).suffix_entropy

    def prefix_entropy(self, word: str) -> float:
        """Entropy of the characters preceding ``word``."""
        return self.signal(word).prefix_entropy

    def frequency(self, word: str) -> int:
        """How often ``word`` occurs."""
        return self.signal(word).frequency

    def probability(self, word: str) -> float:
        """Frequency of ``word`` relative to all counted substrings."""
        return self.frequency(word) / self._total_occurrence

    def log_probability(self, word: str) -> float:
        """Natural logarithm of :meth:`probability`."""
        return _log(self.frequency(word)) - self._log_total_occurrence

    def _pmi(self, word: str, part1: str, part2: str) -> float:
        return (
            self.log_probability(word)
            - self.log_probability(part1)
            - self.log_probability(part2)
        )

    def _calculate_cohesion(self, word: str) -> float:
        return min(
            (self._pmi(word, word[:split], word[split:]) for split in range(1, len(word))),
            default=math.inf,
        )