"""Splitting text into segments before conversion."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .dictionary import Dict


class Segmentation(ABC):
    """Abstract segmentation."""

    @abstractmethod
    def segment(self, text: str) -> list[str]:
        """Split ``text`` into segments whose concatenation is ``text``."""


class MaxMatchSegmentation(Segmentation):
    """Greedy longest-match segmentation against a dictionary.

    Every dictionary key found becomes a segment of its own; runs of text
    between matches are kept together as single segments.
    """

    def __init__(self, dictionary: Dict) -> None:
        self._dictionary = dictionary

    @property
    def dictionary(self) -> Dict:
        """The dictionary used for matching."""
        return self._dictionary

    def segment(self, text: str) -> list[str]:
        segments: list[str] = []
        window = self._dictionary.key_max_length
        pending_start = 0
        position = 0
        while position < len(text):
            entry = self._dictionary.match_prefix(text[position : position + window])
            if entry is None:
                position += 1
                continue
            if pending_start < position:
                segments.append(text[pending_start:position])
            segments.append(entry.key)
            position += entry.key_length
            pending_start = position
        if pending_start < len(text):
            segments.append(text[pending_start:])
        return segments