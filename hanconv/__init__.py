"""Dictionaries, segmentation and phrase extraction for Chinese variant conversion."""

__version__ = "1.1.9"