# hanconv

Building blocks for dictionary-driven conversion of Chinese text between
character variants (Simplified, Traditional, Taiwan, Hong Kong and Japanese
forms):

- dictionary entries and lexicons, with a plain-text dictionary format,
- exact and longest-prefix dictionary lookup, and ordered groups of
  dictionaries,
- two compact binary layouts for lexicons,
- maximal-match segmentation,
- a statistical phrase extractor for building new dictionaries.

It depends only on the standard library and needs Python 3.10 or later.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Entries

`hanconv.entry.DictEntry` holds a key and a tuple of candidate values. A single
string is accepted as one value:

```python
from hanconv.entry import DictEntry

entry = DictEntry("发", ["髮", "發"])
entry.default      # "髮" (the first value, or the key when there are none)
entry.num_values   # 2
entry.to_string()  # "发\t髮 發"
```

Entries compare, sort and hash by key alone.

## Text dictionaries

A text dictionary has one entry on each line: the key, a tab, then one or more
values separated by spaces.

```
干燥	乾燥
发	髮 發
```

`hanconv.lexicon.Lexicon.parse` reads such lines, given as text or as UTF-8
bytes (for instance a file opened in binary mode). A leading byte-order mark
is skipped and empty lines are ignored. A line without a tab raises
`InvalidTextDictionary`, which carries `reason` and `line_number` and is a
subclass of `InvalidFormat` (itself a `ValueError`).

```python
from hanconv.lexicon import Lexicon

with open("STPhrases.txt", "rb") as stream:
    lexicon = Lexicon.parse(stream)

lexicon.sort()
assert lexicon.is_sorted()
if not lexicon.is_unique():
    print("duplicated key:", lexicon.duplicate_key())
```

`Lexicon.write` writes the entries back out in the same format. A lexicon
supports `len()`, iteration and indexing.

## Matching

`hanconv.dictionary.Dict` is the shared interface of every dictionary:

- `match(word)` returns the entry whose key is exactly `word`, or `None`.
- `match_prefix(word, length=None)` returns the entry for the longest key that
  begins `word`, looking at no more than `length` characters when given.
- `match_all_prefixes(word, length=None)` returns the entries for every key
  that begins `word`, longest first.
- `key_max_length` is the length of the longest key, and `lexicon` holds all
  entries.

`LexiconDict` is an in-memory dictionary over a lexicon or any iterable of
entries; when keys repeat, the first entry wins. `DictGroup` consults several
dictionaries in order, and the first one that matches wins. Both offer
`from_dict` to copy another dictionary.

```python
from hanconv.dictionary import LexiconDict
from hanconv.entry import DictEntry

phrases = LexiconDict([DictEntry("干燥", "乾燥"), DictEntry("头发", "頭髮")])
phrases.match_prefix("头发干燥").default  # "頭髮"
```

## Segmentation

`hanconv.segmentation.MaxMatchSegmentation` splits text greedily on the
longest dictionary keys. Every key found becomes a segment of its own, and the
text between matches is kept together:

```python
from hanconv.segmentation import MaxMatchSegmentation

MaxMatchSegmentation(phrases).segment("太后的头发干燥")
# ["太后的", "头发", "干燥"]
```

## Binary layouts

`hanconv.binary_dict.BinaryDict` writes a lexicon (keys and values) to a
binary stream with `serialize` and reads it back with the class method
`load`. `hanconv.serialized_values.SerializedValues` does the same for the
values alone; entries it loads have empty keys. Truncated or inconsistent data
raises `InvalidFormat`.

```python
import io
from hanconv.binary_dict import BinaryDict

buffer = io.BytesIO()
BinaryDict(lexicon).serialize(buffer)
buffer.seek(0)
restored = BinaryDict.load(buffer).lexicon
```

## Phrase extraction

`hanconv.phrase_extract.PhraseExtract` finds likely words in a body of text.
For each candidate it computes:

- frequency,
- cohesion (the least pointwise mutual information over its splits),
- prefix entropy and suffix entropy (of the neighbouring characters).

```python
from hanconv.phrase_extract import PhraseExtract

extractor = PhraseExtract(word_min_length=2, word_max_length=3)
extractor.extract(corpus)
for word in extractor.words:
    print(word, extractor.frequency(word), extractor.cohesion(word))
```

The steps (`extract_suffixes`, `calculate_frequency`,
`extract_word_candidates`, `calculate_cohesions`, `calculate_prefix_entropy`,
`calculate_suffix_entropy`, `select_words`) can also be run one at a time;
each runs what it depends on first. The attributes `pre_calculation_filter`
and `post_calculation_filter` can be replaced with callables that receive the
extractor and a word and return `True` to drop the word. `reset` clears the
text, the results and any custom filters.

## What the package does not do

The package provides dictionaries, lookup, segmentation and phrase extraction,
but no ready-made text converter: there is no conversion chain that rewrites
segmented text, no loader for JSON conversion configurations, no function that
converts a dictionary file from one format to another, and no command-line
tool. Such steps have to be assembled from the pieces above, for example by
replacing each segment with the `default` of its matched entry.