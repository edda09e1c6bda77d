import math

import pytest

from hanconv.phrase_extract import (
    PhraseExtract,
    Signals,
    contains_punctuation,
    default_post_calculation_filter,
    default_pre_calculation_filter,
)

SI_SHI = "四是四十是十十四是十四四十是四十"
PUNCTUATION = "一.二.三"


def _extractor(text=SI_SHI, max_length=3):
    extractor = PhraseExtract()
    extractor.reset()
    extractor.word_min_length = 1
    extractor.word_max_length = max_length
    extractor.set_full_text(text)
    return extractor


def test_extract_suffixes():
    extractor = _extractor()
    extractor.extract_suffixes()
    assert extractor.suffixes == [
        "十", "十十四是", "十四四十", "十四是十", "十是十十", "十是四十",
        "四十", "四十是十", "四十是四", "四四十是", "四是十四", "四是四十",
        "是十十四", "是十四四", "是四十", "是四十是",
    ]


def test_extract_prefixes():
    extractor = _extractor()
    extractor.extract_prefixes()
    assert extractor.prefixes == [
        "十是十十", "十四四十", "十是四十", "四是四十", "四十是十",
        "十四是十", "四", "是十十四", "四是十四", "是十四四", "四十是四",
        "四是四", "四四十是", "是四十是", "四是", "十十四是",
    ]


def test_calculate_frequency():
    extractor = _extractor()
    extractor.calculate_frequency()
    assert extractor.frequency("四") == 6
    assert extractor.frequency("十") == 6
    assert extractor.frequency("是") == 4
    assert extractor.frequency("四十") == 3
    assert extractor.frequency("是四十") == 2
    assert extractor.frequency("是四") == 2
    assert extractor.frequency("四是") == 2
    assert extractor.log_probability("四") == pytest.approx(-2.0149030205422647)
    assert extractor.log_probability("十") == pytest.approx(-2.0149030205422647)
    assert extractor.log_probability("是") == pytest.approx(-2.4203681286504288)
    assert extractor.log_probability("四十") == pytest.approx(-2.7080502011022096)
    assert extractor.log_probability("是十十") == pytest.approx(-3.8066624897703196)


def test_probability_matches_log_probability():
    extractor = _extractor()
    extractor.calculate_frequency()
    for word in ("四", "是", "四十", "是十十"):
        assert extractor.probability(word) == pytest.approx(
            math.exp(extractor.log_probability(word))
        )


def test_extract_word_candidates():
    extractor = _extractor()
    extractor.extract_word_candidates()
    assert extractor.word_candidates == [
        "十", "四", "是", "四十", "十四", "十是",
        "四十是", "四是", "是十", "是四", "是四十", "十十",
        "十十四", "十四四", "十四是", "十是十", "十是四", "四四",
        "四四十", "四是十", "四是四", "是十十", "是十四",
    ]


def test_calculate_cohesions():
    extractor = _extractor()
    extractor.calculate_cohesions()
    assert extractor.cohesion("四") == math.inf
    assert extractor.cohesion("四十") == pytest.approx(1.3217558399823193)
    assert extractor.cohesion("十四") == pytest.approx(0.91629073187415511)
    assert extractor.cohesion("十是") == pytest.approx(1.3217558399823193)
    assert extractor.cohesion("四是四") == pytest.approx(1.3217558399823193)
    assert extractor.cohesion("十是十") == pytest.approx(1.3217558399823193)


def test_calculate_suffix_entropy():
    extractor = _extractor()
    extractor.calculate_suffix_entropy()
    assert extractor.suffix_entropy("十") == pytest.approx(1.0549201679861442)
    assert extractor.suffix_entropy("四") == pytest.approx(1.0114042647073518)
    assert extractor.suffix_entropy("十四") == pytest.approx(0.69314718055994529)
    assert extractor.suffix_entropy("十是") == pytest.approx(0.69314718055994529)
    assert extractor.suffix_entropy("四十") == 0
    assert extractor.suffix_entropy("四是四") == 0
    assert extractor.suffix_entropy("十是十") == 0


def test_calculate_prefix_entropy():
    extractor = _extractor()
    extractor.calculate_prefix_entropy()
    assert extractor.prefix_entropy("十") == pytest.approx(1.0114042647073516)
    assert extractor.prefix_entropy("四") == pytest.approx(1.0549201679861442)
    assert extractor.prefix_entropy("十四") == pytest.approx(0.69314718055994529)
    assert extractor.prefix_entropy("十是") == 0
    assert extractor.prefix_entropy("四十") == pytest.approx(0.63651416829481278)
    assert extractor.prefix_entropy("四是四") == 0
    assert extractor.prefix_entropy("十是十") == 0


def test_entropy_is_sum_of_both_sides():
    extractor = _extractor()
    extractor.calculate_suffix_entropy()
    extractor.calculate_prefix_entropy()
    for word in ("十", "四", "十四", "四十"):
        assert extractor.entropy(word) == pytest.approx(
            extractor.suffix_entropy(word) + extractor.prefix_entropy(word)
        )


def test_select_words_with_custom_filter():
    extractor = _extractor()
    extractor.post_calculation_filter = lambda p, word: p.frequency(word) == 1
    extractor.select_words()
    assert extractor.words == [
        "十", "四", "是", "四十", "十四",
        "十是", "四十是", "四是", "是十",
        "是四", "是四十",
    ]


def test_select_words_default_filter_keeps_subset_of_candidates():
    extractor = _extractor()
    extractor.select_words()
    candidates = extractor.word_candidates
    assert set(extractor.words) <= set(candidates)
    positions = [candidates.index(word) for word in extractor.words]
    assert positions == sorted(positions)


def test_default_post_filter_rejects_common_single_character():
    extractor = _extractor()
    extractor.calculate_cohesions()
    extractor.calculate_prefix_entropy()
    extractor.calculate_suffix_entropy()
    assert default_post_calculation_filter(extractor, "十") is True


def test_prefixes_with_punctuation():
    extractor = _extractor(PUNCTUATION, max_length=2)
    extractor.extract_prefixes()
    assert extractor.prefixes == ["一.", ".二.", "一", "二.三", "一.二"]


def test_word_candidates_exclude_punctuation():
    extractor = _extractor(PUNCTUATION, max_length=2)
    extractor.extract_word_candidates()
    assert extractor.word_candidates
    assert not any(contains_punctuation(word) for word in extractor.word_candidates)


@pytest.mark.parametrize(
    "word, expected",
    [("一.二", True), ("四十", False), ("「好", True), ("a b", True), ("好", False)],
)
def test_contains_punctuation(word, expected):
    assert contains_punctuation(word) is expected


def test_default_pre_filter_accepts_everything():
    extractor = _extractor()
    extractor.calculate_frequency()
    assert default_pre_calculation_filter(extractor, "四十") is False


def test_pre_filter_removes_candidates():
    extractor = _extractor()
    extractor.pre_calculation_filter = lambda p, word: "是" in word
    extractor.extract_word_candidates()
    assert extractor.word_candidates == [
        "十", "四", "四十", "十四", "十十", "十十四", "十四四", "四四", "四四十",
    ]


def test_reset_restores_default_filters_and_clears_results():
    extractor = _extractor()
    extractor.post_calculation_filter = lambda p, word: False
    extractor.select_words()
    extractor.reset()
    assert extractor.post_calculation_filter is default_post_calculation_filter
    assert extractor.pre_calculation_filter is default_pre_calculation_filter
    assert extractor.words == []
    assert extractor.word_candidates == []
    with pytest.raises(KeyError):
        extractor.signal("四")


def test_signal_of_unknown_word_raises():
    extractor = _extractor()
    extractor.calculate_frequency()
    with pytest.raises(KeyError):
        extractor.signal("五")


def test_signal_holds_frequency():
    extractor = _extractor()
    extractor.calculate_frequency()
    assert extractor.signal("四十") == Signals(frequency=3)


def test_extract_runs_every_step():
    extractor = PhraseExtract()
    extractor.post_calculation_filter = lambda p, word: p.frequency(word) == 1
    extractor.extract(SI_SHI)
    assert extractor.words == ["四十", "十四", "十是", "四是", "是十", "是四"]
    assert extractor.suffixes == []
    assert extractor.prefixes == []


def test_extract_empty_text():
    extractor = PhraseExtract()
    extractor.extract("")
    assert extractor.words == []
    assert extractor.word_candidates == []