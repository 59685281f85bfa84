import pytest
from helpers import ENTRIES, WORDS

from idiomle.engine import IdiomEntry, InvalidLengthError, QuerySlot, SlotState, find_by_query

AIZENG = [IdiomEntry.from_strings("爱憎分明", "ai4 zeng1 fen1 ming2")]


def slot(value, pinyin=None, tone=None):
    return QuerySlot(value, pinyin, tone)


def test_all_wildcards_return_dictionary_unchanged():
    assert find_by_query(ENTRIES, [None, None, None, None]) == WORDS
    assert find_by_query(ENTRIES, [slot(""), None, slot("  "), None]) == WORDS


@pytest.mark.parametrize("value,expected", [
    ("zeng1", ["爱憎分明"]),
    ("zeng2", []),
    ("zong1", []),
])
def test_exact_syllable_scenario(value, expected):
    query = [None, {"value": value, "pinyinState": "correct", "toneState": "correct"}, None, None]
    assert find_by_query(AIZENG, query) == expected


def test_partial_tone_behaves_like_correct():
    assert find_by_query(AIZENG, [None, slot("zeng1", "correct", "partial"), None, None]) == ["爱憎分明"]
    assert find_by_query(AIZENG, [None, slot("zeng2", "correct", "partial"), None, None]) == []


def test_partial_base_is_a_prefix_match():
    assert find_by_query(ENTRIES, [slot("lo", "partial"), None, None, None]) == ["龙飞凤舞"]


def test_absent_base_rejects_whole_idiom():
    out = find_by_query(ENTRIES, [slot("yi", "absent"), None, None, None])
    assert "一心一意" not in out and "一马当先" not in out and "三心二意" not in out
    assert len(out) == len(WORDS) - 3


def test_correct_base_and_tone():
    out = find_by_query(ENTRIES, [None, slot("xin1", "correct", "correct"), None, None])
    assert out == ["一心一意", "三心二意", "卧薪尝胆"]


def test_absent_tone_is_global():
    out = find_by_query(ENTRIES, [None, slot("xin3", "correct", "absent"), None, None])
    assert out == ["一心一意", "三心二意"]


def test_tone_ignored_without_digit():
    out = find_by_query(ENTRIES, [None, slot("xin", "correct", "absent"), None, None])
    assert out == ["一心一意", "三心二意", "卧薪尝胆"]


def test_digits_only_is_a_tone_suffix_check():
    out = find_by_query(ENTRIES, [None, None, None, slot("2", "absent", "absent")])
    assert out == ["爱憎分明", "心想事成", "画蛇添足", "亡羊补牢", "对牛弹琴", "胸有成竹", "万紫千红"]


@pytest.mark.parametrize("value", ["lv4", "lü4", "LV4", " lv4 "])
def test_query_values_are_normalized(value):
    assert find_by_query(ENTRIES, [slot(value, "correct", "correct"), None, None, None]) == ["绿草如茵"]


@pytest.mark.parametrize("value", ["x!n", "xin12", "心"])
def test_malformed_values_fail_closed(value):
    assert find_by_query(ENTRIES, [None, slot(value, "correct"), None, None]) == []


def test_unset_states_do_not_constrain():
    assert find_by_query(ENTRIES, [slot("zzz9"), None, None, None]) == WORDS


def test_query_must_have_four_slots():
    with pytest.raises(InvalidLengthError):
        find_by_query(ENTRIES, [None, None, None])


def test_unknown_state_is_rejected():
    with pytest.raises(ValueError):
        find_by_query(ENTRIES, [{"value": "yi1", "pinyinState": "maybe"}, None, None, None])


def test_slot_states_are_coerced():
    s = QuerySlot.coerce({"value": "yi1", "pinyin_state": "Correct", "toneState": None})
    assert s.pinyin_state is SlotState.CORRECT
    assert s.tone_state is SlotState.UNSET
    assert (s.syllable.base, s.syllable.tone) == ("yi", "1")


def test_entry_requires_four_well_formed_syllables():
    with pytest.raises(InvalidLengthError):
        IdiomEntry.from_strings("爱憎分明", "ai4 zeng1 fen1")
    with pytest.raises(ValueError):
        IdiomEntry.from_strings("爱憎分明", "ai4 zeng1 fen1 2")
