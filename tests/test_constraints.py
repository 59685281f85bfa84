import pytest
from helpers import TABLE, WORDS, flat_provider, pm

from idiomle.engine import (
    GuessRecord,
    InvalidLengthError,
    MAX_CANDIDATES,
    PhoneticDecompositionError,
    PinyinHint,
    compare,
    filter_candidates,
    hint_matches,
    make_record,
)
from idiomle.phonetics import PhoneticCache, PhoneticForm, TableProvider

FLAT = flat_provider("一二三四五六心意")
ALL_EXACT = [pm("b", "a", 1, "GGG")] * 4


def test_filter_character_constraints():
    rec = make_record("一心一意", "GYG-", ALL_EXACT)
    words = ["一二一心", "一心一二", "一二一意", "二心一一", "一二一三"]
    assert filter_candidates(words, [rec], FLAT) == ["一二一心"]


def test_filter_none_with_duplicate_accounted_elsewhere():
    # 一 is EXACT at position 1, so NONE at position 2 only means "no extra copy"
    rec = make_record("二一一三", "-G-Y", ALL_EXACT)
    words = ["三一四五", "三一五二", "一一四五"]
    assert filter_candidates(words, [rec], FLAT) == ["三一四五"]


PHON = TableProvider({
    "子": PhoneticForm("zh", "ang", 1, "zhāng"),
    "丑": PhoneticForm("zh", "ōng", 1, "zhōng"),
    "寅": PhoneticForm("sh", "ong", 1, "shōng"),
    "卯": PhoneticForm("x", "ie", 5, "xie"),
})
OTHERS = [pm("b", "a", 2), pm("m", "i", 3), pm("f", "u", 4)]


def test_filter_phonetic_exact_and_none():
    rec = make_record("甲乙丙丁", "----", [pm("zh", "ong", 1, "G-G")] + OTHERS)
    words = ["寅卯卯卯", "丑卯卯卯", "子卯卯卯"]
    # 寅: wrong initial; 丑: final "ōng" is "ong" once tone marks are stripped
    assert filter_candidates(words, [rec], PHON) == ["子卯卯卯"]


def test_filter_phonetic_partial():
    rec = make_record("甲乙丙丁", "----", [pm("zh", "ong", 1, "Y-Y")] + OTHERS)
    assert filter_candidates(["子卯卯卯", "卯子卯卯"], [rec], PHON) == ["卯子卯卯"]


def test_filter_with_real_comparison():
    rec = compare("一心一意", "一马当先", TABLE)
    assert filter_candidates(WORDS, [rec], TABLE) == ["一马当先"]


@pytest.mark.parametrize("target", WORDS[:6])
def test_target_survives_its_own_feedback(target):
    cache = PhoneticCache(TABLE)
    for guess in WORDS:
        rec = compare(guess, target, cache)
        assert target in filter_candidates(WORDS, [rec], cache)


def test_filter_is_idempotent_and_monotone():
    cache = PhoneticCache(TABLE)
    h1 = [compare("三心二意", "心想事成", cache)]
    h2 = h1 + [compare("画蛇添足", "心想事成", cache)]
    f1 = filter_candidates(WORDS, h1, cache)
    assert filter_candidates(WORDS, h1, cache) == f1
    f2 = filter_candidates(WORDS, h2, cache)
    assert set(f2) <= set(f1)
    assert "心想事成" in f2


def test_empty_history_keeps_dictionary_order_with_cap():
    words = [chr(0x4E00 + i) * 4 for i in range(150)]
    assert filter_candidates(words, [], FLAT) == words[:MAX_CANDIDATES]
    assert filter_candidates(words, [], FLAT, limit=None) == words
    assert filter_candidates(words, [], FLAT, limit=10) == words[:10]


def test_filter_rejects_malformed_dictionary_entry():
    with pytest.raises(InvalidLengthError):
        filter_candidates(["一心一意", "一心"], [], FLAT)


def test_filter_propagates_decomposition_errors():
    # 七 has no reading in FLAT; the candidate passes the character axis first
    rec = make_record("一二三四", "----", ALL_EXACT)
    with pytest.raises(PhoneticDecompositionError):
        filter_candidates(["五六七五"], [rec], FLAT)


def test_record_guess_is_stored_stripped():
    rec = make_record("一心一意", "GYG-", ALL_EXACT)
    padded = GuessRecord(" 一心一意 ", rec.result, rec.pinyin)
    assert padded.guess == "一心一意"
    words = ["一二一心", "一心一二", "一二一意", "二心一一", "一二一三"]
    assert filter_candidates(words, [padded], FLAT) == ["一二一心"]


@pytest.mark.parametrize("hints,expected", [
    ([{"initial": "s"}, None, None, None], ["三心二意", "守株待兔", "四面楚歌"]),
    ([None, PinyinHint(pinyin="xi"), None, None],
     ["一心一意", "三心二意", "心想事成", "自相矛盾", "卧薪尝胆"]),
    ([None, None, None, {"tone": 2}],
     ["爱憎分明", "心想事成", "画蛇添足", "亡羊补牢", "对牛弹琴", "胸有成竹", "万紫千红"]),
    ([PinyinHint(tone=1), {"pinyin": "xi"}, None, None], ["一心一意", "三心二意", "心想事成"]),
    ([{"pinyin": "lü"}, None, None, None], ["绿草如茵"]),
    ([{"pinyin": "lu"}, None, None, None], ["绿草如茵"]),
])
def test_filter_with_hints(hints, expected):
    assert filter_candidates(WORDS, [], TABLE, hints=hints) == expected


def test_hints_apply_before_history():
    rec = compare("三心二意", "心想事成", TABLE)
    everything = filter_candidates(WORDS, [rec], TABLE)
    assert "心想事成" in everything
    hinted = filter_candidates(WORDS, [rec], TABLE, hints=[{"initial": "x"}, None, None, None])
    assert hinted == [w for w in everything if TABLE.forms(w)[0].initial == "x"]


def test_empty_hints_never_decompose():
    words = [chr(0x4E00 + i) * 4 for i in range(20)]
    hints = [None, PinyinHint(), {}, None]
    assert filter_candidates(words, [], FLAT, hints=hints) == words


def test_hints_must_cover_four_positions():
    with pytest.raises(InvalidLengthError):
        filter_candidates(WORDS, [], TABLE, hints=[{"tone": 1}])


def test_hint_matches_single_form():
    lv = PhoneticForm("l", "ǜ", 4, "lǜ")
    assert hint_matches(lv, None)
    assert hint_matches(lv, PinyinHint(pinyin="lv", tone=4, initial="L"))
    assert not hint_matches(lv, PinyinHint(tone=3))
    assert not hint_matches(PhoneticForm("z", "eng", 1, "zēng"), PinyinHint(initial="zh"))
    assert hint_matches(PhoneticForm("zh", "ong", 1, "zhōng"), PinyinHint(initial="z"))
