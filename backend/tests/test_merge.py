"""Tests for synonym merging."""

from thaimaster.core.lookup import Segment, SynonymEntry, merge_synonyms


def seg(text: str) -> Segment:
    return Segment(text=text, transliteration="", gloss="", part_of_speech="")


def test_matching_segments_receive_synonyms():
    merged = merge_synonyms(
        [seg("ฉัน"), seg("กิน")],
        [SynonymEntry(word="กิน", synonyms=["ทาน"])],
    )

    assert merged[0].synonyms is None
    assert merged[1].synonyms == ["ทาน"]


def test_duplicate_segments_all_receive_the_entry():
    merged = merge_synonyms(
        [seg("กิน"), seg("ข้าว"), seg("กิน")],
        [SynonymEntry(word="กิน", synonyms=["ทาน", "รับประทาน"])],
    )

    assert merged[0].synonyms == ["ทาน", "รับประทาน"]
    assert merged[2].synonyms == ["ทาน", "รับประทาน"]
    assert merged[1].synonyms is None


def test_first_entry_wins_for_repeated_word():
    merged = merge_synonyms(
        [seg("กิน")],
        [
            SynonymEntry(word="กิน", synonyms=["ทาน"]),
            SynonymEntry(word="กิน", synonyms=["แดก"]),
        ],
    )

    assert merged[0].synonyms == ["ทาน"]


def test_empty_synonym_list_is_kept_distinct_from_unset():
    merged = merge_synonyms([seg("ข้าว")], [SynonymEntry(word="ข้าว", synonyms=[])])

    assert merged[0].synonyms == []


def test_inputs_are_not_mutated():
    original = [seg("กิน")]

    merge_synonyms(original, [SynonymEntry(word="กิน", synonyms=["ทาน"])])

    assert original[0].synonyms is None


def test_order_and_fields_preserved():
    segments = [
        Segment(text="ลา", transliteration="laa", gloss="leave", part_of_speech="verb"),
        Segment(text="ก่อน", transliteration="gon", gloss="before", part_of_speech="adverb"),
    ]

    merged = merge_synonyms(segments, [SynonymEntry(word="ลา", synonyms=["จาก"])])

    assert [s.text for s in merged] == ["ลา", "ก่อน"]
    assert merged[0].gloss == "leave"
    assert merged[0].part_of_speech == "verb"
