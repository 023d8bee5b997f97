from deck_normalizer.language import (
    classify_titles,
    contains_secondary_script,
    count_script_letters,
    detect_language,
)
from deck_normalizer.models import Language
from tests.fake_deck import FakePresentation, template_layouts, titled_slide


def test_mixed_titles_with_enough_cyrillic_are_secondary():
    titles = ["Programming Basics", "Увод в програмирането"]
    assert classify_titles(titles) == Language.SECONDARY


def test_latin_titles_are_primary():
    assert classify_titles(["Programming Basics", "Advanced Topics"]) == Language.PRIMARY


def test_missing_titles_are_ignored():
    assert count_script_letters([None, "Loops", None]) == (5, 0)
    assert classify_titles([None, None]) == Language.PRIMARY


def test_threshold_is_strictly_more_than_half():
    # 2 > 4 / 2 is false
    assert classify_titles(["abcd", "аб"]) == Language.PRIMARY
    assert classify_titles(["abcd", "абв"]) == Language.SECONDARY


def test_upper_case_letters_are_counted():
    assert count_script_letters(["HTML", "ЦИКЛИ"]) == (4, 5)


def test_detect_language_reads_slide_titles(tmp_path):
    layouts = template_layouts()
    content = layouts[2]
    deck = FakePresentation(
        tmp_path / "deck.pptx",
        layouts=layouts,
        slides=[
            titled_slide(content, "Цикли"),
            titled_slide(content, "Масиви"),
            titled_slide(content, None),
        ],
    )

    assert detect_language(deck) == Language.SECONDARY
    assert detect_language(deck) == Language.SECONDARY


def test_contains_secondary_script():
    assert contains_secondary_script("Java и C#")
    assert not contains_secondary_script("Java and C#")
