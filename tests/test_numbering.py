import pytest

from deck_normalizer.exceptions import TemplateConfigurationError
from deck_normalizer.models import PlaceholderRole
from deck_normalizer.numbering import (
    fix_slide_notes_pages,
    fix_slide_numbers,
    is_slide_number_shape,
)
from deck_normalizer.rules import load_rules
from tests.fake_deck import (
    FakeLayout,
    FakePresentation,
    notes_master_shapes,
    placeholder,
    template_layouts,
    text_box,
    titled_slide,
)


@pytest.fixture(scope="module")
def rules():
    return load_rules()


def _deck(tmp_path, build_slides, *, layouts=None, notes_master=None):
    layouts = template_layouts() if layouts is None else layouts
    by_name = {layout.name: layout for layout in layouts}
    return FakePresentation(
        tmp_path / "deck.pptx",
        layouts=layouts,
        slides=build_slides(by_name),
        notes_master=notes_master_shapes() if notes_master is None else notes_master,
    )


def _number_shapes(slide):
    return [shape for shape in slide.shapes() if is_slide_number_shape(shape)]


def test_denylisted_layouts_lose_their_numbers(tmp_path, rules):
    deck = _deck(
        tmp_path,
        lambda layouts: [
            titled_slide(
                layouts["Title and Content"],
                "Loops",
                "body",
                placeholder(PlaceholderRole.SLIDE_NUMBER, "7", idx=12),
                text_box("Slide Number 4", "7"),
            ),
            titled_slide(
                layouts["Questions Slide"],
                "Questions?",
                None,
                text_box("Slide Number 2", "8"),
            ),
            titled_slide(layouts["Presentation Title Slide"], "Java"),
        ],
    )

    numbered = fix_slide_numbers(deck, rules)

    assert numbered == 1
    content, questions, title = deck.slides()
    assert len(_number_shapes(content)) == 1
    assert _number_shapes(content)[0].text == "‹#›"
    assert _number_shapes(questions) == []
    assert _number_shapes(title) == []


def test_other_text_boxes_are_kept(tmp_path, rules):
    deck = _deck(
        tmp_path,
        lambda layouts: [
            titled_slide(layouts["Title and Content"], "Loops", None, text_box("TextBox 3", "note"))
        ],
    )

    fix_slide_numbers(deck, rules)

    assert "note" in deck.slide_at(1).texts()


def test_running_twice_keeps_a_single_number(tmp_path, rules):
    deck = _deck(tmp_path, lambda layouts: [titled_slide(layouts["Title and Content"], "Loops")])

    fix_slide_numbers(deck, rules)
    fix_slide_numbers(deck, rules)

    assert len(_number_shapes(deck.slide_at(1))) == 1


def test_missing_slide_number_placeholder_is_fatal(tmp_path, rules):
    layouts = [FakeLayout("Title and Content", [placeholder(PlaceholderRole.TITLE, idx=0)])]
    deck = _deck(tmp_path, lambda by_name: [], layouts=layouts)

    with pytest.raises(TemplateConfigurationError):
        fix_slide_numbers(deck, rules)


def test_missing_numbered_layout_is_fatal(tmp_path, rules):
    deck = _deck(tmp_path, lambda by_name: [], layouts=[FakeLayout("Blank Slide")])

    with pytest.raises(TemplateConfigurationError) as excinfo:
        fix_slide_numbers(deck, rules)
    assert excinfo.value.error_type == "configuration_missing"


def test_notes_footers_are_replaced(tmp_path):
    deck = _deck(
        tmp_path,
        lambda layouts: [
            titled_slide(
                layouts["Title and Content"],
                "With notes",
                notes=[
                    placeholder(PlaceholderRole.BODY, "speaker notes", idx=4),
                    placeholder(PlaceholderRole.FOOTER, "old footer", idx=5),
                ],
            ),
            titled_slide(layouts["Title and Content"], "Without notes"),
        ],
    )

    assert fix_slide_notes_pages(deck) == 1

    with_notes, without_notes = deck.slides()
    footers = [
        shape for shape in with_notes.notes_shapes() if shape.has_role(PlaceholderRole.FOOTER)
    ]
    assert [footer.text for footer in footers] == ["softuni.org"]
    assert any(shape.text == "speaker notes" for shape in with_notes.notes_shapes())
    assert without_notes.notes_shapes() == []
    assert not without_notes.has_notes_page


def test_notes_master_without_footer_is_fatal(tmp_path):
    deck = _deck(
        tmp_path,
        lambda layouts: [],
        notes_master=[placeholder(PlaceholderRole.BODY, idx=4)],
    )

    with pytest.raises(TemplateConfigurationError):
        fix_slide_notes_pages(deck)
