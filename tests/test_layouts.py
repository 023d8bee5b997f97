import pytest

from deck_normalizer.exceptions import TemplateConfigurationError
from deck_normalizer.layouts import fix_invalid_slide_layouts, layouts_by_name
from deck_normalizer.rules import load_rules
from deck_normalizer.transfer import copy_slides_and_sections, remove_all_sections_and_slides
from tests.fake_deck import (
    FakeFileSystem,
    FakeLayout,
    FakePresentation,
    build_template,
    template_layouts,
    titled_slide,
)


@pytest.fixture(scope="module")
def rules():
    return load_rules()


def _normalized_copy(tmp_path, source_layout_names):
    """Copy a source whose slide *n* uses ``source_layout_names[n - 1]`` into the template."""

    file_system = FakeFileSystem()
    layouts = {name: FakeLayout(name) for name in source_layout_names}
    slides = [
        titled_slide(layouts[name], f"Slide {n}")
        for n, name in enumerate(source_layout_names, start=1)
    ]
    source = file_system.add(
        FakePresentation(tmp_path / "source.pptx", layouts=layouts.values(), slides=slides)
    )
    destination = file_system.add(build_template(tmp_path / "out.pptx"))
    remove_all_sections_and_slides(destination)
    copy_slides_and_sections(source, destination)
    return destination


def test_localized_layout_is_replaced_and_deleted(tmp_path, rules):
    deck = _normalized_copy(
        tmp_path, ["Title and Content", "Title and Content", "Заглавен слайд"]
    )
    assert "Заглавен слайд" in layouts_by_name(deck)

    result = fix_invalid_slide_layouts(deck, rules)

    assert deck.slide_at(3).layout_name == "Title Slide"
    assert "Заглавен слайд" not in layouts_by_name(deck)
    assert result.replaced == 1
    assert result.deleted == ["Заглавен слайд"]


def test_every_slide_ends_on_a_canonical_layout(tmp_path, rules):
    deck = _normalized_copy(
        tmp_path,
        ["Presentation Title", "1_Title and Content", "Some Vendor Layout", "Section Header", "Questions Slide"],
    )

    fix_invalid_slide_layouts(deck, rules)

    canonical = rules.canonical_layout_names()
    assert all(slide.layout_name in canonical for slide in deck.slides())
    assert [slide.layout_name for slide in deck.slides()] == [
        "Presentation Title Slide",
        "Title and Content",
        "Title and Content",
        "Title Slide",
        "Questions Slide",
    ]


def test_second_run_changes_nothing(tmp_path, rules):
    deck = _normalized_copy(
        tmp_path, ["Заглавие и съдържание", "Заглавен слайд", "2_Title Slide", "Title and Content"]
    )
    first = fix_invalid_slide_layouts(deck, rules)
    assignments = [slide.layout_name for slide in deck.slides()]
    layout_names = [layout.name for layout in deck.layouts()]

    second = fix_invalid_slide_layouts(deck, rules)

    assert first.replaced == 3
    assert second.replaced == 0
    assert second.deleted == []
    assert [slide.layout_name for slide in deck.slides()] == assignments
    assert [layout.name for layout in deck.layouts()] == layout_names


def test_orphan_shared_by_several_slides_is_deleted_once(tmp_path, rules):
    deck = _normalized_copy(tmp_path, ["1_Title Slide", "1_Title Slide", "Title and Content"])

    result = fix_invalid_slide_layouts(deck, rules)

    assert result.replaced == 2
    assert result.deleted == ["1_Title Slide"]
    assert "1_Title Slide" not in layouts_by_name(deck)


def test_template_layouts_unused_by_any_slide_are_kept(tmp_path, rules):
    deck = _normalized_copy(tmp_path, ["Title and Content"])

    fix_invalid_slide_layouts(deck, rules)

    assert [layout.name for layout in deck.layouts()] == [
        layout.name for layout in template_layouts()
    ]


def test_missing_canonical_layout_is_fatal(tmp_path, rules):
    deck = FakePresentation(
        tmp_path / "broken.pptx",
        layouts=[FakeLayout("Title and Content"), FakeLayout("Заглавен слайд")],
    )
    slide = titled_slide(deck.layout_named("Заглавен слайд"), "Welcome")
    slide.presentation = deck
    deck._slides.append(slide)

    with pytest.raises(TemplateConfigurationError) as excinfo:
        fix_invalid_slide_layouts(deck, rules)
    assert excinfo.value.stage == "layouts"
