import pytest

from deck_normalizer.exceptions import DocumentAccessError, TemplateConfigurationError
from deck_normalizer.models import DocumentProperties, Language, PlaceholderRole
from deck_normalizer.numbering import is_slide_number_shape
from deck_normalizer.pipeline import DeckNormalizer, normalize, working_copy_path
from deck_normalizer.rules import load_rules
from tests.fake_deck import (
    FakeFileSystem,
    FakeLayout,
    FakePresentation,
    FakeSlide,
    build_template,
    placeholder,
    titled_slide,
)


@pytest.fixture
def file_system():
    return FakeFileSystem()


@pytest.fixture
def paths(tmp_path):
    return {
        "source": tmp_path / "lecture.pptx",
        "dest": tmp_path / "lecture_normalized.pptx",
        "template": tmp_path / "template.pptx",
    }


def _add_source(file_system, path):
    content = FakeLayout(
        "Title and Content",
        [placeholder(PlaceholderRole.TITLE, idx=0), placeholder(PlaceholderRole.BODY, idx=1)],
    )
    localized_title = FakeLayout(
        "Заглавен слайд",
        [placeholder(PlaceholderRole.TITLE, idx=0), placeholder(PlaceholderRole.SUBTITLE, idx=1)],
    )
    questions = FakeLayout("Questions Slide", [placeholder(PlaceholderRole.TITLE, idx=0)])
    slides = [
        titled_slide(
            content,
            "introduction to java",
            "what we will cover",
            notes=[
                placeholder(PlaceholderRole.BODY, "say hello", idx=4),
                placeholder(PlaceholderRole.FOOTER, "old footer", idx=5),
            ],
        ),
        titled_slide(content, "License", "all rights reserved"),
        FakeSlide(
            localized_title,
            [
                placeholder(PlaceholderRole.TITLE, "java basics", idx=0),
                placeholder(PlaceholderRole.SUBTITLE, "part one", idx=1),
            ],
        ),
        titled_slide(questions, "Questions?"),
    ]
    return file_system.add(
        FakePresentation(
            path,
            layouts=[content, localized_title, questions],
            slides=slides,
            sections=[("course intro", 2), ("Basics", 2)],
            properties=DocumentProperties(title="Java, Intro", category="Lecture"),
        )
    )


def test_end_to_end_normalization(file_system, paths):
    _add_source(file_system, paths["source"])
    file_system.add(build_template(paths["template"]))

    report = normalize(
        paths["source"],
        paths["dest"],
        paths["template"],
        session_factory=file_system.session_factory(),
    )

    deck = file_system.load(paths["dest"])
    slides = deck.slides()
    assert report.slide_count == deck.slide_count == 4
    assert report.language == Language.PRIMARY

    # layouts
    assert [slide.layout_name for slide in slides] == [
        "Title and Content",
        "Title and Content",
        "Title Slide",
        "Questions Slide",
    ]
    assert "Заглавен слайд" not in [layout.name for layout in deck.layouts()]
    assert report.layouts_deleted == ["Заглавен слайд"]

    # license and titles
    assert slides[1].texts()[:2] == ["License", "CC-BY-NC-SA 4.0"]
    assert slides[0].texts()[0] == "Introduction to Java"
    assert slides[2].texts()[:2] == ["Java Basics", "Part One"]

    # sections
    assert [(s.name, s.first_slide, s.slide_count) for s in deck.sections()] == [
        ("Course Intro", 1, 2),
        ("Basics", 3, 2),
    ]

    # numbering and notes
    assert [len([s for s in slide.shapes() if is_slide_number_shape(s)]) for slide in slides] == [
        1,
        1,
        1,
        0,
    ]
    footers = [s.text for s in slides[0].notes_shapes() if s.has_role(PlaceholderRole.FOOTER)]
    assert footers == ["softuni.org"]

    # metadata and bookkeeping
    assert deck.properties().title == "Java; Intro"
    assert deck.properties().category == "Lecture"
    assert deck.save_count == 1
    assert report.to_dict()["license_slides_replaced"] == 1
    assert report.notes_pages_fixed == 1
    assert not file_system.exists(working_copy_path(paths["dest"]))
    assert not file_system.sessions[0].is_open


def test_failed_run_leaves_destination_untouched(file_system, paths):
    _add_source(file_system, paths["source"])
    template = file_system.add(build_template(paths["template"]))
    template._layouts.remove(template.layout_named("Title Slide"))
    previous = file_system.add(FakePresentation(paths["dest"]))

    with pytest.raises(TemplateConfigurationError):
        normalize(
            paths["source"],
            paths["dest"],
            paths["template"],
            session_factory=file_system.session_factory(),
        )

    assert file_system.load(paths["dest"]) is previous
    assert not file_system.exists(working_copy_path(paths["dest"]))
    assert not file_system.sessions[0].is_open


def test_missing_source_releases_the_session(file_system, paths):
    file_system.add(build_template(paths["template"]))

    with pytest.raises(DocumentAccessError):
        normalize(
            paths["source"],
            paths["dest"],
            paths["template"],
            session_factory=file_system.session_factory(),
        )

    assert not file_system.exists(paths["dest"])
    assert not file_system.sessions[0].is_open


def test_visible_mode_keeps_the_session_open(file_system, paths):
    _add_source(file_system, paths["source"])
    file_system.add(build_template(paths["template"]))
    normalizer = DeckNormalizer(rules=load_rules(), session_factory=file_system.session_factory())

    normalizer.normalize(paths["source"], paths["dest"], paths["template"], visible=True)

    session = file_system.sessions[0]
    assert session.is_open
    assert session.visible_flags == [True, True]

    normalizer.release()
    assert not session.is_open
    assert normalizer.session is None


def test_each_run_uses_a_fresh_session(file_system, paths):
    _add_source(file_system, paths["source"])
    file_system.add(build_template(paths["template"]))
    normalizer = DeckNormalizer(session_factory=file_system.session_factory())

    normalizer.normalize(paths["source"], paths["dest"], paths["template"])
    normalizer.normalize(paths["source"], paths["dest"], paths["template"])

    assert len(file_system.sessions) == 2
    assert not any(session.is_open for session in file_system.sessions)
