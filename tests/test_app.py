import pytest

pytest.importorskip("streamlit")

import app
from deck_normalizer.models import Language, NormalizationReport


class RecordingNormalizer:
    """Writes a marker file instead of running the real pipeline."""

    def __init__(self):
        self.calls = []

    def normalize(self, source_path, dest_path, template_path, visible=False):
        self.calls.append((source_path.read_bytes(), template_path.read_bytes()))
        dest_path.write_bytes(b"normalized")
        return NormalizationReport(
            source_path=str(source_path),
            dest_path=str(dest_path),
            language=Language.SECONDARY,
            slide_count=3,
            layouts_deleted=["Заглавен слайд"],
        )


def test_run_normalization_with_uploaded_template():
    normalizer = RecordingNormalizer()

    report, payload = app.run_normalization(
        b"source-bytes", "lecture.pptx", b"template-bytes", normalizer=normalizer
    )

    assert payload == b"normalized"
    assert normalizer.calls == [(b"source-bytes", b"template-bytes")]
    assert report.dest_path.endswith("lecture_normalized.pptx")


def test_run_normalization_with_configured_template(tmp_path):
    template = tmp_path / "corporate.pptx"
    template.write_bytes(b"configured")
    normalizer = RecordingNormalizer()

    app.run_normalization(b"src", "deck.pptx", template_path=template, normalizer=normalizer)

    assert normalizer.calls == [(b"src", b"configured")]


def test_run_normalization_requires_a_template():
    with pytest.raises(ValueError):
        app.run_normalization(b"src", "deck.pptx", normalizer=RecordingNormalizer())


def test_report_rows_are_human_readable():
    report = NormalizationReport(
        source_path="a.pptx",
        dest_path="b.pptx",
        language=Language.PRIMARY,
        slide_count=12,
        layouts_deleted=[],
    )

    rows = dict(app.report_rows(report))

    assert rows["検出言語"] == "primary"
    assert rows["スライド数"] == "12"
    assert rows["削除したレイアウト"] == "なし"


def test_output_file_name():
    assert app.output_file_name("Java Basics.pptx") == "Java Basics_normalized.pptx"
    assert app.output_file_name(".pptx") == ".pptx_normalized.pptx"
