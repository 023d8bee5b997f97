"""Streamlit UI for normalizing slide decks onto the corporate template."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

import streamlit as st

from deck_normalizer import (
    DeckNormalizer,
    NormalizationError,
    NormalizationReport,
    load_rules,
    load_settings,
)
from deck_normalizer.preview import render_preview_image

PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

REPORT_LABELS = (
    ("language", "検出言語"),
    ("slide_count", "スライド数"),
    ("section_count", "セクション数"),
    ("code_boxes_fixed", "コードボックス修正"),
    ("license_slides_replaced", "ライセンススライド差し替え"),
    ("layouts_replaced", "レイアウト置換"),
    ("layouts_deleted", "削除したレイアウト"),
    ("section_title_slides_fixed", "セクションタイトル修正"),
    ("titles_fixed", "タイトル修正"),
    ("slides_numbered", "スライド番号付与"),
    ("notes_pages_fixed", "ノートページ修正"),
)


def report_rows(report: NormalizationReport) -> List[Tuple[str, str]]:
    """Return ``(label, value)`` pairs for displaying ``report``."""

    data = report.to_dict()
    rows: List[Tuple[str, str]] = []
    for key, label in REPORT_LABELS:
        value = data.get(key)
        if isinstance(value, list):
            value = ", ".join(value) if value else "なし"
        rows.append((label, "-" if value is None else str(value)))
    return rows


def output_file_name(source_name: str) -> str:
    stem = Path(source_name).stem or "presentation"
    return f"{stem}_normalized.pptx"


def run_normalization(
    source_bytes: bytes,
    source_name: str,
    template_bytes: Optional[bytes] = None,
    *,
    template_path: Optional[Path] = None,
    normalizer: Optional[DeckNormalizer] = None,
) -> Tuple[NormalizationReport, bytes]:
    """Normalize an uploaded deck in a scratch directory and return the result bytes."""

    with tempfile.TemporaryDirectory() as tmpdir:
        workdir = Path(tmpdir)
        source_path = workdir / Path(source_name).name
        source_path.write_bytes(source_bytes)

        if template_bytes is not None:
            template_path = workdir / "template.pptx"
            template_path.write_bytes(template_bytes)
        if template_path is None:
            raise ValueError("a template presentation is required")

        dest_path = workdir / output_file_name(source_name)
        normalizer = normalizer or DeckNormalizer()
        report = normalizer.normalize(source_path, dest_path, template_path)
        return report, dest_path.read_bytes()


def main() -> None:
    st.set_page_config(page_title="Deck Normalizer", layout="wide")
    st.title("Deck Normalizer")

    settings = load_settings()

    with st.sidebar:
        st.header("テンプレート設定")
        template_upload = st.file_uploader("テンプレート (.pptx)", type="pptx")
        if settings.template_path is not None:
            st.caption(f"既定のテンプレート: {settings.template_path}")
        rules_upload = st.file_uploader("正規化ルール (.json, 任意)", type="json")

    source_upload = st.file_uploader("変換するプレゼンテーション (.pptx)", type="pptx")
    if source_upload is None:
        st.info("プレゼンテーションをアップロードしてください。")
        return

    template_bytes = template_upload.getvalue() if template_upload is not None else None
    if template_bytes is None and settings.template_path is None:
        st.error("テンプレートをアップロードするか、DECK_NORMALIZER_TEMPLATE を設定してください。")
        return

    st.session_state.setdefault("result", None)

    if st.button("正規化を実行", type="primary"):
        try:
            if rules_upload is not None:
                with tempfile.TemporaryDirectory() as tmpdir:
                    rules_path = Path(tmpdir) / "rules.json"
                    rules_path.write_bytes(rules_upload.getvalue())
                    rules = load_rules(rules_path)
            else:
                rules = load_rules(settings.rules_path)
            with st.spinner("正規化しています..."):
                st.session_state["result"] = run_normalization(
                    source_upload.getvalue(),
                    source_upload.name,
                    template_bytes,
                    template_path=settings.template_path,
                    normalizer=DeckNormalizer(rules=rules),
                )
        except NormalizationError as exc:
            st.session_state["result"] = None
            st.error("正規化に失敗しました。")
            st.exception(exc)
            return
        st.success("正規化が完了しました。")

    if st.session_state["result"] is None:
        return
    report, pptx_bytes = st.session_state["result"]

    st.markdown("#### 結果")
    for label, value in report_rows(report):
        st.markdown(f"- **{label}**: {value}")

    max_slides = max(1, report.slide_count)
    preview_index = st.number_input(
        "プレビューするスライド番号", min_value=1, max_value=max_slides, value=1, step=1
    )
    preview_bytes = render_preview_image(pptx_bytes, slide_index=int(preview_index) - 1)
    if preview_bytes:
        st.image(
            preview_bytes,
            caption=f"スライド {int(preview_index)} プレビュー",
            use_container_width=True,
        )
    else:
        st.info("プレビュー画像を生成できませんでした。LibreOfficeのインストール状況を確認してください。")

    st.download_button(
        "PPTXをダウンロード",
        data=pptx_bytes,
        file_name=output_file_name(source_upload.name),
        mime=PPTX_MIME,
    )


if __name__ == "__main__":  # pragma: no cover - Streamlit handles execution
    main()
