"""PNG previews of a normalized deck through a headless LibreOffice."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

LOGGER = logging.getLogger(__name__)

SOFFICE_CANDIDATES = (
    "soffice",
    "libreoffice",
    "/Applications/LibreOffice.app/Contents/MacOS/soffice",
)
CONVERT_TIMEOUT = 60


def find_soffice() -> Optional[str]:
    """Return the first LibreOffice executable found on this machine."""

    for candidate in SOFFICE_CANDIDATES:
        found = shutil.which(candidate)
        if found:
            return found
    return None


def _convert_to_png(soffice: str, deck_path: Path, out_dir: Path) -> List[Path]:
    subprocess.run(
        [soffice, "--headless", "--convert-to", "png", "--outdir", str(out_dir), str(deck_path)],
        check=True,
        capture_output=True,
        timeout=CONVERT_TIMEOUT,
    )
    return sorted(out_dir.glob("*.png"))


def render_preview_image(
    pptx_bytes: bytes, *, slide_index: int = 0, soffice: Optional[str] = None
) -> Optional[bytes]:
    """Return a PNG of one slide, or ``None`` when no preview can be made.

    LibreOffice usually renders the first slide only; ``slide_index`` is
    clamped to the pages it actually produced.
    """

    soffice = soffice or find_soffice()
    if soffice is None:
        LOGGER.debug("LibreOffice not found; skipping preview")
        return None

    with tempfile.TemporaryDirectory() as tmpdir:
        work_dir = Path(tmpdir)
        deck_path = work_dir / "preview.pptx"
        deck_path.write_bytes(pptx_bytes)
        try:
            pages = _convert_to_png(soffice, deck_path, work_dir)
        except (OSError, subprocess.SubprocessError) as exc:
            LOGGER.warning("Preview rendering failed: %s", exc)
            return None
        if not pages:
            LOGGER.warning("LibreOffice produced no preview for the deck")
            return None
        page = pages[max(0, min(slide_index, len(pages) - 1))]
        return page.read_bytes()
