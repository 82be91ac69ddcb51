from __future__ import annotations

from pathlib import Path
from typing import List

import fitz  # PyMuPDF

from ..storage import artifact_path


def _render_page_to_png(doc: fitz.Document, page_index: int, out_path: Path, min_px: int = 1200) -> None:
    page = doc.load_page(page_index)

    # scale so the short side of the image is at least min_px
    rect = page.rect
    short_side = min(rect.width, rect.height)
    zoom = max(1.0, min_px / float(short_side))
    mat = fitz.Matrix(zoom, zoom)

    pix = page.get_pixmap(matrix=mat, alpha=False)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    pix.save(str(out_path))


def render_previews(iso: str, pdf_path: Path, base_dir: Path | None = None, max_pages: int = 3) -> List[Path]:
    previews: List[Path] = []
    with fitz.open(str(pdf_path)) as doc:
        for index in range(min(max_pages, doc.page_count)):
            out_path = artifact_path(iso, "preview", base_dir=base_dir, page=index + 1)
            _render_page_to_png(doc, index, out_path)
            previews.append(out_path)
    return previews
