from __future__ import annotations

import shutil
from pathlib import Path

from . import config


ARTIFACT_NAMES = {
    "report": "zakah-report-{iso}.pdf",
    "preview": "zakah-report-{iso}-p{page}.png",
}


def report_dir(base_dir: Path | None = None) -> Path:
    root = base_dir or config.OUT_DIR
    root.mkdir(parents=True, exist_ok=True)
    return root


def artifact_path(iso: str, artifact_type: str, base_dir: Path | None = None, page: int = 1) -> Path:
    filename = ARTIFACT_NAMES[artifact_type].format(iso=iso, page=page)
    return report_dir(base_dir) / filename


def prepare_temp_dir(iso: str, base_dir: Path | None = None) -> Path:
    temp_dir = report_dir(base_dir) / f".zakah-report-{iso}.tmp"
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    return temp_dir


def finalize_artifacts(temp_dir: Path, final_dir: Path, artifacts: list[Path]) -> list[Path]:
    """Move finished artifacts out of the temp dir, replacing older copies."""
    final_dir.mkdir(parents=True, exist_ok=True)
    finalized: list[Path] = []
    for path in artifacts:
        target = final_dir / path.relative_to(temp_dir)
        path.replace(target)
        finalized.append(target)
    shutil.rmtree(temp_dir, ignore_errors=True)
    return finalized
