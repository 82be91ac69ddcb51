from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Mapping, Optional

import httpx

from ..models import AggregationResult, DateInfo, MetalPrices, ReportSettings
from ..storage import artifact_path, finalize_artifacts, prepare_temp_dir, report_dir
from .aggregate import aggregate
from .compose import compose_report
from .dates import resolve_report_date
from .ingest import ValueReader
from .layout import RendererUnavailableError, load_renderer_style
from .render_preview import render_previews

logger = logging.getLogger(__name__)

RENDERER_UNAVAILABLE_MESSAGE = "PDF renderer is not available. Please check the installation and try again."
EXPORT_FAILED_MESSAGE = "PDF generation failed. Please try again."


@dataclass
class ExportResult:
    report: Path
    page_count: int
    date: DateInfo
    result: AggregationResult
    previews: List[Path] = field(default_factory=list)


async def export_report(
    fields: Mapping[str, object],
    prices: MetalPrices,
    settings: ReportSettings,
    timezone: Optional[str] = None,
    out_dir: Optional[Path] = None,
    preview: bool = False,
    client: Optional[httpx.AsyncClient] = None,
) -> ExportResult:
    """
    One full export pass. Either the finished report lands in the output
    directory or nothing does: work happens in a temp dir that is only
    moved into place once every artifact is written.
    """
    style = load_renderer_style()
    date_info = await resolve_report_date(timezone, client=client)
    result = aggregate(ValueReader(fields), prices, settings)

    final_dir = report_dir(out_dir)
    temp_dir = prepare_temp_dir(date_info.iso, base_dir=final_dir)
    try:
        report_path = artifact_path(date_info.iso, "report", base_dir=temp_dir)
        composed = compose_report(result, date_info, report_path, style=style)
        artifacts = [composed.path]
        if preview:
            artifacts.extend(render_previews(date_info.iso, composed.path, base_dir=temp_dir))
    except Exception:
        shutil.rmtree(temp_dir, ignore_errors=True)
        raise

    finalized = finalize_artifacts(temp_dir, final_dir, artifacts)
    return ExportResult(
        report=finalized[0],
        page_count=composed.page_count,
        date=date_info,
        result=result,
        previews=finalized[1:],
    )


class ExportTrigger:
    """
    The user-facing export control. While an export runs the trigger is
    busy and further requests are refused; its state is restored whatever
    the outcome.
    """

    IDLE_LABEL = "Export PDF"
    BUSY_LABEL = "Generating..."

    def __init__(self, notify: Callable[[str], None]) -> None:
        self.notify = notify
        self.busy = False
        self.label = self.IDLE_LABEL

    async def run(
        self,
        fields: Mapping[str, object],
        prices: MetalPrices,
        settings: ReportSettings,
        **kwargs,
    ) -> Optional[ExportResult]:
        if self.busy:
            logger.warning("Export already in progress, ignoring request")
            return None
        self.busy = True
        self.label = self.BUSY_LABEL
        try:
            return await export_report(fields, prices, settings, **kwargs)
        except RendererUnavailableError as exc:
            logger.warning("Renderer unavailable: %s", exc)
            self.notify(RENDERER_UNAVAILABLE_MESSAGE)
            return None
        except Exception:
            logger.exception("PDF export failed")
            self.notify(EXPORT_FAILED_MESSAGE)
            return None
        finally:
            self.busy = False
            self.label = self.IDLE_LABEL
