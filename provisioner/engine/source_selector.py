# Path: provisioner/engine/source_selector.py
"""
Source Selector

Probes the direct origin, then every mirror concurrently, and picks
the fastest source.

Selection rule:
- The direct origin is the incumbent when its probe succeeded
- A mirror replaces the incumbent only with strictly greater throughput
- Ties keep the incumbent
- No successful probe: no winner
"""

import asyncio
from typing import Optional, Sequence

from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.table import Table

from provisioner.core.logger import get_logger
from provisioner.core.config_loader import ConfigLoader
from provisioner.core.display import console, format_speed
from provisioner.core.models import Source
from provisioner.engine.speed_prober import SpeedProber
from provisioner.engine.result import ProbeResult
from provisioner.constants import LOG_INPUT, LOG_PROCESS, LOG_OUTPUT

logger = get_logger(__name__, 'engine')


def choose_best(direct: ProbeResult, mirrors: Sequence[ProbeResult]) -> Optional[Source]:
    """
    Apply the selection rule to finished probes.

    Depends only on throughput values, never on completion order.
    """
    best_source = direct.source if direct.usable else None
    best_speed = direct.throughput if direct.usable else 0.0

    for result in mirrors:
        if result.usable and result.throughput > best_speed:
            best_speed = result.throughput
            best_source = result.source

    return best_source


class SourceSelector:
    """
    Picks the fastest download source.

    Example:
        selector = SourceSelector(SpeedProber(http_handler))
        best = await selector.select_best(DOWNLOAD_SOURCES)
    """

    def __init__(
        self,
        prober: SpeedProber,
        config: Optional[ConfigLoader] = None,
        show_progress: Optional[bool] = None
    ):
        """
        Initialize selector.

        Args:
            prober: Speed prober used for every source
            config: Optional ConfigLoader instance
            show_progress: Render progress bar and report (default from config)
        """
        self.prober = prober
        self.config = config if config else ConfigLoader()
        self.show_progress = show_progress if show_progress is not None else \
            self.config.get('show_progress', True)
        self.last_results: list[ProbeResult] = []

    async def select_best(self, sources: Sequence[Source]) -> Optional[Source]:
        """
        Probe all sources and return the fastest.

        Args:
            sources: Configured sources, direct origin first

        Returns:
            Winning source, or None if every probe failed
        """
        if not sources:
            return None

        logger.info(f"{LOG_INPUT} Speed testing {len(sources)} sources")

        with Progress(
            TextColumn("[cyan]Speed test"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
            transient=True,
            disable=not self.show_progress
        ) as progress:
            task = progress.add_task("probe", total=len(sources))

            # Baseline first, alone
            direct = await self.prober.probe(sources[0])
            progress.advance(task)

            async def probe_and_advance(source: Source) -> ProbeResult:
                result = await self.prober.probe(source)
                progress.advance(task)
                return result

            logger.info(f"{LOG_PROCESS} Probing {len(sources) - 1} mirrors in parallel")
            mirrors = await asyncio.gather(*(probe_and_advance(s) for s in sources[1:]))

        self.last_results = [direct, *mirrors]
        best = choose_best(direct, mirrors)

        if self.show_progress:
            self._display_report(best)

        if best:
            speed = next(r.throughput for r in self.last_results if r.source is best)
            logger.info(f"{LOG_OUTPUT} Selected {best.name} ({format_speed(speed)})")
        else:
            logger.warning(f"{LOG_OUTPUT} All speed tests failed, trying sources in order")

        return best

    def _display_report(self, best: Optional[Source]) -> None:
        """Ranked table of probe results."""
        table = Table(title="Speed test results")
        table.add_column("#", justify="right")
        table.add_column("Source")
        table.add_column("Speed", justify="right")

        ranked = sorted(self.last_results, key=lambda r: r.throughput, reverse=True)
        for rank, result in enumerate(ranked, 1):
            if result.usable:
                marker = " *" if result.source is best else ""
                table.add_row(str(rank), f"[green]{result.source.name}{marker}[/green]",
                              format_speed(result.throughput))
            else:
                table.add_row(str(rank), f"[dim]{result.source.name}[/dim]", "[red]failed[/red]")

        console.print(table)


__all__ = ['SourceSelector', 'choose_best']
