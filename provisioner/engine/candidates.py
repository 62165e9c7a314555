# Path: provisioner/engine/candidates.py
"""
Candidate Planner

Orders the download sources for one acquisition attempt.

Rules:
- index 0: direct origin only, no fallback
- index 1..N (1-based into the source list): that source, then the rest
- anything else: fastest source from the selector, then the rest;
  the full list in configured order when no probe succeeded
"""

from typing import Optional, Sequence

from provisioner.core.logger import get_logger
from provisioner.core.models import Source
from provisioner.engine.source_selector import SourceSelector
from provisioner.constants import LOG_PROCESS

logger = get_logger(__name__, 'engine')

DIRECT_ONLY_INDEX = 0


def winner_first(sources: Sequence[Source], winner: Source) -> list[Source]:
    """Winner followed by the remaining sources in configured order."""
    return [winner, *(s for s in sources if s is not winner)]


class CandidatePlanner:
    """
    Builds the ordered candidate list.

    Example:
        planner = CandidatePlanner(DOWNLOAD_SOURCES, selector)
        candidates = await planner.plan(source_index=None)
    """

    def __init__(self, sources: Sequence[Source], selector: SourceSelector):
        self.sources = list(sources)
        self.selector = selector

    def is_valid_index(self, source_index: Optional[int]) -> bool:
        return source_index is not None and 0 < source_index <= len(self.sources)

    async def plan(self, source_index: Optional[int] = None) -> list[Source]:
        """
        Ordered sources to try.

        Args:
            source_index: Explicit source choice (see module rules)

        Returns:
            Candidate list, never empty while sources are configured
        """
        if source_index == DIRECT_ONLY_INDEX:
            logger.info(f"{LOG_PROCESS} Direct download requested, no fallback")
            return self.sources[:1]

        if self.is_valid_index(source_index):
            chosen = self.sources[source_index - 1]
            logger.info(f"{LOG_PROCESS} Source {source_index} requested: {chosen.name}")
            return winner_first(self.sources, chosen)

        if source_index is not None:
            logger.warning(f"Invalid source index {source_index}, selecting automatically")

        best = await self.selector.select_best(self.sources)
        if best is None:
            return list(self.sources)
        return winner_first(self.sources, best)


__all__ = ['CandidatePlanner', 'winner_first', 'DIRECT_ONLY_INDEX']
