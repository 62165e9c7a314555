# Path: provisioner/tests/test_source_selector.py
"""
Unit tests for source selection.

Tests:
- choose_best: strictly-greater rule, ties keep the direct origin
- SourceSelector: direct origin measured before any mirror starts, failures never win
"""

import asyncio

from provisioner.engine.result import ProbeResult
from provisioner.engine.source_selector import SourceSelector, choose_best
from provisioner.tests.fixtures import FakeProber, make_sources

DIRECT, MIRROR_A, MIRROR_B, MIRROR_C = make_sources(4)


def result(source, speed=None):
    if speed is None:
        return ProbeResult(source=source, throughput=0.0, succeeded=False)
    return ProbeResult(source=source, throughput=speed, succeeded=True)


def test_fastest_mirror_wins():
    best = choose_best(
        result(DIRECT, 100),
        [result(MIRROR_A, 50), result(MIRROR_B, 150), result(MIRROR_C)]
    )
    assert best is MIRROR_B


def test_tie_keeps_direct_origin():
    assert choose_best(result(DIRECT, 100), [result(MIRROR_A, 100)]) is DIRECT


def test_completion_order_does_not_matter():
    mirrors = [result(MIRROR_A, 50), result(MIRROR_B, 150), result(MIRROR_C, 120)]
    assert choose_best(result(DIRECT, 100), mirrors) is MIRROR_B
    assert choose_best(result(DIRECT, 100), list(reversed(mirrors))) is MIRROR_B


def test_failed_direct_lets_any_mirror_win():
    assert choose_best(result(DIRECT), [result(MIRROR_A), result(MIRROR_B, 1)]) is MIRROR_B


def test_no_successful_probe_means_no_winner():
    assert choose_best(result(DIRECT), [result(MIRROR_A), result(MIRROR_B)]) is None


def test_selector_probes_every_source_direct_first():
    prober = FakeProber({'GitHub': 100, 'mirror-1': 50, 'mirror-2': 150, 'mirror-3': None})
    selector = SourceSelector(prober, show_progress=False)
    sources = [DIRECT, MIRROR_A, MIRROR_B, MIRROR_C]

    best = asyncio.run(selector.select_best(sources))

    assert best is MIRROR_B
    assert prober.probed[0] == 'GitHub'
    assert sorted(prober.probed) == sorted(s.name for s in sources)
    assert len(selector.last_results) == 4


def test_selector_never_returns_failed_source():
    prober = FakeProber({})
    selector = SourceSelector(prober, show_progress=False)

    assert asyncio.run(selector.select_best([DIRECT, MIRROR_A])) is None


def test_selector_report_renders():
    prober = FakeProber({'GitHub': 2048, 'mirror-1': None})
    selector = SourceSelector(prober, show_progress=True)

    assert asyncio.run(selector.select_best([DIRECT, MIRROR_A])) is DIRECT


class SlowDirectProber(FakeProber):
    """Records start and end of each measurement; the direct origin is slow."""

    def __init__(self, speeds, direct_name):
        super().__init__(speeds)
        self.direct_name = direct_name
        self.events = []

    async def probe(self, source, timeout=None):
        self.events.append(('start', source.name))
        if source.name == self.direct_name:
            await asyncio.sleep(0.01)
        outcome = await super().probe(source, timeout)
        self.events.append(('end', source.name))
        return outcome


def test_mirrors_start_only_after_direct_measurement_ends():
    prober = SlowDirectProber({'GitHub': 100, 'mirror-1': 50, 'mirror-2': 150}, 'GitHub')
    selector = SourceSelector(prober, show_progress=False)

    asyncio.run(selector.select_best([DIRECT, MIRROR_A, MIRROR_B, MIRROR_C]))

    direct_end = prober.events.index(('end', 'GitHub'))
    mirror_starts = [
        prober.events.index(('start', source.name))
        for source in (MIRROR_A, MIRROR_B, MIRROR_C)
    ]
    assert all(direct_end < start for start in mirror_starts)
