"""
WindSight - Monitoring Session
Owns the selected unit, its generated data and the periodic factor tick.
"""

import asyncio
from datetime import datetime
from typing import Callable, Optional

import numpy as np

from windsight.data.factor_simulator import TICK_SECONDS, advance_factors, initialize_factors
from windsight.data.power_curve import generate_power_curve_samples, performance_ratio
from windsight.data.unit_registry import get_unit, list_units
from windsight.models.distribution import DistributionSnapshot, compute_distribution


class MonitoringSession:
    """
    Single-unit monitoring context driven by an asyncio ticker.

    All state belongs to the session; separate sessions never share factor
    sets or random generators. Changing the unit replaces the generated data
    wholesale and restarts the ticker so a stale tick can never touch the
    new factor set.
    """

    def __init__(
        self,
        unit_id: int = 1,
        interval: float = TICK_SECONDS,
        seed: Optional[int] = None,
        point_hint: int = 200,
        on_tick: Optional[Callable[["MonitoringSession"], None]] = None,
    ):
        self.interval = interval
        self.point_hint = point_hint
        self.on_tick = on_tick
        self.rng = np.random.default_rng(seed)
        self.units = list_units()
        self._task: Optional[asyncio.Task] = None
        self.select_unit(unit_id)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def select_unit(self, unit_id: int):
        unit = get_unit(unit_id)
        was_running = self.running
        self.stop()

        self.unit = unit
        self.tick_index = 0
        self.started_at = datetime.now()
        self.power_curve = generate_power_curve_samples(unit.id, self.point_hint, rng=self.rng)
        self.factors = initialize_factors(unit.id, rng=self.rng, now=self.started_at)
        print(f"[Session] Selected {unit.name} ({unit.status}) | "
              f"performance ratio {performance_ratio(self.power_curve):.1%}")

        if was_running:
            self.start()

    def tick(self):
        """Advance every factor by one reading."""
        self.tick_index += 1
        self.factors = advance_factors(
            self.unit.id, self.tick_index, self.factors,
            rng=self.rng, started_at=self.started_at,
        )
        if self.on_tick is not None:
            self.on_tick(self)
        return self.factors

    def start(self):
        """Schedule the ticker on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self):
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.tick()
            except Exception as exc:
                # A failing on_tick must not stop the feed
                print(f"[Session] Tick {self.tick_index} on {self.unit.name} failed: {exc!r}")

    async def run_for(self, ticks: int):
        """Tick `ticks` times at the session interval, then return."""
        for _ in range(ticks):
            await asyncio.sleep(self.interval)
            self.tick()
        return self.factors

    def factor(self, factor_id: str):
        for f in self.factors:
            if f.id == factor_id:
                return f
        raise KeyError(factor_id)

    def distribution(self, factor_id: str) -> DistributionSnapshot:
        return compute_distribution(self.factor(factor_id), self.unit.id, rng=self.rng)
