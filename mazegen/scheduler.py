from collections import deque
from enum import Enum
import heapq
import logging
from typing import Callable, Deque, Iterable, List, Optional, Tuple

from .grid import GridPos

logger = logging.getLogger(__name__)

Action = Callable[[], None]


class TickScheduler:
    """
    Single-threaded deferred execution on a discrete tick loop.

    Actions due on the same tick run in the order they were scheduled. An
    action scheduled while a tick is running never runs in that same tick.
    """

    def __init__(self):
        self.current_tick = 0
        self._order = 0
        self._events: List[Tuple[int, int, Action]] = []

    def _schedule(self, delay: int, action: Action):
        self._order += 1
        heapq.heappush(self._events, (self.current_tick + delay, self._order, action))

    def run_next_turn(self, action: Action):
        self._schedule(1, action)

    def run_after_delay(self, action: Action, turns: int):
        if turns < 1:
            raise ValueError(f"Delay must be at least one turn, got {turns}")
        self._schedule(turns, action)

    @property
    def pending(self) -> int:
        return len(self._events)

    @property
    def idle(self) -> bool:
        return not self._events

    def tick(self) -> int:
        """Advance one tick and run everything due. Returns the number of actions run."""
        self.current_tick += 1
        ran = 0
        while self._events and self._events[0][0] <= self.current_tick:
            _, _, action = heapq.heappop(self._events)
            action()
            ran += 1
        return ran

    def run_until_idle(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick until nothing is scheduled.

        Args:
            max_ticks: Stop after this many ticks even if work remains.

        Returns:
            The number of ticks advanced.
        """
        start = self.current_tick
        while self._events:
            if max_ticks is not None and self.current_tick - start >= max_ticks:
                logger.warning(
                    "Stopped after %d ticks with %d actions still scheduled",
                    max_ticks, len(self._events),
                )
                break
            self.tick()
        return self.current_tick - start


class GenerationPhase(Enum):
    FILL_ALL = "fill_all"
    DRILLING = "drilling"
    LADDERS = "ladders"


_PHASE_ORDER = [GenerationPhase.FILL_ALL, GenerationPhase.DRILLING, GenerationPhase.LADDERS]


class PhaseMachine:
    """The drawing phase of one maze generation. Only moves forward."""

    def __init__(self):
        self.phase = GenerationPhase.FILL_ALL

    def advance_to(self, phase: GenerationPhase):
        if _PHASE_ORDER.index(phase) < _PHASE_ORDER.index(self.phase):
            raise ValueError(f"Cannot move from {self.phase.name} back to {phase.name}")
        if phase is not self.phase:
            logger.debug("Phase %s -> %s", self.phase.name, phase.name)
        self.phase = phase

    def is_at_least(self, phase: GenerationPhase) -> bool:
        return _PHASE_ORDER.index(self.phase) >= _PHASE_ORDER.index(phase)


class DrillTask:
    """
    Opens one floor's drill path a single cell per turn.

    The task waits without consuming cells while its phase machine is still
    filling, then re-arms itself on the scheduler after each cell until the
    path is used up.
    """

    def __init__(
        self,
        floor: int,
        drill_path: Iterable[GridPos],
        phases: PhaseMachine,
        drill_cell: Callable[[GridPos, int], None],
        scheduler: TickScheduler,
    ):
        self.floor = floor
        self.remaining: Deque[GridPos] = deque(drill_path)
        self.phases = phases
        self.drill_cell = drill_cell
        self.scheduler = scheduler
        self.drilled = 0
        self.deferred = 0

    @property
    def done(self) -> bool:
        return not self.remaining

    def step(self):
        if not self.phases.is_at_least(GenerationPhase.DRILLING):
            self.deferred += 1
            self.scheduler.run_next_turn(self.step)
            return
        if not self.remaining:
            return
        pos = self.remaining.popleft()
        self.drill_cell(pos, self.floor)
        self.drilled += 1
        if self.remaining:
            self.scheduler.run_next_turn(self.step)
        else:
            logger.debug("Floor %d drilled: %d cells", self.floor, self.drilled)
