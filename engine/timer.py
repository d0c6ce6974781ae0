"""
timer.py — Single Outstanding Tick
===================================
The engine may have at most one pending tick.  TimerSlot hands out
monotonically increasing tokens: arming a new tick first invalidates the
previous one, and a tick that arrives with anything but the current
token is stale and must be ignored.
"""

from typing import List, Optional

from engine.state import CancelTick, Effect, ScheduleTick


class TimerSlot:
    def __init__(self):
        self._counter: int = 0
        self.current:  int = 0     # 0 = nothing outstanding

    def cancel(self) -> List[Effect]:
        if not self.current:
            return []
        token, self.current = self.current, 0
        return [CancelTick(token)]

    def arm(self, delay_ms: float) -> List[Effect]:
        effects = self.cancel()
        self._counter += 1
        self.current = self._counter
        effects.append(ScheduleTick(self.current, delay_ms))
        return effects

    def is_current(self, token: int) -> bool:
        return bool(token) and token == self.current

    def consume(self, token: int) -> Optional[CancelTick]:
        """Accept a firing tick.  Returns its CancelTick, or None when stale."""
        if not self.is_current(token):
            return None
        self.current = 0
        return CancelTick(token)
