"""
Expression Service - Facial expression state and the optional cycling timer
"""
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence, Union


class Expression(Enum):
    """Expression shown by the face; drives eye shapes and head fill."""
    IDLE = "idle"
    HAPPY = "happy"
    BORED = "bored"
    CONFUSED = "confused"
    SUSPICIOUS = "suspicious"
    SAD = "sad"
    ANGRY = "angry"

    @classmethod
    def parse(cls, value: Union['Expression', str]) -> 'Expression':
        """
        Resolve an expression from an enum member or a case-insensitive name.

        Raises:
            ValueError: If the name is not a known expression
        """
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown expression: {value!r}") from None


DEFAULT_DWELL_MS = 3000


class ExpressionCycler:
    """
    Steps through a fixed cycle of expressions on a wall-clock timer.

    The cycler owns only the transition policy; callers feed the returned
    value into the renderer as a plain input.
    """

    def __init__(self, dwell_ms: int = DEFAULT_DWELL_MS,
                 order: Optional[Sequence[Expression]] = None):
        """
        Args:
            dwell_ms: Time each expression stays on screen
            order: Cycle order, every expression in declaration order by default
        """
        if dwell_ms <= 0:
            raise ValueError(f"dwell_ms must be positive, got {dwell_ms}")
        self._order = tuple(order) if order else tuple(Expression)
        if not self._order:
            raise ValueError("order must contain at least one expression")
        self._dwell_ms = dwell_ms
        self._index = 0
        self._last_change: Optional[datetime] = None

    def advance(self, now: datetime) -> Expression:
        """
        Return the expression for ``now``, moving to the next one once the
        current one has been shown for the dwell time.
        """
        if self._last_change is None:
            self._last_change = now
        elif (now - self._last_change).total_seconds() * 1000 >= self._dwell_ms:
            self._index = (self._index + 1) % len(self._order)
            self._last_change = now
        return self._order[self._index]

    def reset(self) -> None:
        self._index = 0
        self._last_change = None

    @property
    def current(self) -> Expression:
        return self._order[self._index]

    @property
    def dwell_ms(self) -> int:
        return self._dwell_ms


class ExpressionService:
    """
    Holds the externally set expression; optionally replaces it with the
    cycler's output. Auto-cycling is off unless explicitly enabled.
    """

    def __init__(self, initial: Union[Expression, str] = Expression.IDLE,
                 auto_cycle: bool = False, dwell_ms: int = DEFAULT_DWELL_MS):
        self._expression = Expression.parse(initial)
        self._auto_cycle = auto_cycle
        self._cycler = ExpressionCycler(dwell_ms)

    def set(self, expression: Union[Expression, str]) -> Expression:
        """Set the expression shown while auto-cycling is off"""
        self._expression = Expression.parse(expression)
        return self._expression

    def next(self) -> Expression:
        """Step the externally set expression to the following variant"""
        members = list(Expression)
        index = (members.index(self._expression) + 1) % len(members)
        self._expression = members[index]
        return self._expression

    def current(self, now: datetime) -> Expression:
        """
        Expression to render at ``now``.

        Args:
            now: Frame timestamp, only consulted while auto-cycling

        Returns:
            The set expression, or the cycler's expression when auto-cycling
        """
        if self._auto_cycle:
            return self._cycler.advance(now)
        return self._expression

    @property
    def auto_cycle(self) -> bool:
        return self._auto_cycle

    @auto_cycle.setter
    def auto_cycle(self, enabled: bool) -> None:
        if enabled and not self._auto_cycle:
            self._cycler.reset()
        self._auto_cycle = enabled
