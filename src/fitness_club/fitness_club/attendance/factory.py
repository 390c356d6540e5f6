from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import DayAction
from ..core.exceptions import ValidationError
from .strategies.base import DayActionStrategy
from .strategies.freeze_strategy import FreezeStrategy
from .strategies.unfreeze_strategy import UnfreezeStrategy


@dataclass
class DayActionFactory:
    """Factory Pattern: choose the strategy for a freeze/unfreeze request."""

    def for_action(self, action: str) -> DayActionStrategy:
        try:
            day_action = DayAction(str(action or "").strip().lower())
        except ValueError:
            raise ValidationError(f"Неизвестное действие: {action!r}")

        if day_action == DayAction.FREEZE:
            return FreezeStrategy()
        return UnfreezeStrategy()
