"""Navigator - tracks the current wizard route"""

import logging
from typing import Any, Mapping

from loan_wizard.domain.models import GuardDecision
from loan_wizard.navigation.guard import FIRST_STEP_ROUTE, SUCCESS_ROUTE, guard, step_route

logger = logging.getLogger(__name__)


class Navigator:
    """Holds the current route; every explicit navigation passes through the guard"""

    def __init__(self, initial: str = FIRST_STEP_ROUTE):
        self.current = initial

    def go_to_step(self, step: int) -> str:
        self.current = step_route(step)
        return self.current

    def go_to_success(self) -> str:
        self.current = SUCCESS_ROUTE
        return self.current

    def navigate(self, path: str, record: Mapping[str, Any]) -> GuardDecision:
        """Enter a route requested from outside (address bar, link), redirecting when refused"""
        decision = guard(path, record)
        if decision.allowed:
            self.current = decision.path
        else:
            logger.info("Route refused", extra={"path": decision.path, "redirect_to": decision.redirect_to})
            self.current = decision.redirect_to
        return decision
