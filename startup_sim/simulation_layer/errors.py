"""
Error kinds raised by the quarter engine.
"""

import logging
import warnings

logger = logging.getLogger(__name__)


class SimulationError(Exception):
    """Base class for invalid input rejected by the engine."""


class InvalidOptionError(SimulationError):
    """The submitted option does not exist for the decision."""

    def __init__(self, option_id, decision_title: str = ""):
        self.option_id = option_id
        self.decision_title = decision_title
        target = f" for '{decision_title}'" if decision_title else ""
        super().__init__(f"Invalid option {option_id!r}{target}")


class UnknownDecisionTypeError(SimulationError):
    """A decision category outside the enumerated set."""

    def __init__(self, decision_type):
        self.decision_type = decision_type
        super().__init__(f"Unknown decision type: {decision_type!r}")


class DecisionClosedError(SimulationError):
    """The decision was already resolved."""

    def __init__(self, decision_id):
        self.decision_id = decision_id
        super().__init__(f"Decision {decision_id} is already completed")


class DegenerateStateWarning(UserWarning):
    """Non-fatal: a rule hit a zero denominator or an empty pool."""


def warn_degenerate(message: str) -> None:
    """Log and emit a DegenerateStateWarning; the caller continues."""
    logger.warning(message)
    warnings.warn(message, DegenerateStateWarning, stacklevel=3)
