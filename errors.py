from __future__ import annotations
from enum import Enum


class ErrorKind(Enum):
    INVALID_ABSOLUTE_TIME_LIMIT = "invalid absolute time limit"
    INVALID_RELATIVE_TIME_LIMIT = "invalid relative time limit"
    INVALID_RELATIVE_TIME_CLASS = "invalid relative time class"
    TIME_LIMIT_REACHED = "time limit reached"
    INVALID_INITIAL_CONDITION = "invalid initial condition"
    INVALID_DIMENSIONAL_SPACE = "invalid dimensional space"
    INVALID_DIMENSIONAL_AMOUNT = "invalid dimensional amount"
    INVALID_STATE = "invalid state"
    INVALID_COMBINATION = "invalid combination"
    INVALID_TRANSITION = "invalid transition"
    INCOMPLETE_RULE_TABLE = "incomplete rule table"


class SimulationError(Exception):
    """
    Raised by the engine for every structural or precondition violation.
    Callers tell failures apart by `kind`; TIME_LIMIT_REACHED is the normal
    end of a bounded run rather than a crash.
    """
    def __init__(self, kind: ErrorKind, message: str = ""):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind.value}: {message}" if message else kind.value)

    @property
    def is_time_limit(self) -> bool:
        return self.kind is ErrorKind.TIME_LIMIT_REACHED
