"""
Phase Events - What the phase machine reports to its observers.

On every accepted transition observers receive, in order:
ConstraintChecked, ActionExecuted, PhaseChanged.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Union


@dataclass(frozen=True)
class ConstraintChecked:
    phase: str
    action: str
    success: bool


@dataclass(frozen=True)
class ActionExecuted:
    phase: str
    action: str
    token: str


@dataclass(frozen=True)
class PhaseChanged:
    from_phase: str
    to_phase: str


PhaseEvent = Union[ConstraintChecked, ActionExecuted, PhaseChanged]
PhaseObserver = Callable[[PhaseEvent], None]
