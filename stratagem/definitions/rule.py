"""
Rule Definition - The phase/action/result graph of a ruleset.

A rule is a symbolic state machine:
- `phases` maps a phase id to the actions legal in that phase
- each action maps result tokens (produced by an external evaluator) to the
  next phase id, and may carry typed constraints
- `default_phase` is where every session starts
- `goals` is the ordered list of victory conditions

Cycles are expected (an action may loop back to its own phase). A phase with
no actions is absorbing: once entered, no further token is accepted.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Mapping

from pydantic import ConfigDict, with_config

from .constraints import ConstraintValue, constraint_problems
from .goals import Goal, GoalSpec, goal_index, validate_goals
from .validation import (
    FailureCode,
    ReadOnlyDict,
    Validatable,
    ValidationFailure,
    freeze_mapping,
    is_blank,
)


_NO_ACTIONS: Mapping[str, ActionSpec] = ReadOnlyDict()


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class ActionSpec:
    """
    An action legal within a phase.

    `result` maps every token the evaluator can produce for this action to the
    next phase, including self-loop and terminal tokens.
    """
    result: dict[str, str]
    constraints: dict[str, ConstraintValue] = field(default_factory=dict)
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "result", freeze_mapping(self.result))
        object.__setattr__(self, "constraints", freeze_mapping(self.constraints))


@dataclass(frozen=True)
class Transition:
    """One edge of the phase graph."""
    phase: str
    action: str
    token: str
    next_phase: str


@with_config(ConfigDict(extra="forbid"))
@dataclass(frozen=True)
class RuleDefinition(Validatable):
    """
    Top-level content of a `.rule.yaml` file.

    `phases` and the mappings of every ActionSpec are read-only once built,
    so a rule can be shared by any number of sessions.
    """
    default_phase: str
    phases: dict[str, dict[str, ActionSpec]]
    goals: tuple[GoalSpec, ...] = ()
    name: str = ""
    description: str = ""

    definition_kind = "rule"

    def __post_init__(self):
        object.__setattr__(self, "phases", freeze_mapping(self.phases))

    @property
    def phase_ids(self) -> list[str]:
        return list(self.phases)

    def actions(self, phase: str) -> Mapping[str, ActionSpec]:
        """Actions of a phase; empty for absorbing or unknown phases."""
        return self.phases.get(phase, _NO_ACTIONS)

    def action(self, phase: str, name: str) -> ActionSpec | None:
        return self.actions(phase).get(name)

    def is_absorbing(self, phase: str) -> bool:
        return phase in self.phases and not self.phases[phase]

    def transitions(self) -> Iterator[Transition]:
        """Iterate every (phase, action, token) -> next phase edge."""
        for phase, actions in self.phases.items():
            for name, spec in actions.items():
                for token, next_phase in spec.result.items():
                    yield Transition(phase, name, token, next_phase)

    def goal_by_id(self, goal_id: str) -> Goal | None:
        return goal_index(self.goals).get(goal_id)

    def validate(self) -> list[ValidationFailure]:
        failures: list[ValidationFailure] = []

        if is_blank(self.default_phase):
            failures.append(self.failure(
                "default_phase", "default phase is required", FailureCode.MISSING_VALUE,
            ))
        elif self.default_phase not in self.phases:
            failures.append(self.failure(
                "default_phase",
                f"default phase '{self.default_phase}' is not a declared phase",
                FailureCode.MISSING_DEFAULT_PHASE,
            ))

        if not self.phases:
            failures.append(self.failure(
                "phases", "at least one phase is required", FailureCode.EMPTY_COLLECTION,
            ))

        known = set(self.phases) | {self.default_phase}

        for phase, actions in self.phases.items():
            if is_blank(phase):
                failures.append(self.failure(
                    "phases", "phase id must not be blank", FailureCode.MISSING_VALUE,
                ))
            for name, spec in actions.items():
                path = f"phases.{phase}.{name}"
                if is_blank(name):
                    failures.append(self.failure(
                        f"phases.{phase}", "action id must not be blank",
                        FailureCode.MISSING_VALUE,
                    ))
                failures.extend(self._validate_action(path, spec, known))

        failures.extend(validate_goals(self.definition_kind, self.goals))
        return failures

    def _validate_action(
        self, path: str, spec: ActionSpec, known: set[str]
    ) -> list[ValidationFailure]:
        failures = []

        if not spec.result:
            failures.append(self.failure(
                f"{path}.result", "action declares no result tokens",
                FailureCode.EMPTY_COLLECTION,
            ))

        for token, next_phase in spec.result.items():
            if is_blank(token):
                failures.append(self.failure(
                    f"{path}.result", "result token must not be blank",
                    FailureCode.MISSING_VALUE,
                ))
            if next_phase not in known:
                failures.append(self.failure(
                    f"{path}.result.{token}",
                    f"token '{token}' leads to unknown phase '{next_phase}'",
                    FailureCode.DANGLING_PHASE,
                ))

        for key, reason, unknown in constraint_problems(spec.constraints):
            failures.append(self.failure(
                f"{path}.constraints.{key}",
                reason,
                FailureCode.UNKNOWN_CONSTRAINT if unknown else FailureCode.CONSTRAINT_TYPE,
            ))

        return failures
