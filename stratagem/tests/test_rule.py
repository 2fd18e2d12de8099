"""
Tests for rule validation.

Tests:
- Phase references must resolve
- Default phase must be declared
- Constraint keys and value kinds
- Phase graph queries
"""

from ..definitions import ActionSpec, FailureCode, RuleDefinition, Transition, check
from ..definitions.constraints import ConstraintKind, RECOGNIZED_CONSTRAINTS, value_matches


def _rule(phases, default_phase="a", goals=()):
    return RuleDefinition(default_phase=default_phase, phases=phases, goals=goals)


class TestPhaseReferences:
    """Result tokens must lead to declared phases."""

    def test_valid_rule(self, encounter_rule):
        assert check(encounter_rule).valid

    def test_dangling_result_phase(self):
        """A token pointing to an undeclared phase fails validation."""
        rule = _rule({"a": {"x": ActionSpec(result={"t": "z"})}})

        result = check(rule)

        assert not result.valid
        assert len(result.failures) == 1
        failure = result.failures[0]
        assert failure.code == FailureCode.DANGLING_PHASE
        assert failure.field == "phases.a.x.result.t"
        assert "'z'" in failure.reason

    def test_missing_default_phase(self):
        rule = _rule({"a": {}}, default_phase="start")

        failures = rule.validate()

        assert [f.code for f in failures] == [FailureCode.MISSING_DEFAULT_PHASE]

    def test_blank_default_phase(self):
        rule = _rule({"a": {}}, default_phase="")
        assert FailureCode.MISSING_VALUE in {f.code for f in rule.validate()}

    def test_no_phases(self):
        rule = _rule({}, default_phase="a")
        codes = {f.code for f in rule.validate()}
        assert FailureCode.EMPTY_COLLECTION in codes
        assert FailureCode.MISSING_DEFAULT_PHASE in codes

    def test_action_without_results(self):
        rule = _rule({"a": {"x": ActionSpec(result={})}})
        failures = rule.validate()
        assert [f.code for f in failures] == [FailureCode.EMPTY_COLLECTION]
        assert failures[0].field == "phases.a.x.result"

    def test_every_failure_is_reported(self):
        """Validation collects all failures, not just the first."""
        rule = _rule({
            "a": {
                "x": ActionSpec(result={"t": "y"}),
                "w": ActionSpec(result={"t": "z"}),
            },
        })
        assert len(rule.validate()) == 2


class TestConstraints:
    """Constraint keys come from a closed table with typed values."""

    def test_unknown_constraint_key(self):
        rule = _rule({"a": {"x": ActionSpec(result={"t": "a"}, constraints={"max_moves": 3})}})

        failures = rule.validate()

        assert len(failures) == 1
        assert failures[0].code == FailureCode.UNKNOWN_CONSTRAINT
        assert failures[0].field == "phases.a.x.constraints.max_moves"

    def test_wrong_value_kind(self):
        rule = _rule({"a": {"x": ActionSpec(
            result={"t": "a"},
            constraints={"adjacency_required": 1, "max_move": True},
        )}})

        failures = rule.validate()

        assert {f.code for f in failures} == {FailureCode.CONSTRAINT_TYPE}
        assert {f.field for f in failures} == {
            "phases.a.x.constraints.adjacency_required",
            "phases.a.x.constraints.max_move",
        }

    def test_all_recognized_kinds_accepted(self):
        rule = _rule({"a": {"x": ActionSpec(
            result={"t": "a"},
            constraints={
                "min_origin_figures": 2,
                "once_per_turn": True,
                "target_player": "red",
                "target_field": 12,
            },
        )}})
        assert rule.validate() == []

    def test_value_matches(self):
        assert value_matches(ConstraintKind.INTEGER, 0)
        assert not value_matches(ConstraintKind.INTEGER, -1)
        assert not value_matches(ConstraintKind.INTEGER, False)
        assert value_matches(ConstraintKind.BOOLEAN, False)
        assert not value_matches(ConstraintKind.BOOLEAN, "yes")
        assert value_matches(ConstraintKind.PLAYER_ID, "blue")
        assert not value_matches(ConstraintKind.PLAYER_ID, " ")
        assert value_matches(ConstraintKind.FIELD_ID, 3)
        assert not value_matches(ConstraintKind.FIELD_ID, "3")

    def test_table_is_closed(self):
        assert set(RECOGNIZED_CONSTRAINTS.values()) <= set(ConstraintKind)


class TestRuleQueries:
    """Tests for the phase graph accessors."""

    def test_self_loop_is_kept(self, encounter_rule):
        """A token mapping back to its own phase is an ordinary edge."""
        edges = list(encounter_rule.transitions())
        assert Transition("encounter", "encounter", "continue", "encounter") in edges
        assert len(edges) == 5

    def test_absorbing_phase(self, encounter_rule):
        assert encounter_rule.is_absorbing("end")
        assert not encounter_rule.is_absorbing("encounter")
        assert not encounter_rule.is_absorbing("unknown")

    def test_actions(self, encounter_rule):
        assert list(encounter_rule.actions("encounter")) == ["encounter", "retreat"]
        assert encounter_rule.actions("unknown") == {}
        assert encounter_rule.action("change_ownership", "move_in").constraints == {"max_move": 3}
        assert encounter_rule.action("end", "move_in") is None

    def test_bundled_rule_is_valid(self, teg_game):
        assert check(teg_game.rule).valid
        assert teg_game.rule.phase_ids[0] == "assign_fields"
