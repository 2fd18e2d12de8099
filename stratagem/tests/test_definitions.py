"""
Tests for board, pieces, cards, dices and game validation.

Tests:
- Bundled definitions are valid
- Duplicate names and dangling references
- Board adjacency queries
- Game parameters
"""

import pytest

from ..definitions import (
    BoardDefinition,
    CardDefinition,
    CardsDefinition,
    DiceFace,
    DicesDefinition,
    DiceSet,
    FailureCode,
    FieldDefinition,
    FieldSetDefinition,
    GameDefinition,
    GameParameters,
    Piece,
    PiecesDefinition,
    PieceSet,
    PlacementConfig,
    ValidationFailure,
    check,
)


def _codes(definition):
    return {f.code for f in definition.validate()}


def _board(**overrides):
    values = dict(
        id="mini",
        name="Mini",
        fields=(
            FieldDefinition(id=1, name="North"),
            FieldDefinition(id=2, name="South"),
            FieldDefinition(id=3, name="East"),
        ),
        sets=(FieldSetDefinition(name="All", fields=(1, 2, 3), bonus=2),),
        relations=((1, 2), (2, 3)),
    )
    values.update(overrides)
    return BoardDefinition(**values)


def _game(**overrides):
    values = dict(
        id="mini",
        name="Mini",
        rule="",
        board="",
        pieces="",
        parameters=GameParameters(
            min_players=2,
            max_players=4,
            placement=PlacementConfig(setup_round_figures=3, regular_round_figures=2),
            card_bonus_sequence=(4, 6),
        ),
    )
    values.update(overrides)
    return GameDefinition(**values)


class TestValidationFailure:
    def test_str(self):
        failure = ValidationFailure("board", "relations[0]", "unknown field", FailureCode.DANGLING_REFERENCE)
        assert str(failure) == "board: relations[0]: unknown field"

    def test_result(self):
        result = check(_board(relations=((1, 9),)))
        assert not result.valid
        assert result.kind == "board"
        assert result.errors == ["board: relations[0]: relation (1, 9) refers to an unknown field"]


class TestBoard:
    """Tests for BoardDefinition."""

    def test_valid(self):
        assert _board().validate() == []

    def test_bundled_board(self, teg_board):
        assert check(teg_board).valid
        assert teg_board.field(10).name == "India"
        assert teg_board.field_set("Asia").bonus == 7

    def test_relations_are_bidirectional(self):
        board = _board()
        assert board.are_adjacent(1, 2)
        assert board.are_adjacent(2, 1)
        assert not board.are_adjacent(1, 3)
        assert board.neighbours(2) == {1, 3}

    def test_dangling_relation(self):
        assert _codes(_board(relations=((1, 4),))) == {FailureCode.DANGLING_REFERENCE}

    def test_self_relation(self):
        assert _codes(_board(relations=((2, 2),))) == {FailureCode.DANGLING_REFERENCE}

    def test_duplicate_field_id(self):
        board = _board(
            fields=(FieldDefinition(id=1, name="North"), FieldDefinition(id=1, name="South")),
            sets=(),
            relations=(),
        )
        assert _codes(board) == {FailureCode.DUPLICATE_NAME}

    def test_duplicate_field_name(self):
        board = _board(
            fields=(FieldDefinition(id=1, name="North"), FieldDefinition(id=2, name="North")),
            sets=(),
            relations=(),
        )
        assert _codes(board) == {FailureCode.DUPLICATE_NAME}

    def test_set_member_must_exist(self):
        board = _board(sets=(FieldSetDefinition(name="All", fields=(1, 7)),))
        failures = board.validate()
        assert [f.code for f in failures] == [FailureCode.DANGLING_REFERENCE]
        assert failures[0].field == "sets.All"

    def test_duplicate_set_name(self):
        board = _board(sets=(
            FieldSetDefinition(name="A", fields=(1,)),
            FieldSetDefinition(name="A", fields=(2,)),
        ))
        assert _codes(board) == {FailureCode.DUPLICATE_NAME}

    def test_no_fields(self):
        board = _board(fields=(), sets=(), relations=())
        assert _codes(board) == {FailureCode.EMPTY_COLLECTION}


class TestPieces:
    """Tests for PiecesDefinition."""

    def test_valid(self, teg_game):
        assert teg_game.pieces.validate() == []

    def test_duplicate_value(self):
        pieces = PiecesDefinition(
            id="p", name="P",
            sets=(PieceSet(name="standard", pieces=(Piece(value=1), Piece(value=1))),),
        )
        assert _codes(pieces) == {FailureCode.DUPLICATE_NAME}

    def test_empty_set(self):
        pieces = PiecesDefinition(id="p", name="P", sets=(PieceSet(name="standard", pieces=()),))
        assert _codes(pieces) == {FailureCode.EMPTY_COLLECTION}

    def test_duplicate_set_name(self):
        pieces = PiecesDefinition(id="p", name="P", sets=(
            PieceSet(name="a", pieces=(Piece(value=1),)),
            PieceSet(name="a", pieces=(Piece(value=5),)),
        ))
        assert _codes(pieces) == {FailureCode.DUPLICATE_NAME}


class TestCards:
    """Tests for CardsDefinition."""

    def test_valid(self, teg_game):
        assert teg_game.cards.validate() == []
        assert teg_game.cards.deck_size == 14
        assert teg_game.cards.card("Wildcard").field is None

    def test_duplicate_card(self):
        cards = CardsDefinition(id="c", name="C", cards=(
            CardDefinition(name="A", symbol="x"),
            CardDefinition(name="A", symbol="y"),
        ))
        assert _codes(cards) == {FailureCode.DUPLICATE_NAME}

    def test_blank_symbol_and_bad_count(self):
        cards = CardsDefinition(id="c", name="C", cards=(CardDefinition(name="A", symbol="", count=0),))
        assert _codes(cards) == {FailureCode.MISSING_VALUE, FailureCode.OUT_OF_RANGE}


class TestDices:
    """Tests for DicesDefinition."""

    def test_valid(self, teg_game):
        assert teg_game.dices.validate() == []
        assert len(teg_game.dices.dice_set("defense").faces) == 6

    def test_die_without_faces(self):
        dices = DicesDefinition(id="d", name="D", dice_sets=(DiceSet(name="attack", faces=()),))
        assert _codes(dices) == {FailureCode.EMPTY_COLLECTION}

    def test_duplicate_dice_set(self):
        dices = DicesDefinition(id="d", name="D", dice_sets=(
            DiceSet(name="a", faces=(DiceFace(value=1),)),
            DiceSet(name="a", faces=(DiceFace(value=1),)),
        ))
        assert _codes(dices) == {FailureCode.DUPLICATE_NAME}


class TestGame:
    """Tests for GameDefinition."""

    def test_valid(self):
        assert _game().validate() == []

    def test_optional_components(self):
        game = _game()
        assert game.reference("cards") is None
        assert game.reference("rule") == ""

    def test_unknown_component(self):
        with pytest.raises(KeyError):
            _game().reference("tokens")

    def test_missing_required_reference(self):
        failures = _game(rule=None, pieces=None).validate()
        assert {f.field for f in failures} == {"rule", "pieces"}

    def test_player_range(self):
        params = GameParameters(
            min_players=4,
            max_players=2,
            placement=PlacementConfig(setup_round_figures=3, regular_round_figures=2),
            card_bonus_sequence=(4,),
        )
        failures = _game(parameters=params).validate()
        assert [f.field for f in failures] == ["parameters.max_players"]

    def test_empty_bonus_sequence(self):
        params = GameParameters(
            min_players=2,
            max_players=4,
            placement=PlacementConfig(setup_round_figures=3, regular_round_figures=2),
            card_bonus_sequence=(),
        )
        assert _codes(_game(parameters=params)) == {FailureCode.EMPTY_COLLECTION}
