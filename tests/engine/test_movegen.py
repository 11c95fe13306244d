from __future__ import annotations

from ringchess.engine.bitboard import Bitboard
from ringchess.engine.board import Board
from ringchess.engine.movegen import (
    generate_moves,
    get_all_legal_moves,
    get_legal_moves,
    is_legal_move,
)
from ringchess.engine.piece import Color, Piece, PieceType
from ringchess.engine.rules import GameMode, get_attacks
from ringchess.engine.state import GameState
from ringchess.engine.topology import Coordinate, to_index


def sq(ring: int, file: int) -> int:
    return to_index(ring, file)


def state_with(pieces, turn=Color.WHITE, mode=GameMode.STANDARD, citadel=None) -> GameState:
    board = Board()
    for (ring, file), color, ptype in pieces:
        board.set_piece(Coordinate(ring, file), Piece(color, ptype))
    return GameState(
        board=board,
        turn=turn,
        mode=mode,
        citadel_squares=citadel if citadel is not None else Bitboard.empty(),
    )


def test_standard_queen_moves_exclude_friendly_pieces(standard_state: GameState) -> None:
    queen_sq = sq(0, 0)
    assert standard_state.piece_at(queen_sq) == Piece(Color.WHITE, PieceType.QUEEN)
    raw = get_attacks(PieceType.QUEEN, Color.WHITE, queen_sq, GameMode.STANDARD)
    expected = raw & ~standard_state.get_occupancy(Color.WHITE)
    assert get_legal_moves(standard_state, queen_sq) == expected
    # Both fers targets hold white pieces in the opening
    assert expected.is_empty()


def test_empty_square_and_wrong_color_yield_nothing(standard_state: GameState) -> None:
    assert get_legal_moves(standard_state, sq(0, 4)).is_empty()
    assert get_legal_moves(standard_state, sq(1, 7)).is_empty()  # black bishop
    assert get_legal_moves(standard_state, 64).is_empty()
    assert get_legal_moves(standard_state, Coordinate(4, 0)).is_empty()


def test_rook_stops_at_enemy_and_can_capture_it() -> None:
    st = state_with(
        [
            ((0, 0), Color.WHITE, PieceType.ROOK),
            ((0, 3), Color.BLACK, PieceType.PAWN),
            ((0, 12), Color.WHITE, PieceType.PAWN),
            ((2, 0), Color.WHITE, PieceType.KING),
        ]
    )
    moves = get_legal_moves(st, sq(0, 0))
    assert {s for s in moves if s < 16} == {1, 2, 3, 13, 14, 15}
    assert {s for s in moves if s >= 16} == {sq(1, 0)}
    assert is_legal_move(st, sq(0, 0), sq(0, 3))
    assert not is_legal_move(st, sq(0, 0), sq(0, 4))
    assert not is_legal_move(st, sq(0, 0), sq(0, 12))


def test_pawn_captures_only_enemies() -> None:
    st = state_with(
        [
            ((1, 1), Color.WHITE, PieceType.PAWN),
            ((2, 2), Color.BLACK, PieceType.KNIGHT),
            ((0, 2), Color.WHITE, PieceType.KNIGHT),
        ]
    )
    assert set(get_legal_moves(st, sq(1, 1))) == {sq(1, 2), sq(2, 2)}


def test_blocked_pawn_still_captures() -> None:
    st = state_with(
        [
            ((1, 1), Color.WHITE, PieceType.PAWN),
            ((1, 2), Color.BLACK, PieceType.PAWN),
            ((0, 2), Color.BLACK, PieceType.ROOK),
        ]
    )
    assert set(get_legal_moves(st, sq(1, 1))) == {sq(0, 2)}


def test_citadel_pawn_direction_follows_color() -> None:
    st = state_with([((0, 1), Color.WHITE, PieceType.PAWN)], mode=GameMode.CITADEL)
    assert set(get_legal_moves(st, sq(0, 1))) == {sq(0, 0)}
    st_std = state_with([((0, 1), Color.WHITE, PieceType.PAWN)])
    assert set(get_legal_moves(st_std, sq(0, 1))) == {sq(0, 2)}


def test_citadel_squares_are_masked_only_in_citadel_mode() -> None:
    blocked = Bitboard.from_index(sq(2, 5))
    pieces = [((1, 4), Color.WHITE, PieceType.KING)]
    st = state_with(pieces, mode=GameMode.CITADEL, citadel=blocked)
    moves = get_legal_moves(st, sq(1, 4))
    assert sq(2, 5) not in moves
    assert len(moves) == 7
    st_std = state_with(pieces, mode=GameMode.STANDARD, citadel=blocked)
    assert sq(2, 5) in get_legal_moves(st_std, sq(1, 4))


def test_is_legal_move_rejects_off_board_target(standard_state: GameState) -> None:
    assert not is_legal_move(standard_state, sq(0, 1), -1)
    assert not is_legal_move(standard_state, sq(0, 1), Coordinate(4, 2))
    assert is_legal_move(standard_state, sq(0, 1), sq(0, 2))
    assert is_legal_move(standard_state, Coordinate(0, 1), Coordinate(0, 2))


def test_all_legal_moves_standard_opening(standard_state: GameState) -> None:
    moves = get_all_legal_moves(standard_state)
    for origin, targets in moves.items():
        assert standard_state.piece_at(origin).color is Color.WHITE
        assert not targets.is_empty()
    # King, queen and rooks are boxed in by their own pieces
    for boxed in (sq(0, 15), sq(0, 0), sq(3, 15), sq(3, 0)):
        assert boxed not in moves
    assert set(moves[sq(1, 15)]) == {sq(3, 13)}
    assert set(moves[sq(2, 0)]) == {sq(3, 2), sq(1, 2)}
    assert sum(len(t) for t in moves.values()) == 14


def test_generate_moves_is_ordered(standard_state: GameState) -> None:
    moves = generate_moves(standard_state)
    keys = [(m.from_sq, m.to_sq) for m in moves]
    assert keys == sorted(keys)
    assert len(moves) == 14


def test_black_pawns_on_file_nine_are_blocked(standard_state: GameState) -> None:
    black = standard_state.switch_turn()
    for ring in range(4):
        assert get_legal_moves(black, sq(ring, 9)).is_empty()
        assert set(get_legal_moves(black, sq(ring, 6))) == {sq(ring, 5)}
    assert len(generate_moves(black)) == 10


def test_self_check_is_not_filtered() -> None:
    # White king may step next to the black king; no king-safety filtering.
    st = state_with(
        [
            ((1, 4), Color.WHITE, PieceType.KING),
            ((1, 6), Color.BLACK, PieceType.KING),
        ]
    )
    assert is_legal_move(st, sq(1, 4), sq(1, 5))
