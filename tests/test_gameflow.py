from collections.abc import Hashable
from dataclasses import replace

import pytest

from quoridor.board import Edge, Orientation, Wall
from quoridor.game import (Game, Move, Status, apply_move, apply_player_loss,
                           legal_moves, legal_pawn_moves, new_position)


def test_initial_position_two_players():
    pos = new_position(["p1", "p3"])
    assert pos.pawns == {"p1": (8, 4), "p3": (0, 4)}
    assert pos.walls_left == {"p1": 10, "p3": 10}
    assert pos.goals == {"p1": Edge.NORTH, "p3": Edge.SOUTH}
    assert pos.to_move == "p1"
    assert pos.status == Status.ACTIVE


def test_initial_position_four_players():
    pos = new_position(["p1", "p2", "p3", "p4"])
    assert pos.pawns == {"p1": (8, 4), "p2": (4, 8), "p3": (0, 4), "p4": (4, 0)}
    assert set(pos.walls_left.values()) == {5}


def test_initial_position_rejects_bad_setup():
    with pytest.raises(ValueError):
        new_position(["p1"])
    with pytest.raises(ValueError):
        new_position(["p1", "p9"])
    with pytest.raises(ValueError):
        new_position(["p1", "p3"], board_size=8)
    with pytest.raises(ValueError):
        new_position(["p1", "p3"], goals={"p3": Edge.NORTH})


def test_pawn_move_advances_turn_without_mutating():
    pos = new_position(["p1", "p3"])
    nxt = apply_move(pos, Move.pawn((7, 4)))
    assert nxt.pawns["p1"] == (7, 4)
    assert nxt.to_move == "p3"
    assert pos.pawns["p1"] == (8, 4)
    assert pos.to_move == "p1"


def test_position_is_not_hashable():
    pos = new_position(["p1", "p3"])
    assert not isinstance(pos, Hashable)
    with pytest.raises(TypeError):
        hash(pos)
    assert pos == new_position(["p1", "p3"])


def test_wall_move_spends_wall():
    pos = new_position(["p1", "p3"])
    w = Wall(2, 3, Orientation.HORIZONTAL)
    nxt = apply_move(pos, Move.place_wall(w))
    assert nxt.board.walls == (w,)
    assert nxt.walls_left["p1"] == 9
    assert nxt.walls_left["p3"] == 10
    assert pos.board.walls == ()
    assert pos.walls_left["p1"] == 10


def test_turn_cycles_through_all_players():
    pos = new_position(["p1", "p2", "p3"])
    seen = []
    for _ in range(4):
        seen.append(pos.to_move)
        pos = apply_move(pos, Move.place_wall(Wall(len(seen), 0, Orientation.HORIZONTAL)))
    assert seen == ["p1", "p2", "p3", "p1"]


def test_reaching_goal_ends_game_without_advancing_turn():
    pos = replace(new_position(["p1", "p3"]), pawns={"p1": (1, 4), "p3": (8, 0)})
    end = apply_move(pos, Move.pawn((0, 4)))
    assert end.status == Status.ENDED
    assert end.winner == "p1"
    assert end.reason == "goal"
    assert end.to_move == "p1"
    assert legal_moves(end) == []
    with pytest.raises(RuntimeError):
        apply_move(end, Move.pawn((1, 4)))


def test_status_ended_iff_goal_reached():
    pos = replace(new_position(["p1", "p3"]), pawns={"p1": (1, 4), "p3": (7, 0)})
    for cell in legal_pawn_moves(pos):
        child = apply_move(pos, Move.pawn(cell))
        assert child.ended() == (cell[0] == 0)


def test_resign_is_not_a_board_move():
    with pytest.raises(ValueError):
        apply_move(new_position(["p1", "p3"]), Move.resign())


def test_player_loss_two_players():
    pos = new_position(["p1", "p3"])
    end = apply_player_loss(pos, "p1")
    assert end.status == Status.ENDED
    assert end.winner == "p3"
    assert end.reason == "last player standing"
    assert "p1" not in end.pawns


def test_player_loss_keeps_current_player():
    pos = replace(new_position(["p1", "p2", "p3"]), turn_index=2)
    nxt = apply_player_loss(pos, "p1")
    assert nxt.active == ("p2", "p3")
    assert nxt.to_move == "p3"
    assert nxt.status == Status.ACTIVE


def test_player_loss_of_current_player_passes_turn():
    pos = replace(new_position(["p1", "p2", "p3"]), turn_index=2)
    nxt = apply_player_loss(pos, "p3")
    assert nxt.to_move == "p1"
    pos = replace(pos, turn_index=1)
    assert apply_player_loss(pos, "p2").to_move == "p3"


def test_player_loss_unknown_player_is_noop():
    pos = new_position(["p1", "p3"])
    assert apply_player_loss(pos, "p4") is pos


def test_game_rejects_illegal_moves():
    g = Game()
    with pytest.raises(ValueError):
        g.play(Move.pawn((6, 4)))
    g.play(Move.place_wall(Wall(0, 0, Orientation.HORIZONTAL)))
    with pytest.raises(ValueError):
        g.play(Move.place_wall(Wall(0, 1, Orientation.HORIZONTAL)))
    assert g.current_player() == "p3"


def test_game_resign_and_game_over():
    g = Game()
    g.play(Move.pawn((7, 4)))
    g.play(Move.resign())
    assert g.terminal()
    assert g.winner() == "p1"
    with pytest.raises(RuntimeError):
        g.play(Move.pawn((6, 4)))
