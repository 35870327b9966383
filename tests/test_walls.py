from dataclasses import replace

from quoridor.board import Board, Orientation, Wall
from quoridor.game import legal_wall_placements, new_position, wall_is_legal

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


def test_all_anchors_legal_on_empty_board():
    pos = new_position(["p1", "p3"])
    walls = legal_wall_placements(pos)
    assert len(walls) == 2 * 8 * 8
    assert walls[0] == Wall(0, 0, H)
    assert walls[1] == Wall(0, 0, V)


def test_no_walls_left_means_no_placements():
    pos = new_position(["p1", "p3"], walls=0)
    assert legal_wall_placements(pos) == []


def test_placed_wall_removes_crossing_and_overlaps():
    pos = replace(new_position(["p1", "p3"]), board=Board(9, [Wall(3, 3, H)]))
    walls = set(legal_wall_placements(pos))
    assert len(walls) == 128 - 4
    for w in (Wall(3, 3, H), Wall(3, 3, V), Wall(3, 2, H), Wall(3, 4, H)):
        assert w not in walls
    assert Wall(2, 3, V) in walls
    assert Wall(4, 3, V) in walls
    assert Wall(3, 5, H) in walls


def sealing_position():
    # p3 sits in a corridor along column 0 that only opens below row 3
    pos = new_position(["p1", "p3"])
    return replace(
        pos,
        pawns={"p1": (8, 4), "p3": (0, 0)},
        board=Board(9, [Wall(0, 0, V), Wall(2, 0, V)]),
    )


def test_wall_sealing_last_corridor_rejected():
    pos = sealing_position()
    seal = Wall(3, 0, H)
    assert pos.board.anchor_in_range(seal)
    assert not pos.board.conflicts(seal)
    assert not wall_is_legal(pos, seal)
    assert seal not in legal_wall_placements(pos)
    assert wall_is_legal(pos, Wall(4, 0, H))


def test_accepted_walls_keep_every_path_open():
    pos = sealing_position()
    for w in legal_wall_placements(pos):
        trial = pos.board.with_wall(w)
        for pid in pos.active:
            assert trial.path_exists(pos.pawns[pid], pos.goals[pid])


def test_walls_checked_for_all_four_players():
    pos = new_position(["p1", "p2", "p3", "p4"])
    # p4 starts at (4,0) heading east; only (4,1)->(4,2) leads out
    pos = replace(pos, board=Board(9, [Wall(3, 0, H), Wall(4, 0, H)]))
    for seal in (Wall(4, 1, V), Wall(3, 1, V)):
        assert not pos.board.conflicts(seal)
        assert not wall_is_legal(pos, seal)
    assert wall_is_legal(pos, Wall(5, 1, V))
