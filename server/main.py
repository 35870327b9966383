import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from quoridor.ai.minimax import DEFAULT_MAX_DEPTH, best_move
from quoridor.game import DEFAULT_BOARD_SIZE, Game
from quoridor.notation import move_to_str, parse_move
from quoridor.snapshot import StateSnapshot, find_best_move, position_to_snapshot

logger = logging.getLogger(__name__)

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

GAMES: Dict[str, Game] = {}


class NewGameRequest(BaseModel):
    players: List[str] = ["p1", "p3"]
    board_size: int = DEFAULT_BOARD_SIZE
    walls: Optional[int] = None


class PlayRequest(BaseModel):
    move: str


class BotRequest(BaseModel):
    depth: int = Field(DEFAULT_MAX_DEPTH, ge=1, le=4)


class BestMoveRequest(BaseModel):
    state: StateSnapshot
    players: List[str]
    depth: int = Field(DEFAULT_MAX_DEPTH, ge=1, le=4)


def to_state(g: Game) -> dict:
    state = position_to_snapshot(g.position)
    state["to_move"] = g.current_player()
    state["terminal"] = g.terminal()
    state["reason"] = g.reason()
    return state


def get_game(gid: str) -> Game:
    g = GAMES.get(gid)
    if g is None:
        raise HTTPException(404, "unknown game")
    return g


@app.post("/new")
def new_game(req: Optional[NewGameRequest] = None):
    req = req or NewGameRequest()
    try:
        g = Game(players=req.players, board_size=req.board_size, walls=req.walls)
    except ValueError as e:
        raise HTTPException(400, str(e))
    gid = uuid4().hex
    GAMES[gid] = g
    logger.info("new game %s: players=%s size=%d", gid, req.players, req.board_size)
    return {"game_id": gid, "state": to_state(g)}


@app.get("/state/{gid}")
def state(gid: str):
    return {"state": to_state(get_game(gid))}


@app.post("/play/{gid}")
def play(gid: str, req: PlayRequest):
    g = get_game(gid)
    try:
        g.play(parse_move(req.move, g.position.size))
    except (ValueError, RuntimeError) as e:
        raise HTTPException(400, str(e))
    return {"state": to_state(g)}


@app.post("/resign/{gid}")
def resign(gid: str):
    g = get_game(gid)
    try:
        g.resign()
    except (ValueError, RuntimeError) as e:
        raise HTTPException(400, str(e))
    logger.info("game %s: resignation, winner=%s", gid, g.winner())
    return {"state": to_state(g)}


@app.post("/bot/{gid}")
def bot(gid: str, req: Optional[BotRequest] = None):
    req = req or BotRequest()
    g = get_game(gid)
    if g.terminal():
        raise HTTPException(400, "Game over")
    side = g.current_player()
    mv = best_move(g.position, max_depth=req.depth)
    g.play(mv)
    logger.info("game %s: bot %s plays %s", gid, side, move_to_str(mv))
    return {"move": move_to_str(mv), "state": to_state(g)}


@app.post("/best-move")
def best_move_stateless(req: BestMoveRequest) -> Dict[str, Any]:
    try:
        return find_best_move(req.state, req.players, depth=req.depth)
    except ValueError as e:
        raise HTTPException(400, str(e))
