from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from config import DEFAULT_GRID_SIZE_M
from solver import InvalidConfiguration, NoTarget, Solver
from utils import Point

logger = logging.getLogger(__name__)

app = FastAPI(title="Grid Artillery Calculator (LAN)")


@app.get("/api/ping")
def api_ping():
    return {"ok": True}


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One shared solver for every client on the LAN. Points live in memory only.
_LOCK = threading.Lock()
SOLVER = Solver(Point(0, 0), DEFAULT_GRID_SIZE_M)
STATE: Dict[str, Any] = {"ts": 0.0}


def _touch():
    STATE["ts"] = time.time()


def _error(e: Exception) -> Dict[str, Any]:
    return {"ok": False, "error": str(e)}


def _state_payload() -> Dict[str, Any]:
    target = SOLVER.target
    return {
        "ts": STATE["ts"],
        "origin": SOLVER.origin.as_pair(),
        "target": target.as_pair() if target is not None else None,
        "grid_size": SOLVER.grid_size,
    }


class PointIn(BaseModel):
    x: int
    y: int


class SetPointIn(BaseModel):
    dest: str
    x: int
    y: int


class GridSizeIn(BaseModel):
    grid_size: int


class SolveIn(BaseModel):
    origin: PointIn
    target: PointIn
    grid_size: Optional[int] = None


@app.get("/api/state")
def api_state():
    with _LOCK:
        return {"ok": True, **_state_payload()}


@app.post("/api/set_point")
def api_set_point(p: SetPointIn):
    dest = p.dest.strip().lower()
    point = Point(p.x, p.y)
    with _LOCK:
        if dest == "origin":
            SOLVER.set_origin(point)
        elif dest == "target":
            SOLVER.set_target(point)
        else:
            return {"ok": False, "error": f"unknown dest {p.dest!r}, expected 'origin' or 'target'"}
        _touch()
        logger.info("%s set to %s", dest, point.label())
        return {"ok": True, **_state_payload()}


@app.post("/api/grid_size")
def api_grid_size(cfg: GridSizeIn):
    with _LOCK:
        try:
            SOLVER.set_grid_size(cfg.grid_size)
        except InvalidConfiguration as e:
            return _error(e)
        _touch()
        logger.info("grid size set to %d m", cfg.grid_size)
        return {"ok": True, **_state_payload()}


@app.get("/api/solution")
def api_solution():
    with _LOCK:
        try:
            sol = SOLVER.solve()
        except NoTarget as e:
            return _error(e)
    return {"ok": True, "solution": sol.as_dict()}


@app.post("/api/solve")
def api_solve(req: SolveIn):
    grid_size = DEFAULT_GRID_SIZE_M if req.grid_size is None else req.grid_size
    try:
        solver = Solver(Point(req.origin.x, req.origin.y), grid_size)
    except InvalidConfiguration as e:
        return _error(e)
    solver.set_target(Point(req.target.x, req.target.y))
    return {"ok": True, "solution": solver.solve().as_dict()}


@app.post("/api/reset_runtime_data")
def api_reset_runtime_data():
    global SOLVER
    with _LOCK:
        SOLVER = Solver(Point(0, 0), DEFAULT_GRID_SIZE_M)
        _touch()
        return {"ok": True, **_state_payload()}
