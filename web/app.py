"""
FastAPI web application for the hexbot engine.

Exposes POST /api/move, which accepts a move record, a search depth and an
optional perspective, runs the engine search and returns the chosen move with
its value and node count.

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which is the right place for a CPU-bound blocking search.
- Stateless per request: each request builds its own rules engine and Bot, so
  no board is ever shared between concurrent searches.
"""

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, StrictInt, field_validator

from hexbot.config import SearchConfig, parse_perspective
from hexbot.errors import ConfigError, InvalidDepthError, InvalidRecordError
from hexbot.search import Bot

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

# Upper bound on request depth, separate from SearchConfig.max_depth.
MAX_REQUEST_DEPTH = 4

app = FastAPI(title="Hexbot", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        record:      Moves played so far, as a list of SAN tokens or PGN text.
        depth:       Plies searched beyond the engine's own move.
        perspective: "side-to-move", "w" or "b".
    """

    record: list[str] | str = []
    depth: StrictInt = 1
    perspective: str = "side-to-move"

    @field_validator("depth")
    @classmethod
    def check_depth(cls, v: int) -> int:
        """Reject depths outside [0, MAX_REQUEST_DEPTH]."""
        if not 0 <= v <= MAX_REQUEST_DEPTH:
            raise ValueError(f"depth must be between 0 and {MAX_REQUEST_DEPTH}")
        return v

    @field_validator("perspective")
    @classmethod
    def check_perspective(cls, v: str) -> str:
        parse_perspective(v)
        return v


class MoveResponse(BaseModel):
    """
    Engine response.

    Fields:
        move:      Move in long algebraic form (e.g. "e2e4", "e7e8q").
        from_cell: Origin cell.
        to_cell:   Destination cell.
        promotion: Promotion piece symbol, if any.
        value:     Search value from the perspective's color.
        nodes:     Nodes visited.
        depth:     Depth searched.
    """

    move: str
    from_cell: str
    to_cell: str
    promotion: str | None
    value: int
    nodes: int
    depth: int


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_base_config() -> SearchConfig:
    """
    Engine configuration from HEXBOT_* environment variables, read once.

    Raises:
        HTTPException 500: The environment holds a malformed value.
    """
    try:
        return SearchConfig.from_env()
    except ConfigError as exc:
        _log.error("Invalid engine configuration: %s", exc)
        raise HTTPException(status_code=500, detail=f"Server misconfigured: {exc}") from exc


@app.get("/api/health")
def api_health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/move", response_model=MoveResponse)
def api_move(
    request: MoveRequest,
    base_config: SearchConfig = Depends(get_base_config),
) -> MoveResponse:
    """
    Compute the engine's move for the position reached by `request.record`.

    Raises:
        HTTPException 400: Invalid record, depth or perspective.
        HTTPException 409: The side to move has no legal move.
        HTTPException 500: The search failed or the server is misconfigured.
    """
    try:
        config = SearchConfig(
            perspective=parse_perspective(request.perspective),
            king_safety_penalty=base_config.king_safety_penalty,
            max_depth=base_config.max_depth,
        )
        bot = Bot(request.record, config=config)
    except (InvalidRecordError, ConfigError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        result = bot.search(request.depth)
    except InvalidDepthError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        _log.exception("Engine search failed for record=%s", request.record)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if result.move is None:
        raise HTTPException(status_code=409, detail="No legal move in this position")

    move = result.move
    _log.info(
        "Move=%s value=%d depth=%d nodes=%d elapsed_ms=%d",
        move.uci(),
        result.value,
        result.depth,
        result.nodes,
        result.elapsed_ms,
    )

    return MoveResponse(
        move=move.uci(),
        from_cell=str(move.from_cell),
        to_cell=str(move.to_cell),
        promotion=move.promotion.value if move.promotion is not None else None,
        value=result.value,
        nodes=result.nodes,
        depth=result.depth,
    )
