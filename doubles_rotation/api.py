"""
REST API for the doubles rotation scheduler.
Thin wrappers around the schedule service and the share-token adapter.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from doubles_rotation import config
from doubles_rotation.adapters.parsing import generate_seed
from doubles_rotation.adapters.sharing import (
    ShareConfig,
    ShareTokenError,
    decode_share_token,
    encode_share_token,
)
from doubles_rotation.engine.errors import ScheduleInputError
from doubles_rotation.engine.orchestrator import validate_inputs
from doubles_rotation.engine.schemas import ScheduleOptions
from doubles_rotation.logging_config import setup_logging
from doubles_rotation.services.schedule_service import resolve_players, run_schedule, run_shared

logger = logging.getLogger(__name__)


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="Doubles Rotation API",
    description="Seeded 2v2 court rotations with fair benching and few repeat pairings",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Request/Response models ----------


class OptionsModel(BaseModel):
    """Scoring weights and search breadth. Omitted fields use the server defaults."""
    weight_team: float | None = Field(None, ge=0, description="Repeat-teammate penalty weight")
    weight_opponent: float | None = Field(None, ge=0, description="Repeat-opponent penalty weight")
    weight_play: float | None = Field(None, ge=0, description="Games-played balancing weight")
    beam_width: int | None = Field(None, ge=1, le=1000)
    partner_k: int | None = Field(None, ge=2, le=100)
    square_repeats: bool | None = None
    avoid_back_to_back: bool | None = None

    def to_options(self) -> ScheduleOptions:
        opts = config.default_options()
        for name, value in self.model_dump(exclude_none=True).items():
            setattr(opts, name, value)
        return opts


class ScheduleRequest(BaseModel):
    players: list[str] | None = Field(None, description="Player names, in order")
    players_text: str | None = Field(None, description="Comma or newline separated names; used when players is omitted")
    courts: int = Field(default=1, ge=1)
    rounds: int = Field(default=1, ge=1)
    seed: str | None = Field(default=None, description="Seed text; empty = non-reproducible")
    fresh_seed: bool = Field(default=False, description="Generate a seed when none is given")
    options: OptionsModel = Field(default_factory=OptionsModel)


class ShareRequest(ScheduleRequest):
    auto: bool = Field(default=True, description="Receiver builds the schedule on open")


def _check_limits(player_count: int, rounds: int) -> None:
    if player_count > config.MAX_PLAYERS:
        raise HTTPException(status_code=400, detail=f"At most {config.MAX_PLAYERS} players per request")
    if rounds > config.MAX_ROUNDS:
        raise HTTPException(status_code=400, detail=f"At most {config.MAX_ROUNDS} rounds per request")


def _share_config_to_dict(cfg: ShareConfig) -> dict[str, Any]:
    return {
        "players": list(cfg.players),
        "courts": cfg.courts,
        "rounds": cfg.rounds,
        "seed": cfg.seed,
        "options": cfg.options.to_dict(),
        "auto": cfg.auto,
    }


def _decode_or_400(token: str) -> ShareConfig:
    try:
        return decode_share_token(token)
    except ShareTokenError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ---------- Endpoints ----------


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/defaults")
def get_defaults() -> dict[str, Any]:
    """Default options, after environment overrides."""
    return {"options": config.default_options().to_dict()}


@app.get("/seed")
def new_seed() -> dict[str, str]:
    return {"seed": generate_seed()}


@app.post("/schedule")
def create_schedule(req: ScheduleRequest) -> dict[str, Any]:
    """
    Build a schedule. Returns rounds, ledger snapshot, diagnostics summary,
    plain-text export and warnings (e.g. courts capped by player count).
    """
    players = resolve_players(req.players, req.players_text)
    _check_limits(len(players), req.rounds)
    try:
        return run_schedule(
            players=players,
            courts=req.courts,
            rounds=req.rounds,
            seed=req.seed,
            options=req.options.to_options(),
            fresh_seed=req.fresh_seed,
        )
    except ScheduleInputError as e:
        logger.info("Rejected schedule request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/share")
def create_share_token(req: ShareRequest) -> dict[str, str]:
    """Pack a configuration into a compact token for sharing."""
    players = resolve_players(req.players, req.players_text)
    _check_limits(len(players), req.rounds)
    options = req.options.to_options()
    try:
        validate_inputs(players, req.courts, req.rounds, options)
    except ScheduleInputError as e:
        logger.info("Rejected share request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    seed = (req.seed or "").strip()
    if not seed and req.fresh_seed:
        seed = generate_seed()
    cfg = ShareConfig(
        players=players,
        courts=req.courts,
        rounds=req.rounds,
        seed=seed,
        options=options,
        auto=req.auto,
    )
    return {"token": encode_share_token(cfg)}


@app.get("/share/{token}")
def read_share_token(token: str) -> dict[str, Any]:
    return _share_config_to_dict(_decode_or_400(token))


@app.get("/share/{token}/schedule")
def schedule_from_share_token(token: str) -> dict[str, Any]:
    cfg = _decode_or_400(token)
    _check_limits(len(cfg.players), cfg.rounds)
    try:
        return run_shared(cfg)
    except ScheduleInputError as e:
        logger.info("Rejected shared schedule: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


# ---------- Run with: uvicorn doubles_rotation.api:app --reload ----------
