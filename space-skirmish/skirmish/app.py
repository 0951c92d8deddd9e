from __future__ import annotations
import asyncio
import itertools
import json
from typing import Dict

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from .bus import BUS
from .config import configure_logging
from .models import ClientMessage
from .sim.loop import Simulation


app = FastAPI(title="Space Skirmish")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


sim = Simulation()
_sim_task = None  # type: ignore[assignment]
_player_ids = itertools.count(1)
_clients: Dict[int, WebSocket] = {}


@app.on_event("startup")
async def _startup() -> None:
    global _sim_task
    configure_logging()
    _sim_task = asyncio.create_task(sim.run())


@app.on_event("shutdown")
async def _shutdown() -> None:
    sim.stop()
    if _sim_task is not None:
        await _sim_task


@app.websocket("/ws/{username}")
async def ws_player(ws: WebSocket, username: str) -> None:
    await ws.accept()
    player_id = next(_player_ids)
    _clients[player_id] = ws
    sim.add_player(player_id, username)
    logger.info(f"player {player_id} ({username}) connected")
    await ws.send_text(json.dumps({"topic": "welcome", "data": {"playerId": player_id}}))

    async def forward_task():
        async for msg in BUS.subscribe("tick:all"):
            try:
                await ws.send_text(json.dumps(msg))
            except Exception:
                break

    fwd = asyncio.create_task(forward_task())

    try:
        while True:
            raw = await ws.receive_text()
            try:
                parsed = ClientMessage.model_validate_json(raw)
            except ValidationError:
                continue
            err = await sim.handle_command(player_id, parsed.topic, parsed.data)
            if err:
                await ws.send_text(json.dumps({"topic": "error", "error": err}))
    except WebSocketDisconnect:
        pass
    finally:
        fwd.cancel()
        _clients.pop(player_id, None)
        sim.remove_player(player_id)
        logger.info(f"player {player_id} ({username}) disconnected")


@app.get("/api/health")
async def api_health() -> JSONResponse:
    return JSONResponse({
        "ok": True,
        "tick": sim.tick_count,
        "players": len(_clients),
        "ships": len(sim.world.ships()),
        "projectiles": len(sim.world.projectiles()),
    })
