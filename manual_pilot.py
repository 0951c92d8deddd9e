#!/usr/bin/env python3
"""
Fly a ship against a running server: thrust, turn, fire, and print what comes back.
"""

import asyncio
import json
import sys

import websockets


async def manual_pilot(username: str = "pilot"):
    """Connect, send a short scripted burst of inputs, dump a few snapshots."""

    uri = f"ws://localhost:3000/ws/{username}"
    try:
        async with websockets.connect(uri) as websocket:
            welcome = json.loads(await websocket.recv())
            player_id = welcome.get("data", {}).get("playerId")
            print(f"Connected as player {player_id}")

            script = ["up"] * 10 + ["right"] * 12 + ["fire"] + ["up"] * 5 + ["fire"]
            for cmd in script:
                await websocket.send(json.dumps({"topic": "input", "data": {"input": cmd}}))
                await asyncio.sleep(1 / 60)

            for _ in range(5):
                try:
                    msg = json.loads(await asyncio.wait_for(websocket.recv(), timeout=1.0))
                except asyncio.TimeoutError:
                    continue
                if msg.get("topic") != "snapshot":
                    print(msg)
                    continue
                data = msg["data"]
                mine = [s for s in data["ships"] if s["player_id"] == player_id]
                print(f"tick {data['tick']}: {len(data['ships'])} ships, {len(data['projectiles'])} projectiles")
                for ship in mine:
                    pos = ship["position"]
                    print(f"  me: ({pos['x']:.1f}, {pos['y']:.1f}) angle={ship['angle']:.1f} health={ship['health']}")
    except (OSError, websockets.WebSocketException) as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    asyncio.run(manual_pilot(*sys.argv[1:2]))
