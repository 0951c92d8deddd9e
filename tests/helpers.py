import os
import sys

# Add project space-skirmish to import path (same pattern in every test module)
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'space-skirmish')))

from skirmish.models import Projectile, Ship, Vec2
from skirmish.sim.ecs import World


def make_world(width: float = 100.0, height: float = 100.0) -> World:
    return World(width, height)


def add_ship(world: World, player_id: int, x: float = 0.0, y: float = 0.0, vx: float = 0.0, vy: float = 0.0, **kw) -> Ship:
    ship = Ship(player_id=player_id, username=f"p{player_id}", position=Vec2(x=x, y=y), velocity=Vec2(x=vx, y=vy), **kw)
    world.add_object(ship)
    return ship


def add_projectile(world: World, player_id: int, owner_id: int = 0, x: float = 0.0, y: float = 0.0, damage: float = 10.0) -> Projectile:
    proj = Projectile(player_id=player_id, owner_id=owner_id, position=Vec2(x=x, y=y), damage=damage)
    world.add_object(proj)
    return proj
