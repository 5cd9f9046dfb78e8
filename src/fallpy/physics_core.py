"""
physics_core.py: The deterministic per-frame kinematics and collision logic.
"""

from typing import List, NamedTuple, Optional

from .config import GameConfig
from .data_models import PlayerBody, Obstacle, Pickup


class Rect(NamedTuple):
    x: float
    y: float
    w: float
    h: float


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def circle_rect_collision(cx: float, cy: float, r: float, rect: Rect) -> bool:
    """Closest point on the rect to the centre; touching is not a hit."""
    closest_x = clamp(cx, rect.x, rect.x + rect.w)
    closest_y = clamp(cy, rect.y, rect.y + rect.h)
    dx = cx - closest_x
    dy = cy - closest_y
    return dx * dx + dy * dy < r * r


def circle_circle_collision(ax: float, ay: float, ar: float,
                            bx: float, by: float, br: float) -> bool:
    dx = ax - bx
    dy = ay - by
    reach = ar + br
    return dx * dx + dy * dy < reach * reach


def obstacle_rects(obstacle: Obstacle, height: float) -> tuple:
    """The (top, bottom) rectangles of a pipe pair."""
    bottom_y = obstacle.gap_y + obstacle.gap_height
    top = Rect(obstacle.x, 0.0, obstacle.width, obstacle.gap_y)
    bottom = Rect(obstacle.x, bottom_y, obstacle.width, height - bottom_y)
    return top, bottom


class PhysicsCore:
    """
    Integrator and collision detector for one playfield.
    Holds configuration only; all mutable state lives in the objects passed in.
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self.gravity = config.gravity
        self.flap_impulse = config.flap_impulse
        self.height = config.height

    def apply_gravity_and_movement(self, player: PlayerBody):
        """Advances the body one frame, then applies the soft ceiling."""
        player.velocity += self.gravity
        player.y += player.velocity

        if player.y - player.radius < 0:
            player.y = player.radius
            player.velocity = 0.0

    def flap(self) -> float:
        """Returns the velocity after a flap; callers set it, never add it."""
        return self.flap_impulse

    def hits_floor(self, player: PlayerBody) -> bool:
        return player.y + player.radius > self.height

    def advance_entities(self, obstacles: List[Obstacle], pickups: List[Pickup],
                         speed: float) -> tuple:
        """
        Scrolls every obstacle and pickup left by the shared speed and drops
        the ones that left the screen. Surviving order is preserved.
        """
        for obstacle in obstacles:
            obstacle.x -= speed
        for pickup in pickups:
            pickup.x -= speed

        edge = self.config.offscreen_epsilon
        obstacles = [o for o in obstacles if o.x + o.width > edge]
        pickups = [p for p in pickups if not p.collected and p.x + p.radius > edge]
        return obstacles, pickups

    def check_collision(self, player: PlayerBody, obstacles: List[Obstacle]) -> Optional[Obstacle]:
        """Returns the first obstacle the body overlaps, or None."""
        for obstacle in obstacles:
            for rect in obstacle_rects(obstacle, self.height):
                if circle_rect_collision(player.x, player.y, player.radius, rect):
                    return obstacle
        return None

    def collect_pickups(self, player: PlayerBody, pickups: List[Pickup]) -> List[Pickup]:
        """Marks every overlapping pickup collected, in list order, and returns them."""
        hits = []
        for pickup in pickups:
            if pickup.collected:
                continue
            if circle_circle_collision(player.x, player.y, player.radius,
                                       pickup.x, pickup.y, pickup.radius):
                pickup.collected = True
                hits.append(pickup)
        return hits
