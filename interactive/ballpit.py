import math
import random
from typing import List, Set, Tuple

import pygame

from regionquadtree import Bound, QuadTree

# ---------------------------- Ball object ---------------------------- #


class Ball:
    __slots__ = ("color", "mass", "r", "restitution", "vx", "vy", "x", "y")

    def __init__(
        self,
        x: float,
        y: float,
        r: int = 10,
        color: Tuple[int, int, int] = (255, 0, 0),
        vx: float = 0.0,
        vy: float = 0.0,
        mass: float = 1.0,
        restitution: float = 0.7,
    ):
        self.x = float(x)
        self.y = float(y)
        self.vx = float(vx)
        self.vy = float(vy)
        self.r = int(r)
        self.color = color
        self.mass = float(mass)
        self.restitution = float(restitution)

    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def integrate(self, ax: float, ay: float, dt: float):
        self.vx += ax * dt
        self.vy += ay * dt
        self.x += self.vx * dt
        self.y += self.vy * dt

    def clamp_to_bounds(self, w: int, h: int):
        # Floor and ceiling
        if self.y + self.r > h:
            self.y = h - self.r
            self.vy = -self.vy * self.restitution
        if self.y - self.r < 0:
            self.y = self.r
            self.vy = -self.vy * self.restitution
        # Walls
        if self.x - self.r < 0:
            self.x = self.r
            self.vx = -self.vx * self.restitution
        if self.x + self.r > w:
            self.x = w - self.r
            self.vx = -self.vx * self.restitution

    def draw(self, screen):
        pygame.draw.circle(screen, self.color, (int(self.x), int(self.y)), self.r)


# ------------------------- Collision utilities ------------------------- #


def resolve_ball_ball(a: Ball, b: Ball):
    """Elastic collision with positional correction and restitution."""
    dx = b.x - a.x
    dy = b.y - a.y
    dist_sq = dx * dx + dy * dy
    rsum = a.r + b.r
    if dist_sq <= 0 or dist_sq > rsum * rsum:
        return  # no collision

    dist = math.sqrt(dist_sq)
    nx = dx / dist
    ny = dy / dist

    # Split correction by mass proportion (heavier moves less)
    overlap = rsum - dist
    inv_ma = 0.0 if a.mass == 0 else 1.0 / a.mass
    inv_mb = 0.0 if b.mass == 0 else 1.0 / b.mass
    inv_sum = inv_ma + inv_mb if (inv_ma + inv_mb) != 0 else 1.0

    a.x -= nx * overlap * inv_ma / inv_sum
    a.y -= ny * overlap * inv_ma / inv_sum
    b.x += nx * overlap * inv_mb / inv_sum
    b.y += ny * overlap * inv_mb / inv_sum

    vel_along_normal = (b.vx - a.vx) * nx + (b.vy - a.vy) * ny
    if vel_along_normal > 0:
        return  # already separating

    e = min(a.restitution, b.restitution)
    j = -(1 + e) * vel_along_normal / inv_sum

    a.vx -= j * nx * inv_ma
    a.vy -= j * ny * inv_ma
    b.vx += j * nx * inv_mb
    b.vy += j * ny * inv_mb


# ------------------------------ BallPit ------------------------------ #


class BallPit:
    def __init__(self, screen, width, height):
        self.screen = screen
        self.width = width
        self.height = height
        self.gravity = 980.0  # px/s^2
        self.qt: QuadTree[Ball] = QuadTree(
            Bound((0.0, 0.0), width, height), capacity=16, max_depth=8
        )
        self.balls: List[Ball] = []
        self.show_nodes = True

    def add_ball(self, x, y, radius=10, color=(255, 0, 0)):
        vx = (random.random() - 0.5) * 300.0  # px/s
        ball = Ball(x, y, r=radius, color=color, vx=vx, vy=0.0)
        self.balls.append(ball)
        self.qt.insert(ball)

    def rebuild_quadtree(self):
        # Positions move every frame, so clear and bulk insert
        self.qt.clear()
        self.qt.insert_all(self.balls)

    def update(self, dt: float):
        # 1) Integrate motion
        for b in self.balls:
            b.integrate(0.0, self.gravity, dt)
            b.clamp_to_bounds(self.width, self.height)

        # 2) Rebuild spatial index for broadphase queries
        self.rebuild_quadtree()

        # 3) Narrowphase collisions via quadtree neighborhood queries
        processed: Set[Tuple[int, int]] = set()
        for b in self.balls:
            # A box of twice the radius catches every overlap
            box = Bound((b.x - 2 * b.r, b.y - 2 * b.r), 4 * b.r, 4 * b.r)
            for other in self.qt.query(box):
                if other is b:
                    continue
                a_id = id(b)
                o_id = id(other)
                key = (a_id, o_id) if a_id < o_id else (o_id, a_id)
                if key in processed:
                    continue
                processed.add(key)
                resolve_ball_ball(b, other)

        # 4) Update quadtree positions after collision resolution
        self.rebuild_quadtree()

    def draw(self):
        if self.show_nodes:
            for x0, y0, x1, y1 in self.qt.get_all_node_boundaries():
                rect = pygame.Rect(int(x0), int(y0), int(x1 - x0), int(y1 - y0))
                pygame.draw.rect(self.screen, (200, 200, 200), rect, 1)
        for ball in self.balls:
            ball.draw(self.screen)


# ------------------------------- main ------------------------------- #


def main():
    pygame.init()
    width, height = 800, 600
    screen = pygame.display.set_mode((width, height))
    clock = pygame.time.Clock()
    ball_pit = BallPit(screen, width, height)

    running = True
    while running:
        dt = clock.tick(60) / 1000.0  # seconds
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_q:
                ball_pit.show_nodes = not ball_pit.show_nodes
            elif event.type == pygame.MOUSEBUTTONDOWN:
                x, y = event.pos
                r = random.randint(8, 18)
                color = (
                    random.randint(80, 255),
                    random.randint(80, 255),
                    random.randint(80, 255),
                )
                ball_pit.add_ball(x, y, radius=r, color=color)

        ball_pit.update(dt)

        screen.fill((255, 255, 255))
        ball_pit.draw()
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
