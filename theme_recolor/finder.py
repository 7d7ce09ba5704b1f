"""
Nearest available color: shell search around a target RGB for a color not yet
reserved in the registry.

Radius r = 1, 2, ... 255. At each radius the shell is target + r * direction for each
corner direction (±1, ±1, ±1), clamped per channel to 0..255. Only these 8 diagonals
are searched (no axis or edge neighbours), so a shell holds at most 8 points.
The first radius that yields any unreserved candidate wins; within it the smallest
squared Euclidean distance wins, ties going to the earlier direction in
SHELL_DIRECTIONS order. Later radii are never consulted, even if one could hold a
closer point. Clamping at the cube boundary can produce the same point twice; that
is harmless since every candidate is checked against the registry.
"""
import itertools
import logging

import numpy as np

from .codec import RGB, encode6
from .errors import ColorSpaceExhausted
from .registry import UsedColorRegistry

logger = logging.getLogger(__name__)

MAX_RADIUS = 255

# (1, 1, 1), (1, 1, -1), (1, -1, 1), ... (-1, -1, -1): enumeration order is the tie-break
SHELL_DIRECTIONS = np.array(list(itertools.product((1, -1), repeat=3)), dtype=np.int64)


def squared_distance(a: RGB, b: RGB) -> int:
    return sum((x - y) * (x - y) for x, y in zip(a, b))


def shell(target: RGB, radius: int) -> tuple[np.ndarray, np.ndarray]:
    """Clamped candidates at one radius and their squared distances to target."""
    origin = np.array(target, dtype=np.int64)
    candidates = np.clip(origin + radius * SHELL_DIRECTIONS, 0, 255)
    distances = ((candidates - origin) ** 2).sum(axis=1)
    return candidates, distances


def find_nearest_available(
    target: RGB,
    registry: UsedColorRegistry,
    *,
    max_radius: int = MAX_RADIUS,
) -> RGB:
    """
    Return target itself if unreserved, else the nearest free color on the first
    non-empty shell. Does not reserve the result. Raises ColorSpaceExhausted.
    """
    target = tuple(int(c) for c in target)
    if not registry.contains(target):
        return target
    for radius in range(1, max_radius + 1):
        candidates, distances = shell(target, radius)
        best: RGB | None = None
        best_distance = -1
        for point, distance in zip(candidates.tolist(), distances.tolist()):
            rgb = (point[0], point[1], point[2])
            if registry.contains(rgb):
                continue
            if best is None or distance < best_distance:
                best, best_distance = rgb, distance
        if best is not None:
            logger.debug("Finder: %s -> %s (radius %d, d2=%d)", encode6(target), encode6(best), radius, best_distance)
            return best
    raise ColorSpaceExhausted(
        f"No unused color found within radius {max_radius} of {encode6(target)}",
        target=target,
    )
