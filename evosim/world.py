# evosim/world.py
import itertools
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Tuple

import config
from evosim.errors import SimulationError
from evosim.mathutils import chance, clamp, distance, uniform
from evosim.resource import Resource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnvironmentSnapshot:
    """Read-only copy of the world handed to renderers and statistics."""
    resources: Tuple[Resource, ...]
    width: float
    height: float
    parameters: Dict[str, float] = field(default_factory=dict)

    @property
    def boundaries(self):
        return {"width": self.width, "height": self.height}


class World:
    def __init__(self, width, height, cell_size=config.WORLD_GRID_CELL_SIZE,
                 regeneration_rate=config.RESOURCE_REGENERATION_RATE,
                 max_resources=config.MAX_RESOURCES):
        if width <= 0 or height <= 0:
            raise SimulationError(f"World needs a positive area, got {width}x{height}")
        self.width = width
        self.height = height
        self.resources = []
        self.regeneration_rate = max(0.0, regeneration_rate)
        self.max_resources = max(0, int(max_resources))
        self.pressure = 0.0
        self._resource_ids = itertools.count()

        # Spatial grid over resources, kept in sync on every add/remove
        self.cell_size = cell_size
        self.grid = defaultdict(list)

    # ---------- resources ----------
    def _get_cell_coords(self, x, y):
        """Converts world coordinates to grid cell coordinates."""
        return int(x // self.cell_size), int(y // self.cell_size)

    def add_resource(self, resource):
        """Adds a resource unless the world is at capacity."""
        if len(self.resources) >= self.max_resources:
            return False
        self.resources.append(resource)
        self.grid[self._get_cell_coords(resource.x, resource.y)].append(resource)
        return True

    def remove_resource(self, resource):
        self.resources.remove(resource)
        cell_coords = self._get_cell_coords(resource.x, resource.y)
        cell = self.grid[cell_coords]
        cell.remove(resource)
        if not cell:
            del self.grid[cell_coords]

    def clear_resources(self):
        self.resources = []
        self.grid.clear()

    def spawn_resource(self, rng, value=config.RESOURCE_VALUE):
        """Creates a food resource at a uniformly random position."""
        resource = Resource(
            id=f"resource-{next(self._resource_ids)}",
            x=uniform(rng, 0, self.width),
            y=uniform(rng, 0, self.height),
            value=value,
        )
        return resource if self.add_resource(resource) else None

    def fill(self, count, rng):
        """Spawns up to `count` resources, stopping at capacity."""
        spawned = 0
        for _ in range(count):
            if self.spawn_resource(rng) is None:
                break
            spawned += 1
        return spawned

    @property
    def effective_regeneration_rate(self):
        return self.regeneration_rate * (1.0 - self.pressure)

    def set_pressure(self, pressure):
        self.pressure = clamp(pressure, 0.0, 1.0)
        logger.info("Environmental pressure set to %.2f (regeneration %.3f/s)",
                    self.pressure, self.effective_regeneration_rate)

    def regenerate(self, delta_time, rng):
        """
        One Bernoulli trial per tick while below capacity; at most one new
        resource per call however large the deficit is.
        """
        if len(self.resources) >= self.max_resources:
            return None
        if not chance(rng, self.effective_regeneration_rate * delta_time):
            return None
        return self.spawn_resource(rng)

    @property
    def resource_density(self):
        if self.max_resources <= 0:
            return 0.0
        return len(self.resources) / self.max_resources

    # ---------- spatial queries ----------
    def resources_near(self, x, y, radius):
        """All resources within `radius` of (x, y), in grid iteration order."""
        found = []
        center_cell = self._get_cell_coords(x, y)
        search_radius_in_cells = int(radius // self.cell_size) + 1

        for dx in range(-search_radius_in_cells, search_radius_in_cells + 1):
            for dy in range(-search_radius_in_cells, search_radius_in_cells + 1):
                cell = self.grid.get((center_cell[0] + dx, center_cell[1] + dy))
                if not cell:
                    continue
                for resource in cell:
                    if distance((x, y), resource.position) <= radius:
                        found.append(resource)
        return found

    def nearest_resource(self, x, y, radius):
        """Closest resource within `radius`; ties go to whichever was found first."""
        nearest, min_dist = None, float("inf")
        for resource in self.resources_near(x, y, radius):
            dist = distance((x, y), resource.position)
            if dist < min_dist:
                min_dist, nearest = dist, resource
        return nearest

    # ---------- boundaries ----------
    def handle_boundaries(self, state, radius):
        """
        Clamps the position inside the world, inset by `radius`, and reflects
        the velocity component that pointed out of bounds.
        """
        if self.width < 2 * radius:
            state.x = self.width / 2
        elif state.x < radius:
            state.x = radius
            state.vx = abs(state.vx)
        elif state.x > self.width - radius:
            state.x = self.width - radius
            state.vx = -abs(state.vx)

        if self.height < 2 * radius:
            state.y = self.height / 2
        elif state.y < radius:
            state.y = radius
            state.vy = abs(state.vy)
        elif state.y > self.height - radius:
            state.y = self.height - radius
            state.vy = -abs(state.vy)

    def snapshot(self):
        return EnvironmentSnapshot(
            resources=tuple(r.copy() for r in self.resources),
            width=self.width,
            height=self.height,
            parameters={
                "resource_regeneration_rate": self.regeneration_rate,
                "effective_regeneration_rate": self.effective_regeneration_rate,
                "max_resources": self.max_resources,
                "environmental_pressure": self.pressure,
            },
        )
