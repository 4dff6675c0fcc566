# evosim/resource.py
from dataclasses import dataclass
from enum import Enum

import config


class ResourceType(Enum):
    FOOD = "food"
    POISON = "poison" # reserved, never spawned


@dataclass
class Resource:
    id: str
    x: float
    y: float
    value: float = config.RESOURCE_VALUE
    type: ResourceType = ResourceType.FOOD

    @property
    def position(self):
        return (self.x, self.y)

    def copy(self):
        return Resource(self.id, self.x, self.y, self.value, self.type)
