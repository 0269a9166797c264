"""
Scene objects that the arm can pick up, and the spawner that creates them.

Objects rest on the floor (y = 0) at a shape-specific height: boxes and
cylinders sit at half their size, spheres at their radius.

Classes:
    ObjectShape: Enumeration of supported object shapes.
    SceneObject: One pickable object in the scene.
    ObjectSpawner: Creates objects at random spots in the pick area.

Functions:
    resting_height: Floor-contact height for a shape.
    default_objects: The three boxes present at start-up.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence

import numpy as np

from robosim.utils.constants import (
    BOX_SIZE,
    OBJECT_COLORS,
    PICK_AREA_CENTER,
    SPAWN_RADIUS,
)
from robosim.utils.helpers import as_vec3, seed_rngs

_ID_ALPHABET = np.array(list(string.digits + string.ascii_lowercase))
_ID_LENGTH = 9


class ObjectShape(str, Enum):
    """Shape tag of a scene object."""

    BOX = "box"
    SPHERE = "sphere"
    CYLINDER = "cylinder"

    @classmethod
    def parse(cls, value: "ObjectShape | str") -> "ObjectShape":
        """Convert a shape name to an ``ObjectShape``.

        Raises:
            ValueError: If *value* is not a known shape.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise ValueError(
                f"Unknown shape '{value}'. Choose from {[s.value for s in cls]}"
            ) from exc


def resting_height(shape: ObjectShape | str) -> float:
    """Return the centre height of *shape* when it sits on the floor."""
    if ObjectShape.parse(shape) is ObjectShape.SPHERE:
        return BOX_SIZE / 1.5
    return BOX_SIZE / 2


@dataclass
class SceneObject:
    """A pickable object.

    Attributes:
        id: Unique identifier.
        position: Centre position ``[x, y, z]``.
        color: Hex colour string.
        shape: Shape tag.
    """

    id: str
    position: np.ndarray
    color: str = OBJECT_COLORS[0]
    shape: ObjectShape = ObjectShape.BOX

    def __post_init__(self) -> None:
        self.position = as_vec3(self.position)
        self.shape = ObjectShape.parse(self.shape)

    @property
    def resting_height(self) -> float:
        return resting_height(self.shape)

    def copy(self) -> "SceneObject":
        return SceneObject(self.id, self.position.copy(), self.color, self.shape)


def find_object(objects: Iterable[SceneObject], object_id: str | None) -> Optional[SceneObject]:
    """Return the object with *object_id*, or *None* if it is not present."""
    if object_id is None:
        return None
    return next((obj for obj in objects if obj.id == object_id), None)


def default_objects() -> List[SceneObject]:
    """Return the three boxes lined up in the pick area at start-up."""
    y = resting_height(ObjectShape.BOX)
    return [
        SceneObject("1", np.array([4.0, y, 0.0]), OBJECT_COLORS[0], ObjectShape.BOX),
        SceneObject("2", np.array([4.0, y, 1.5]), OBJECT_COLORS[1], ObjectShape.BOX),
        SceneObject("3", np.array([4.0, y, -1.5]), OBJECT_COLORS[2], ObjectShape.BOX),
    ]


@dataclass
class ObjectSpawner:
    """Creates new objects at seeded random positions in the pick area.

    Positions are drawn uniformly from a disc of radius ``radius`` around the
    pick-area centre, at the shape's resting height.

    Attributes:
        seed: RNG seed; *None* draws from OS entropy.
        radius: Radius of the spawn disc.
    """

    seed: Optional[int] = None
    radius: float = SPAWN_RADIUS
    _rng: np.random.Generator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rng = seed_rngs(self.seed)

    def _random_id(self, taken: set) -> str:
        while True:
            new_id = "".join(self._rng.choice(_ID_ALPHABET, size=_ID_LENGTH))
            if new_id not in taken:
                return new_id

    def _random_position(self, shape: ObjectShape) -> np.ndarray:
        angle = self._rng.uniform(0.0, 2.0 * np.pi)
        r = self.radius * np.sqrt(self._rng.uniform(0.0, 1.0))
        cx, _, cz = PICK_AREA_CENTER
        return np.array([cx + r * np.cos(angle), resting_height(shape), cz + r * np.sin(angle)])

    def spawn(
        self,
        shape: ObjectShape | str = ObjectShape.BOX,
        color: str = OBJECT_COLORS[0],
        position: Optional[Sequence[float]] = None,
        existing: Iterable[SceneObject] = (),
    ) -> SceneObject:
        """Create a new object.

        Args:
            shape: Shape tag or name.
            color: Hex colour string.
            position: Explicit position; random in the pick area when *None*.
            existing: Objects already in the scene, used to keep ids unique.

        Returns:
            The new ``SceneObject`` (not yet added to any collection).
        """
        shape = ObjectShape.parse(shape)
        pos = self._random_position(shape) if position is None else as_vec3(position)
        new_id = self._random_id({obj.id for obj in existing})
        return SceneObject(new_id, pos, color, shape)
