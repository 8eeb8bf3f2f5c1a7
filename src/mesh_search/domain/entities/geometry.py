import math
from dataclasses import dataclass


# Core geometry types used by the graph and the search
@dataclass(frozen=True)
class Point3:
    x: float  # model units, same frame as the mesh file
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


Pt = Point3 | tuple[float, float, float]


def to_point(p: Pt) -> Point3:
    return p if isinstance(p, Point3) else Point3(float(p[0]), float(p[1]), float(p[2]))


def distance(a: Point3, b: Point3) -> float:
    return math.hypot(b.x - a.x, b.y - a.y, b.z - a.z)
