from dataclasses import dataclass, field

from mesh_search.domain.entities.geometry import Point3


@dataclass(eq=False)
class Vertex:
    index: int
    position: Point3
    neighbors: list[int] = field(default_factory=list)  # directed, duplicates kept

    # search-scoped, owned by the engine
    is_closed: bool = False
    previous: int | None = None

    def reset(self) -> None:
        self.is_closed = False
        self.previous = None
