# runtime/registries.py
from collections.abc import Callable

from mesh_search.search.heuristics import Heuristic, euclidean, zero

HeuristicFactory = Callable[[], Heuristic]

_heuristic_registry: dict[str, HeuristicFactory] = {}


# ------------------- Heuristic registries ---------------------------


def register_heuristic(kind: str):
    def deco(fn: HeuristicFactory):
        _heuristic_registry[kind] = fn
        return fn

    return deco


def make_heuristic(kind: str) -> Heuristic:
    try:
        return _heuristic_registry[kind]()
    except KeyError:
        raise ValueError(f"Unknown heuristic kind {kind!r}") from None


@register_heuristic("euclidean")
def _make_euclidean():
    return euclidean


@register_heuristic("zero")
def _make_zero():
    return zero
