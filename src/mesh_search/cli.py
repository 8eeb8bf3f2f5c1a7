# mesh_search/cli.py
import argparse
import sys

from pydantic import ValidationError

from mesh_search.app.build import build, replay
from mesh_search.config.models import ScenarioModel
from mesh_search.domain.errors import MeshSearchError
from mesh_search.io.search_logging import default_json_logger


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mesh-search",
        description="Replay start/goal picks over a mesh and report the searches.",
    )
    p.add_argument("config", help="scenario JSON file")
    p.add_argument("--mode", choices=["tree", "dijkstra", "astar"], help="override search mode")
    p.add_argument("--batch-size", type=int, help="override steps per tick")
    p.add_argument("--trace", action="store_true", help="write trace events as JSON lines to stdout")
    p.add_argument("--max-ticks", type=int, default=None)
    return p


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    log = default_json_logger()

    try:
        with open(args.config, encoding="utf-8") as f:
            model = ScenarioModel.model_validate_json(f.read())
        overrides = {}
        if args.mode:
            overrides["mode"] = args.mode
        if args.batch_size is not None:
            overrides["batch_size"] = args.batch_size
        if overrides:
            search = model.search.model_validate({**model.search.model_dump(), **overrides})
            model = model.model_copy(update={"search": search})
        log.setLevel(model.log.level)

        app = build(model, trace="jsonl" if args.trace else None)
        ticks = replay(app, max_ticks=args.max_ticks)
    except (OSError, ValidationError, MeshSearchError) as e:
        log.error("mesh_search_failed", extra={"extra": {"error": str(e), "type": type(e).__name__}})
        return 2

    s = app.controller.session
    log.info(
        "summary",
        extra={
            "extra": {
                "run_id": model.run_id,
                "vertices": len(app.graph),
                "edges": app.graph.edge_count,
                "ticks": ticks,
                "outcome": s.outcome.value,
                "path_len": len(s.path),
                "cost": s.goal_cost,
            }
        },
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
