from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from holder_leaderboard.config import AppConfig, load_config
from holder_leaderboard.pipeline.leaderboard import compute_leaderboard, describe_scoring
from holder_leaderboard.pipeline.sources import RecordSource, build_source, fetch_record_sets
from holder_leaderboard.utils.time import now_seconds

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    source: Optional[RecordSource] = None,
    clock: Callable[[], int] = now_seconds,
) -> FastAPI:
    cfg = config or load_config()
    records = source or build_source(cfg)
    app = FastAPI(title=f"{cfg.token.name} Leaderboard API")

    @app.get("/leaderboard")
    def leaderboard() -> Any:
        try:
            transfers, swaps = fetch_record_sets(records)
            rows: List[Dict[str, Any]] = compute_leaderboard(transfers, swaps, cfg, clock())
        except Exception:  # noqa: BLE001
            logger.exception("Error fetching leaderboard")
            return JSONResponse({"error": "Failed to fetch leaderboard"}, status_code=500)
        return rows

    @app.get("/")
    def index() -> Dict[str, Any]:
        return describe_scoring(cfg)

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    config = load_config()
    uvicorn.run(create_app(config), host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
