from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, validator

CONFIG_ENV_VAR = "HOLDER_LEADERBOARD_CONFIG"
ROOT = Path(__file__).resolve().parents[1]

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


class TokenConfig(BaseModel):
    name: str = "Froge"
    contract_address: str = "0xcab254f1a32343f11ab41fbde90ecb410cde348a"
    deployer_address: str = "0x34919f7dd781e5cdbda923392dbc627add997a8f"
    zero_address: str = "0x0000000000000000000000000000000000000000"

    @validator("contract_address", "deployer_address", "zero_address")
    def validate_address(cls, value: str) -> str:
        if not _ADDRESS_RE.match(value):
            raise ValueError(f"Invalid address: {value}")
        return value.lower()


class DumpPenalties(BaseModel):
    major: float = 0.6
    significant: float = 0.8
    moderate: float = 0.9
    major_below: float = 0.10
    significant_below: float = 0.25
    moderate_below: float = 0.50

    @validator("major", "significant", "moderate")
    def validate_multiplier(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("dump penalty multipliers must be positive")
        return value

    @validator("moderate_below", always=True)
    def validate_thresholds(cls, value: float, values: Dict[str, Any]) -> float:
        major = values.get("major_below")
        significant = values.get("significant_below")
        if major is None or significant is None:
            return value
        if not 0 < major < significant < value <= 1:
            raise ValueError("dump thresholds must increase strictly within (0, 1]")
        return value


class ScoringConfig(BaseModel):
    balance_weight: float = 40
    time_weighted_weight: float = 40
    sold_penalty_weight: float = 20
    paper_hands_penalty: float = 0.5
    diamond_hands_bonus: float = 1.1
    og_bonus: float = 1.15
    dump_penalties: DumpPenalties = DumpPenalties()

    @validator("balance_weight", "time_weighted_weight", "sold_penalty_weight")
    def validate_weight(cls, value: float) -> float:
        if value < 0:
            raise ValueError("scoring weights must be non-negative")
        return value

    @validator("paper_hands_penalty", "diamond_hands_bonus", "og_bonus")
    def validate_multiplier(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("scoring multipliers must be positive")
        return value


class SourceConfig(BaseModel):
    kind: Literal["sqlite", "indexer"] = "sqlite"
    db_path: str = "data/holder_leaderboard.sqlite"
    indexer_url: str = "http://localhost:42069"
    request_timeout_s: int = 15
    page_size: int = 1000
    retry_max: int = 3


class RunConfig(BaseModel):
    now_override: Optional[str] = None
    out_dir: str = "out"
    top_n: int = 20


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000


class AppConfig(BaseModel):
    token: TokenConfig = TokenConfig()
    scoring: ScoringConfig = ScoringConfig()
    source: SourceConfig = SourceConfig()
    run: RunConfig = RunConfig()
    server: ServerConfig = ServerConfig()


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return ROOT / "config.yaml"


def load_config(path: str | Path | None = None) -> AppConfig:
    data: Dict[str, Any] = {}
    config_path = Path(path) if path is not None else default_config_path()
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
            if isinstance(loaded, dict):
                data = loaded
    return AppConfig(**data)


def resolve_path(value: str) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    return ROOT / path
