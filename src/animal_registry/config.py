from __future__ import annotations
import argparse, os
from dataclasses import dataclass, field
from typing import List, Optional

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Animal Registry API")
    p.add_argument("--db-path", default=os.getenv("ANIMALS_DB_PATH", "animals.db"))
    p.add_argument("--host", default=os.getenv("API_HOST", "127.0.0.1"))
    p.add_argument("--port", type=int, default=int(os.getenv("API_PORT", "5000")))
    p.add_argument("--prefix", default=os.getenv("API_PREFIX", "/api/v2"))
    p.add_argument("--cors-origins", default=os.getenv("CORS_ORIGINS", "*"),
                   help="comma-separated list of allowed origins")
    p.add_argument("--seed-file", default=os.getenv("SEED_FILE"),
                   help="JSON list of animals loaded when the table is empty")
    p.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    return p

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)

@dataclass(frozen=True)
class Settings:
    db_path: str = "animals.db"
    host: str = "127.0.0.1"
    port: int = 5000
    prefix: str = "/api/v2"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    seed_file: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Settings":
        origins = [o.strip() for o in args.cors_origins.split(",") if o.strip()]
        return cls(
            db_path=args.db_path,
            host=args.host,
            port=args.port,
            prefix=args.prefix.rstrip("/"),
            cors_origins=origins,
            seed_file=args.seed_file,
            log_level=args.log_level.upper(),
        )
