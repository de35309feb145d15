#!/usr/bin/env python3
"""
Container entry point: release, then exec gunicorn on app.wsgi:app.

Env: PORT (default 8080), WEB_CONCURRENCY (gunicorn workers, default 2).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

DEFAULT_PORT = 8080
DEFAULT_WORKERS = 2


def resolve_port(raw: str | None) -> int:
    """PORT as an int; blank means the default. Raises ValueError outside 1-65535."""
    raw = (raw or "").strip()
    if not raw:
        return DEFAULT_PORT
    port = int(raw)
    if not 1 <= port <= 65535:
        raise ValueError(f"PORT out of range: {port}")
    return port


def gunicorn_argv(port: int, workers: int = DEFAULT_WORKERS) -> list[str]:
    return [
        "gunicorn",
        "app.wsgi:app",
        "--bind", f"0.0.0.0:{port}",
        "--workers", str(workers),
        "--preload",
        "--access-logfile", "-",
        "--error-logfile", "-",
    ]


def main() -> None:
    try:
        port = resolve_port(os.environ.get("PORT"))
        workers = int((os.environ.get("WEB_CONCURRENCY") or str(DEFAULT_WORKERS)).strip())
    except ValueError as e:
        sys.exit(f"start: {e}")

    from scripts.release import run_release

    run_release()
    argv = gunicorn_argv(port, workers)
    print(f"[start] exec {' '.join(argv)}", flush=True)
    os.execvp(argv[0], argv)


if __name__ == "__main__":
    main()
