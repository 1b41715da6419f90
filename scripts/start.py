#!/usr/bin/env python3
"""
Production startup script.

1. Validates the listen port
2. Creates the submissions file if missing
3. Starts gunicorn (replaces this process via os.execvp)

Usage:
    python scripts/start.py            # public site + /admin on $PORT
    python scripts/start.py --admin    # admin viewer only, on $ADMIN_PORT
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _validate_port(name: str, default: str) -> str:
    port = os.environ.get(name, "").strip()
    if not port:
        print(f"WARNING: {name} not set, using default {default}", flush=True)
        port = default

    try:
        port_int = int(port)
        if port_int < 1 or port_int > 65535:
            raise ValueError("Port out of range")
    except ValueError:
        print(f"ERROR: Invalid {name} value '{port}'. Must be integer 1-65535.", flush=True)
        sys.exit(1)

    print(f"{name}={port} validated", flush=True)
    return port


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Start the consultation intake server")
    parser.add_argument("--admin", action="store_true", help="serve only the admin viewer on ADMIN_PORT")
    args = parser.parse_args(argv)

    if args.admin:
        port = _validate_port("ADMIN_PORT", "3001")
        target = "app.admin_wsgi:app"
    else:
        port = _validate_port("PORT", "3000")
        target = "app.wsgi:app"

    print("=== Initializing submissions file ===", flush=True)
    from scripts.init_data import init_data
    try:
        init_data()
    except Exception as e:
        print(f"Init failed: {e}", flush=True)
        sys.exit(1)

    print(f"=== Starting gunicorn ({target}) on 0.0.0.0:{port} ===", flush=True)

    # exec so gunicorn is PID 1 and receives signals directly
    os.execvp(
        "gunicorn",
        [
            "gunicorn",
            target,
            "--bind", f"0.0.0.0:{port}",
            "--workers", "2",
            "--timeout", "60",
            "--access-logfile", "-",
            "--error-logfile", "-",
        ],
    )


if __name__ == "__main__":
    main()
