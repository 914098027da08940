"""StoryMap.ai: dev launcher. Starts the API (and optionally the map client) in watch mode."""

import argparse
import os
import signal
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
BACKEND_PORT = os.getenv("BACKEND_PORT", "5000")
FRONTEND_PORT = os.getenv("FRONTEND_PORT", "3000")


def main():
    parser = argparse.ArgumentParser(description="StoryMap.ai dev launcher")
    parser.add_argument("--with-client", action="store_true",
                        help="Also start the map client dev server from ./client")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "info"),
                        help="Log level for the API (default: info)")
    args = parser.parse_args()

    env = os.environ.copy()
    env["LOG_LEVEL"] = args.log_level.upper()

    procs: list[subprocess.Popen] = []

    def shutdown(*_):
        print("\nShutting down...")
        for p in procs:
            p.terminate()
        for p in procs:
            p.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    print(f"Starting API on http://localhost:{BACKEND_PORT} ...")
    procs.append(subprocess.Popen(
        ["uvicorn", "backend.app:app", "--reload", "--host", HOST, "--port", BACKEND_PORT,
         "--log-level", args.log_level.lower()],
        cwd=ROOT, env=env,
    ))

    client_dir = ROOT / "client"
    if args.with_client and client_dir.is_dir():
        print(f"Starting map client on http://localhost:{FRONTEND_PORT} ...")
        procs.append(subprocess.Popen(
            ["npm", "run", "dev", "--", "--port", FRONTEND_PORT],
            cwd=client_dir, env=env,
        ))

    for p in procs:
        p.wait()


if __name__ == "__main__":
    main()
