"""Replay saved BOD sample requests against a running bridge.

Usage: ``bodbridge-replay [--samples DIR] MODE [host] [port]`` where MODE is one of:

- parse: check that each sample parses
- map: map each sample to a Kai call without creating it
- dryrun: show what would be sent to the Kai API
- dispatch: create a real call for each sample

Samples are every ``*.json`` file under DIR, searched recursively. DIR defaults to
``samples`` relative to the current working directory.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Sequence, TextIO

import httpx

MODE_ENDPOINTS = {
    "parse": "test/parse_request",
    "map": "test/map_request",
    "dryrun": "test/dispatch_dryrun",
    "dispatch": "bod",
}
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 4567
DEFAULT_SAMPLE_DIR = Path("samples")


def find_samples(sample_dir: Path) -> list[Path]:
    return sorted(sample_dir.glob("**/*.json"))


def replay(
    mode: str,
    samples: Iterable[Path],
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    client: httpx.Client | None = None,
    out: TextIO = sys.stdout,
) -> int:
    """Post every sample to the endpoint for ``mode``; returns how many requests failed."""
    endpoint = MODE_ENDPOINTS[mode]
    url = f"http://{host}:{port}/{endpoint}"
    http = client or httpx.Client(timeout=60.0)
    failures = 0
    print(f"Testing {mode} on {host}:{port}/{endpoint}\n", file=out)
    try:
        for sample in samples:
            data = sample.read_text(encoding="utf-8").strip()
            print(f"Sample: {sample}", file=out)
            print(data, file=out)
            print(file=out)
            try:
                response = http.post(url, content=data, headers={"Content-Type": "application/json"})
            except httpx.HTTPError as exc:
                failures += 1
                print(f"Request failed: {type(exc).__name__} {exc}\n\n", file=out)
                continue
            if response.is_error:
                failures += 1
            print(f"Response ({response.status_code}):", file=out)
            print(response.text, file=out)
            print("\n", file=out)
    finally:
        if client is None:
            http.close()
    return failures


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    sample_dir = DEFAULT_SAMPLE_DIR
    if "--samples" in args:
        index = args.index("--samples")
        if index + 1 >= len(args):
            print("--samples requires a directory", file=sys.stderr)
            return 1
        sample_dir = Path(args[index + 1])
        del args[index : index + 2]
    if not args or args[0] not in MODE_ENDPOINTS:
        print(f"Missing or invalid mode. Valid modes: {', '.join(MODE_ENDPOINTS)}", file=sys.stderr)
        return 1
    mode = args[0]
    host = args[1] if len(args) >= 2 else DEFAULT_HOST
    port = int(args[2]) if len(args) >= 3 else DEFAULT_PORT
    failures = replay(mode, find_samples(sample_dir), host=host, port=port)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
