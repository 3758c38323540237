#!/usr/bin/env python3
"""Replay a seed file of writes against an in-memory store and print listener output.

The seed file is a JSON array of write operations::

    [
      {"op": "set", "path": "rooms/lobby", "data": {"topic": "hi"}},
      {"op": "set", "path": "rooms/lobby", "data": {"open": true}, "merge": true},
      {"op": "update", "path": "rooms/lobby", "data": {"stats.visits": 1}},
      {"op": "delete", "path": "rooms/lobby"}
    ]

Usage
-----
    python scripts/watch_demo.py seed.json
    python scripts/watch_demo.py --watch rooms --verbose seed.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pyfiremock import (
    CollectionSnapshot,
    DocumentSnapshot,
    FiremockConfig,
    FiremockError,
    MockApp,
    MockFirestore,
)


def _print_document(snapshot: DocumentSnapshot) -> None:
    state = json.dumps(snapshot.data(), sort_keys=True) if snapshot.exists else "<absent>"
    print(f"  doc  {snapshot.ref.path}: {state}")


def _print_collection(snapshot: CollectionSnapshot) -> None:
    trigger = snapshot.changed.ref.path if snapshot.changed is not None else "<initial>"
    print(f"  coll {snapshot.query.path}: size={snapshot.size} trigger={trigger}")


async def _apply(firestore: MockFirestore, step: dict[str, Any]) -> None:
    op = step.get("op")
    ref = firestore.doc(str(step.get("path", "")))
    data = step.get("data") or {}
    if op == "set":
        await ref.set(data, merge=bool(step.get("merge", False)))
    elif op == "update":
        await ref.update(data)
    elif op == "delete":
        await ref.delete()
    else:
        raise FiremockError(f"Unknown op: {op!r}")


async def _run(seed: list[dict[str, Any]], watch: list[str]) -> int:
    app = MockApp(config=FiremockConfig.from_env())
    firestore = app.firestore()

    for path in watch:
        firestore.collection(path).on_snapshot(_print_collection)

    failures = 0
    for index, step in enumerate(seed, start=1):
        print(f"[{index}] {step.get('op')} {step.get('path')}")
        try:
            await _apply(firestore, step)
        except FiremockError as exc:
            failures += 1
            print(f"  error {type(exc).__name__}: {exc}")

    print("\nFinal documents:")
    for path in firestore.store.paths():
        _print_document(firestore.doc(path).get().result())

    await app.delete()
    return failures


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("seed", type=Path, help="JSON file with a list of write operations")
    parser.add_argument(
        "--watch",
        action="append",
        default=[],
        metavar="COLLECTION",
        help="Collection path to attach a listener to (repeatable)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    seed = json.loads(args.seed.read_text(encoding="utf-8"))
    if not isinstance(seed, list):
        parser.error("seed file must contain a JSON array")

    failures = asyncio.run(_run(seed, args.watch))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
