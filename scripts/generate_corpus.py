from __future__ import annotations

import argparse
from pathlib import Path

from fencemap import MapRegistry, extract
from fencemap.testing import generate_corpus_files


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="generate_corpus", description="Write generated Markdown fixtures.")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=200)
    ap.add_argument("--out", default="tests/fixtures/markdown_corpus")
    args = ap.parse_args(argv)

    out_dir = Path(args.out).resolve() / f"seed_{args.seed}"
    out_dir.mkdir(parents=True, exist_ok=True)

    registry = MapRegistry()
    fragments = 0
    for rel, src in generate_corpus_files(seed=args.seed, count=args.count):
        (out_dir / rel).write_text(src, encoding="utf-8")
        fragments += len(extract(src, rel, registry))

    print(f"{out_dir}: {args.count} documents, {fragments} fragments")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
