from __future__ import annotations

import argparse

from fencemap import MapRegistry, extract_file


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="dump_fragments")
    ap.add_argument("file", help="Markdown file")
    args = ap.parse_args(argv)

    registry = MapRegistry()
    identifier, sources = extract_file(args.file, registry)
    for source, pm in zip(sources, registry.maps(identifier)):
        print(f"== {source.identifier} (fence at {pm.origin.line}:{pm.origin.column})")
        for i, line in enumerate(source.text.split("\n"), start=1):
            print(f"{i:>4}: {line}")
        for seg in pm.segments:
            g = seg.generated
            o = "-" if seg.terminator else f"{seg.original.line}:{seg.original.column}"
            print(f"      {g.line}:{g.column} -> {o}")
    for failure in registry.failures(identifier):
        print(f"!! fragment {failure.fragment}: {failure.message}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
