import argparse
import logging
import sys
from pathlib import Path

from vm.source_unit import load_source_units
from hack.integrated_hack_generator import DEFAULT_ENTRY_UNIT, IntegratedHackGenerator

OUTPUT_SUFFIX = ".asm"


def default_output_path(source: Path) -> Path:
    """<dir>/<dir>.asm for a directory, <name>.asm beside a single file."""
    if source.is_dir():
        return source / f"{source.resolve().name}{OUTPUT_SUFFIX}"
    return source.with_suffix(OUTPUT_SUFFIX)


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Stack VM to Hack assembly translator")
    ap.add_argument("source", help="a .vm file or a directory of .vm files")
    ap.add_argument("-o", "--output", help="output .asm file (default derived from source)")
    ap.add_argument("--entry-unit", default=DEFAULT_ENTRY_UNIT,
                    help=f"unit translated first (default: {DEFAULT_ENTRY_UNIT})")
    ap.add_argument("--annotate", action="store_true",
                    help="precede each block with its VM command as a comment")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source = Path(args.source)
    output = Path(args.output) if args.output else default_output_path(source)

    try:
        units, failures = load_source_units(source)
    except OSError as e:
        print(f"✗ Cannot read {source}: {e}", file=sys.stderr)
        return 1

    if not units and not failures:
        print(f"✗ No .vm files found in {source}", file=sys.stderr)
        return 1

    generator = IntegratedHackGenerator(entry_unit=args.entry_unit, annotate=args.annotate)
    asm = generator.generate(units)
    failures.extend(generator.failures)

    try:
        with open(output, "w", encoding="utf-8") as f:
            f.write(asm)
    except OSError as e:
        print(f"✗ Cannot write {output}: {e}", file=sys.stderr)
        return 1

    for unit in generator.order_units(units):
        if not any(failure.unit_name == unit.name for failure in failures):
            print(f"✓ Translated {unit.name}")
    for failure in failures:
        print(f"✗ {failure}", file=sys.stderr)

    stats = generator.get_statistics()
    print(f"✓ Translation complete: {output} "
          f"({stats['commands_translated']} commands, {stats['lines_emitted']} lines)")
    return 0


if __name__ == '__main__':
    sys.exit(main())
