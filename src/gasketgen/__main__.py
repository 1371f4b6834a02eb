"""
Command Line Entry Point
========================
Validates one gasket from command line fields, prints the clearance report
and writes `<name>.dxf` (plus an optional PNG preview).

Usage:
    $ python -m gasketgen flange --od-x 5 --od-y 5 --corner-radius 1/2 \\
          --bolt-hole-dia 0.5 --bolt-cc-x 3.5 --bolt-cc-y 3.5 \\
          --cutout-type circle --cutout-dia 3 -o FL-500 --dir out

Exit code 0 when the DXF was written (warnings may be printed), 1 when
validation failed.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from gasketgen.logging_config import setup_logging
from gasketgen.model.gaskets import FieldType, ValidationResult, get_spec_class, list_kinds
from gasketgen.model.state import GasketSession
from gasketgen.model.units import format_dimension
from gasketgen.view.preview import save_preview

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-o", "--output", dest="name", default=None,
                        help="CAD name; the file is written as <name>.dxf")
    common.add_argument("--dir", default=".", help="Output directory (default: current directory)")
    common.add_argument("--preview", metavar="PNG", default=None, help="Also save a preview image")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    common.add_argument("--log-file", default=None, help="Also write the log to this file")

    parser = argparse.ArgumentParser(
        prog="gasketgen",
        description="Generate gasket DXF drawings with clearance checks.",
    )
    sub = parser.add_subparsers(dest="kind", required=True, metavar="KIND")

    for kind in list_kinds():
        spec_cls = get_spec_class(kind)
        p = sub.add_parser(str(kind), parents=[common], help=spec_cls.TITLE, description=spec_cls.TITLE)
        for info in spec_cls.FIELDS:
            kwargs = {"dest": info.name, "default": None}
            help_text = info.label if info.required else f"{info.label} (optional)"
            if info.type is FieldType.CHOICE:
                kwargs["choices"] = info.choices
                help_text += f", default {info.default}"
            else:
                kwargs["metavar"] = "N" if info.type is FieldType.INTEGER else "DIM"
            p.add_argument("--" + info.name.replace("_", "-"), help=help_text, **kwargs)

    return parser


def format_report(result: ValidationResult) -> str:
    lines = []
    if result.errors:
        lines.append("ERRORS:")
        lines.extend(f"  - {issue.message}" for issue in result.errors)
    if result.warnings:
        lines.append("WARNINGS:")
        lines.extend(f"  - {issue.message}" for issue in result.warnings)
    if result.clearances and result.clearances.checks:
        lines.append("Clearances:")
        for check in result.clearances.checks:
            lines.append(f"  {check.name}: {format_dimension(check.gap)} ({check.severity})")
    if result.ok:
        lines.append(f"OK: {result.spec.summary()}")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file)

    spec_cls = get_spec_class(args.kind)
    session = GasketSession(kind=spec_cls.KIND)
    session.update(**{
        info.name: getattr(args, info.name)
        for info in spec_cls.FIELDS
        if getattr(args, info.name) is not None
    })
    session.set_filename(args.name or "")

    result = session.validate()
    print(format_report(result))
    if not result.ok:
        return 1

    filepath = session.save(args.dir)
    print(f"Saved {filepath}")

    if args.preview:
        save_preview(result.spec, args.preview)
        print(f"Preview saved to {args.preview}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
