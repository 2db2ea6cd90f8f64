#!/usr/bin/env python3
"""
BDL — Binary Description Language

Command-line interface for inspecting BDL blocks embedded in documentation.

Usage:
    bdl parse <file>          Print the parse result as canonical JSON
    bdl parse <file> -a       ...with semantic annotations
    bdl show <file>           Human-readable summary of a block
    bdl frames <file>         Table of TLV frames

<file> may be `-` to read the block from stdin.
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from pathlib import Path
from typing import Optional

from bdl.annotator import annotate_block
from bdl.ast import RawBlobAst, TlvSequenceAst
from bdl.config import BDLConfig
from bdl.core import canonical_json, parse_block
from bdl.errors import BDLError

logger = logging.getLogger(__name__)

EXIT_FILE_ERROR = 1
EXIT_PARSE_ERROR = 2

# Safety flag that hides frame values in listings.
MASK_SECRETS = "maskSecrets"


# ============================================================================
# Formatting helpers
# ============================================================================

class C:
    """ANSI colors."""
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    RESET = "\033[0m"

    @staticmethod
    def off():
        C.BOLD = C.DIM = C.RED = C.GREEN = C.YELLOW = C.CYAN = C.RESET = ""


def header(text: str) -> str:
    return f"\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}\n{C.BOLD}  {text}{C.RESET}\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}"


def ok(text: str) -> str:
    return f"  {C.GREEN}✓{C.RESET} {text}"


def warn(text: str) -> str:
    return f"  {C.YELLOW}⚠{C.RESET} {text}"


def fail(text: str) -> str:
    return f"  {C.RED}✗{C.RESET} {text}"


def bar(ratio: float, width: int = 30) -> str:
    filled = int(ratio * width)
    empty = width - filled
    if ratio > 0.8:
        color = C.GREEN
    elif ratio > 0.4:
        color = C.YELLOW
    else:
        color = C.RED
    return f"{color}{'█' * filled}{'░' * empty}{C.RESET} {ratio:.1%}"


def read_block(source: str, config: BDLConfig) -> str:
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    if len(text) > config.max_block_chars:
        raise ValueError(
            f"Input is {len(text)} characters; limit is {config.max_block_chars} "
            f"(BDL_MAX_BLOCK_CHARS)"
        )
    return text


# ============================================================================
# Commands
# ============================================================================

def cmd_parse(args, config: BDLConfig) -> None:
    """Print the parse result as canonical JSON."""
    text = read_block(args.file, config)
    if args.annotate:
        result = annotate_block(text).to_dict()
    else:
        result = parse_block(text).to_dict()
    indent = None if args.compact or config.json_indent == 0 else config.json_indent
    print(canonical_json(result, indent=indent))


def cmd_show(args, config: BDLConfig) -> None:
    """Human-readable summary of a block."""
    text = read_block(args.file, config)
    annotated = annotate_block(text)
    meta, ast = annotated.meta, annotated.ast

    print(header(f"BDL: {args.file}"))
    print(f"  {C.DIM}v{meta.version}  |  {meta.encoding}  |  {meta.endianness}  |  "
          f"framing={meta.framing_type}{C.RESET}")
    print(f"  Schema:   {C.BOLD}{meta.schema_name}{C.RESET}")
    if meta.safety_flags:
        print(f"  Flags:    {', '.join(sorted(meta.safety_flags))}")
    if meta.tags:
        print(f"  Tags:     {', '.join(meta.tags)}")

    if isinstance(ast, TlvSequenceAst):
        total = ast.total_bytes
        print(f"\n  {C.BOLD}TLV sequence{C.RESET}  {len(ast.frames)} frame(s), {total} bytes")
        print(f"    Coverage: {bar(ast.coverage) if total else 'empty payload'}")
        if ast.remainder_bytes:
            print(warn(f"{ast.remainder_bytes} trailing byte(s) do not form a complete frame"))
        else:
            print(ok("Every byte belongs to a frame"))
    elif isinstance(ast, RawBlobAst):
        print(f"\n  {C.BOLD}Raw blob{C.RESET}  {ast.length} bytes")
        print(f"    SHA-256: {ast.sha256}")
        print(f"    Entropy: {ast.entropy_bits_per_byte:.3f} bits/byte  {bar(ast.entropy_bits_per_byte / 8.0)}")

    if meta.sample_length != _payload_length(ast):
        print(warn(f"sampleLength declares {meta.sample_length} bytes, payload has {_payload_length(ast)}"))

    for field in annotated.semantic:
        print(f"    {C.CYAN}{field.path}{C.RESET}  {field.role}  {C.DIM}({field.confidence:.2f}){C.RESET}")


def cmd_frames(args, config: BDLConfig) -> None:
    """Table of TLV frames."""
    text = read_block(args.file, config)
    parsed = parse_block(text)
    ast = parsed.structure
    masked = parsed.metadata.has_flag(MASK_SECRETS)

    print(header(f"FRAMES: {args.file}"))
    if not isinstance(ast, TlvSequenceAst):
        print(warn(f"Schema is not TLV-framed ({ast.kind}); nothing to list"))
        return

    if not ast.frames:
        print(warn("No complete frames"))
    for frame in ast.frames:
        preview = frame.value_hex[:32] + ("…" if len(frame.value_hex) > 32 else "")
        if masked:
            preview = "[masked]"
        print(f"    {C.DIM}#{frame.index:<3d}{C.RESET} {C.CYAN}{frame.offset:#08x}{C.RESET}  "
              f"type={frame.type:#04x}  len={frame.length:<3d}  {preview}")
    if ast.remainder_bytes:
        print(f"    {C.DIM}+{ast.remainder_bytes} remainder byte(s){C.RESET}")


def _payload_length(ast) -> int:
    if isinstance(ast, TlvSequenceAst):
        return ast.total_bytes
    return ast.length


# ============================================================================
# CLI setup
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bdl",
        description="BDL — inspect binary payloads embedded in documentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
        examples:
          bdl parse sample.md
          bdl parse sample.md --annotate --compact
          cat sample.md | bdl show -
          bdl frames sample.md
        """),
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--log-level", help="Override BDL_LOG_LEVEL")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    p = sub.add_parser("parse", help="Print the parse result as JSON")
    p.add_argument("file", help="File containing a BDL block, or - for stdin")
    p.add_argument("-a", "--annotate", action="store_true", help="Include semantic annotations")
    p.add_argument("--compact", action="store_true", help="Single-line JSON")

    p = sub.add_parser("show", help="Human-readable summary of a block")
    p.add_argument("file", help="File containing a BDL block, or - for stdin")

    p = sub.add_parser("frames", help="List TLV frames")
    p.add_argument("file", help="File containing a BDL block, or - for stdin")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = BDLConfig.from_env()
        if args.log_level:
            config = BDLConfig(**{**config.model_dump(), "log_level": args.log_level})
    except ValueError as e:
        parser.error(f"invalid configuration: {e}")
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.no_color or not config.color:
        C.off()

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "parse": cmd_parse,
        "show": cmd_show,
        "frames": cmd_frames,
    }

    handler = commands[args.command]
    try:
        handler(args, config)
    except FileNotFoundError as e:
        print(fail(f"File not found: {e.filename}"), file=sys.stderr)
        return EXIT_FILE_ERROR
    except BDLError as e:
        logger.debug("Parse failed", exc_info=True)
        print(fail(f"{e.code}: {e.message}"), file=sys.stderr)
        return EXIT_PARSE_ERROR
    except ValueError as e:
        print(fail(str(e)), file=sys.stderr)
        return EXIT_FILE_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
