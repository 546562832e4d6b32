"""CLI for tagdoc - parse doc comments and maintain the tag configuration artifact."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.api_docs import ApiDocumentation, section_text
from .core.configuration import ParserConfiguration
from .core.errors import TagDocError
from .core.nodes import dump_tree
from .generator import SyncStatus, generate_config, sync_config_file
from .lint import lint
from .parser.parser import ParserContext
from .runtime import build_runtime


def line_and_column(text: str, offset: int) -> tuple[int, int]:
    """1-based line and column of a character offset."""
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def _context_summary(path: Path, context: ParserContext) -> dict[str, Any]:
    buffer = context.source_range.buffer
    doc = context.doc_comment
    findings = []
    for finding in lint(context):
        entry: dict[str, Any] = {"severity": finding.severity, "message": finding.message}
        if finding.range is not None:
            entry["line"], entry["column"] = line_and_column(buffer, finding.range.pos)
        if finding.message_id is not None:
            entry["id"] = finding.message_id.value
        findings.append(entry)
    line, column = line_and_column(buffer, context.source_range.pos)
    return {
        "file": str(path),
        "line": line,
        "column": column,
        "summary": section_text(doc.summary_section),
        "modifiers": [node.tag_name for node in doc.modifier_tag_set],
        "params": [block.parameter_name for block in doc.params],
        "custom_blocks": [block.tag_name for block in doc.custom_blocks],
        "findings": findings,
    }


def cmd_parse(args: argparse.Namespace, rt: Any) -> int:
    """Parse the doc comments of a source file."""
    path = Path(args.file)
    buffer = path.read_text(encoding="utf-8")

    contexts = []
    for context in rt.parser.parse_all(buffer, rt.locator):
        contexts.append(context)
        if not args.all:
            break

    if not contexts:
        print(f"No doc comments were found in {path}", file=sys.stderr)
        return 1

    summaries = [_context_summary(path, c) for c in contexts]
    has_errors = any(
        f["severity"] == "error" for s in summaries for f in s["findings"]
    )

    if args.json:
        print(json.dumps(summaries, indent=2))
        return 1 if has_errors else 0

    for context, summary in zip(contexts, summaries):
        print(f"{path}({summary['line']},{summary['column']}):")
        if not args.quiet:
            print(str(context.source_range))
            print()
        if not summary["findings"]:
            print("No errors or warnings.")
        for finding in summary["findings"]:
            where = ""
            if "line" in finding:
                where = f"({finding['line']},{finding['column']})"
            print(f"{path}{where}: [{finding['severity']}] {finding['message']}")
        if summary["modifiers"]:
            print("Modifiers: " + ", ".join(summary["modifiers"]))
        if not args.quiet:
            print()
            print("\n".join(dump_tree(context.doc_comment)))
        print()

    return 1 if has_errors else 0


def cmd_generate(args: argparse.Namespace, rt: Any) -> int:
    """Regenerate (or check) the tag configuration artifact."""
    docs: dict[str, Any] = dict(ApiDocumentation.standard())
    if args.docs:
        # Project tags: document custom definitions alongside the standard ones
        docs.update(ApiDocumentation.load_file(Path(args.docs)))
        configuration = rt.configuration
    else:
        configuration = ParserConfiguration()

    width = args.width or rt.config.generate.width
    content = generate_config(configuration, docs, width=width)

    if args.stdout:
        sys.stdout.write(content)
        return 0

    target = Path(args.out) if args.out else rt.config.generate.out
    status = sync_config_file(target, content, check_only=args.check)

    if status is SyncStatus.UP_TO_DATE:
        if not args.quiet:
            print(f"{target} is up to date.")
        return 0
    if status is SyncStatus.DRIFT:
        print(f"{target} is out of date; run without --check to regenerate it.", file=sys.stderr)
        return 1
    print(f"WARNING: {target} has been regenerated. Ensure this change is committed.")
    return 1


def version_text() -> str:
    return "\n".join([
        f"tagdoc {__version__}",
        f"python {platform.python_version()}",
        f"platform {platform.platform()}",
    ])


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tagdoc", description="Doc comment parser and tag configuration tools"
    )
    parser.add_argument(
        "--version", action="version", version=version_text()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: cwd/tagdoc.toml)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug)"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # parse command
    parser_parse = subparsers.add_parser("parse", help="Parse doc comments in a source file")
    parser_parse.add_argument("file", help="Source file to scan")
    parser_parse.add_argument(
        "--all", action="store_true", help="Parse every doc comment, not only the first"
    )
    parser_parse.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    # generate command
    parser_generate = subparsers.add_parser(
        "generate", help="Generate the tag configuration artifact"
    )
    parser_generate.add_argument("--out", help="Target file (overrides config)")
    parser_generate.add_argument(
        "--check", action="store_true", help="Report drift without writing"
    )
    parser_generate.add_argument(
        "--stdout", action="store_true", help="Print the artifact instead of writing it"
    )
    parser_generate.add_argument(
        "--docs", help="YAML documentation for project tags; includes them in the artifact"
    )
    parser_generate.add_argument(
        "--width", type=int, default=None, help="Wrap width for descriptions"
    )

    args = parser.parse_args()

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    handlers = {
        "parse": cmd_parse,
        "generate": cmd_generate,
    }
    handler = handlers.get(args.cmd)

    try:
        rt = build_runtime(config_path=args.config)
        exit_code = handler(args, rt)
        sys.exit(exit_code)
    except (TagDocError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
