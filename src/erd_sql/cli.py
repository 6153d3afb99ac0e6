"""
Command-line interface for erd-sql
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .error_report import categorize_error, format_suggestions
from .errors import SchemaError
from .generator import generate_sql_from_nodes
from .graph import graph_to_dict
from .importer import SchemaImporter


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        prog="erd-sql",
        description="erd-sql - Convert SQL schemas to ER diagram graphs and back",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  erd-sql import schema.sql                      # Print diagram graph JSON
  erd-sql import schema.sql --output graph.json  # Write graph to a file
  erd-sql export graph.json --output out.sql     # Generate SQL from a graph
  erd-sql validate schema.sql                    # Check a schema only
  erd-sql init                                   # Write an example schema.sql
        """
    )

    parser.add_argument(
        "command",
        choices=["import", "export", "validate", "init"],
        help="Command to execute"
    )

    parser.add_argument(
        "source",
        nargs="?",
        help="Input file: SQL for import/validate, graph JSON for export"
    )

    parser.add_argument(
        "--output",
        help="Output file path (default: stdout; schema.sql for init)"
    )

    parser.add_argument(
        "--dialect",
        default=None,
        help="SQL dialect used by the grammar parser (default: generic SQL)"
    )

    parser.add_argument(
        "--with-modifiers",
        action="store_true",
        help="Export UNIQUE / DEFAULT / AUTO_INCREMENT modifiers"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "init":
        return init_project(args)

    if not args.source:
        parser.error(f"'{args.command}' requires a source file")

    source = Path(args.source)
    if not source.exists():
        print(f"❌ Error: File not found: {source}", file=sys.stderr)
        return 1

    if args.command == "import":
        return import_schema(args, source)
    if args.command == "export":
        return export_schema(args, source)
    return validate_schema(args, source)


def _write_output(text, output):
    if output:
        Path(output).write_text(text, encoding="utf-8")
        print(f"✅ Generated: {output}", file=sys.stderr)
    else:
        print(text)


def _report(error, context):
    report = categorize_error(error, context)
    print(f"\n❌ {report.title}: {report.message}", file=sys.stderr)
    print(report.details, file=sys.stderr)
    print("\nSuggestions:", file=sys.stderr)
    print(format_suggestions(report.suggestions), file=sys.stderr)
    return 1


def init_project(args):
    """Write the bundled example schema"""
    from .examples import create_example_schema

    path = create_example_schema(args.output or "schema.sql")
    print(f"✨ Created example schema: {path}")
    print("\nNext steps:")
    print(f"  1. Run: erd-sql import {path} --output graph.json")
    print("  2. Edit the graph, then run: erd-sql export graph.json")
    return 0


def import_schema(args, source):
    """Parse a SQL file into diagram graph JSON"""
    print(f"🔨 Importing {source}...", file=sys.stderr)

    try:
        nodes, edges = SchemaImporter(args.dialect).import_sql(source.read_text(encoding="utf-8"))
    except SchemaError as e:
        return _report(e, "import")

    print(f"  {len(nodes)} tables, {len(edges)} relationships", file=sys.stderr)
    _write_output(json.dumps(graph_to_dict(nodes, edges), indent=2), args.output)
    return 0


def export_schema(args, source):
    """Generate SQL from diagram graph JSON"""
    print(f"🔨 Exporting {source}...", file=sys.stderr)

    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        return _report(e, "export")

    nodes = payload.get("nodes", []) if isinstance(payload, dict) else payload
    if not isinstance(nodes, list):
        return _report(ValueError("graph JSON must contain a list of nodes"), "export")

    _write_output(generate_sql_from_nodes(nodes, include_modifiers=args.with_modifiers), args.output)
    return 0


def validate_schema(args, source):
    """Validate a SQL schema without writing anything"""
    print(f"🔍 Validating {source}...")

    try:
        schema = SchemaImporter(args.dialect).parse_schema(source.read_text(encoding="utf-8"))
    except SchemaError as e:
        return _report(e, "validation")

    print(f"✅ Valid schema: {len(schema.tables)} tables, {len(schema.foreign_keys())} foreign keys")
    return 0


if __name__ == "__main__":
    sys.exit(main())
