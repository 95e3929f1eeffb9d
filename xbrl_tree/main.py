#!/usr/bin/env python3
# Path: xbrl_tree/main.py
"""
xbrl_tree - Main Entry Point

Rebuilds financial statements from the flat tables of a parsed XBRL filing.

Data Flow:
    INPUT:   <tables_dir>/{element,label,context,fact,presentation,
             calculation,definition,role}.csv
    PROCESS: edge normalization, tree building, fact binding,
             wide reshaping, label/calc annotation
    OUTPUT:  indented text or csv statements (stdout or --output DIR)

Usage:
    xbrl-tree --tables DIR --list-roles
    xbrl-tree --tables DIR --statement balance_sheet
    xbrl-tree --tables DIR --role http://acme.com/role/BalanceSheet --format csv
    xbrl-tree --tables DIR --output out/    # every face statement to files

Status messages go to stderr; statements rendered without --output go
to stdout.
"""

import argparse
import sys
import traceback
from pathlib import Path
from typing import Optional

import pandas as pd

from xbrl_tree.config_loader import ConfigLoader
from xbrl_tree.constants import (
    EXIT_ERROR,
    EXIT_INTERRUPTED,
    EXIT_OK,
    FORMAT_TEXT,
    MENU_HEADER,
    MENU_SEPARATOR,
    OUTPUT_FORMATS,
    STATUS_FAIL,
    STATUS_INFO,
    STATUS_OK,
    STATUS_WARN,
)
from xbrl_tree.core.logger import get_input_logger, get_output_logger, setup_ipo_logging
from xbrl_tree.loaders import TableDataLoader, TableReader, XbrlTables
from xbrl_tree.output import FormatterRegistry, register_default_formatters
from xbrl_tree.process.hierarchy import (
    HierarchyError,
    StatementBuilder,
    StatementType,
    find_roles,
)
from xbrl_tree.process.hierarchy.constants import COL_ROLE_DEFINITION, COL_ROLE_ID


def status(message: str = '') -> None:
    """Print a status line to stderr."""
    print(message, file=sys.stderr)


def print_banner() -> None:
    """Print application banner."""
    status()
    status(MENU_HEADER)
    status("  XBRL_TREE - Statement Hierarchy Reconstruction")
    status(MENU_HEADER)
    status()


def role_table(tables: XbrlTables) -> pd.DataFrame:
    """
    Role table restricted to roles that have presentation arcs.

    Presented roleIds missing from the role table (or every one of them
    when no role table was given) are added with a blank definition.
    """
    presented = tables.role_ids
    roles = tables.role
    if roles.empty or COL_ROLE_ID not in roles.columns:
        return pd.DataFrame({COL_ROLE_ID: presented, COL_ROLE_DEFINITION: [None] * len(presented)})

    known = roles[roles[COL_ROLE_ID].isin(presented)]
    declared = set(known[COL_ROLE_ID])
    undeclared = [role_id for role_id in presented if role_id not in declared]
    if undeclared:
        get_input_logger('main').warning(
            f"{len(undeclared)} presented role(s) missing from the role table: "
            f"{', '.join(undeclared)}"
        )
        extra = pd.DataFrame({COL_ROLE_ID: undeclared, COL_ROLE_DEFINITION: [None] * len(undeclared)})
        known = pd.concat([known, extra], ignore_index=True)
    return known.reset_index(drop=True)


def list_roles(tables: XbrlTables, statement_type: Optional[str] = None) -> None:
    """Print every presented role with its detected statement type."""
    roles = find_roles(role_table(tables), statement_type=statement_type, include_details=True)
    if roles.empty:
        status(f"{STATUS_INFO} No presentation roles found.")
        return

    status(f"  {len(roles)} role(s):")
    status(MENU_SEPARATOR)
    for record in roles.to_dict('records'):
        definition = record.get(COL_ROLE_DEFINITION)
        definition = '' if pd.isna(definition) else definition
        print(f"{record['statement_type']:22s} {record[COL_ROLE_ID]}  {definition}".rstrip())


def select_roles(
    tables: XbrlTables,
    role_ids: Optional[list[str]],
    statement_type: Optional[str],
) -> list[str]:
    """
    Roles to build.

    Explicit --role values win; otherwise the face statements of the
    requested type (or of any known type).
    """
    if role_ids:
        return list(role_ids)

    roles = find_roles(role_table(tables), statement_type=statement_type)
    if statement_type is None:
        roles = roles[roles['statement_type'] != StatementType.UNKNOWN.value]
    return list(roles[COL_ROLE_ID])


def run(args: argparse.Namespace, config: ConfigLoader) -> int:
    """
    Load tables, build the selected roles and render them.

    Returns:
        Exit code
    """
    logger = get_output_logger('main')

    loader = TableDataLoader(config, tables_dir=args.tables)
    paths = loader.discover_tables()
    if not paths:
        raise ValueError(f"No tables found in {loader.tables_dir}")
    tables = TableReader().read_tables(paths)

    if args.list_roles:
        list_roles(tables, args.statement)
        return EXIT_OK

    role_ids = select_roles(tables, args.role, args.statement)
    if not role_ids:
        status(f"{STATUS_INFO} No matching statement roles. Use --list-roles.")
        return EXIT_OK

    builder = StatementBuilder(
        tables,
        lang=args.lang or config.get('label_lang'),
        path_id_width=config.get('path_id_width'),
        period_order=args.period_order or config.get('period_order'),
    )

    register_default_formatters()
    formatter = FormatterRegistry.get(args.format)
    output_dir = args.output or config.get('output_dir')

    failed = []
    for role_id in role_ids:
        try:
            result = builder.build(role_id)
        except HierarchyError as e:
            failed.append(role_id)
            status(f"{STATUS_FAIL} {role_id}: {e}")
            logger.error(f"Build failed for role {role_id}: {e}")
            continue

        if output_dir:
            path = formatter.write_statement(result, Path(output_dir))
            status(f"{STATUS_OK} {role_id} -> {path}")
        else:
            print(formatter.format_statement(result))

        if len(result.report):
            status(f"{STATUS_WARN} {role_id}: {len(result.report)} issue(s)")
            for line in result.report.summary().splitlines():
                status(f"    {line}")

    logger.info(f"Rendered {builder.build_count} statement(s) as {args.format}")
    if failed:
        status(f"{STATUS_FAIL} {len(failed)} of {len(role_ids)} role(s) failed")
        return EXIT_ERROR
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Command line definition."""
    parser = argparse.ArgumentParser(
        prog='xbrl-tree',
        description='xbrl_tree - rebuild statement hierarchies from parsed XBRL tables',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  xbrl-tree --tables ./tables --list-roles
  xbrl-tree --tables ./tables --statement balance_sheet
  xbrl-tree --tables ./tables --role BalanceSheet --format csv --output ./out
        """
    )

    parser.add_argument(
        '--tables', '-t',
        type=str,
        help='Directory holding the table files (default: XBRL_TREE_TABLES_DIR)'
    )
    parser.add_argument(
        '--list-roles', '-l',
        action='store_true',
        help='List presented roles and their statement types'
    )
    parser.add_argument(
        '--role', '-r',
        action='append',
        help='Role id to build (repeatable)'
    )
    parser.add_argument(
        '--statement', '-s',
        type=str,
        choices=[t.value for t in StatementType if t is not StatementType.UNKNOWN],
        help='Build every face statement of this type'
    )
    parser.add_argument(
        '--lang',
        type=str,
        help='Label language (default: XBRL_TREE_LABEL_LANG or en-US)'
    )
    parser.add_argument(
        '--period-order',
        choices=('ascending', 'descending'),
        help='Order of period columns (default: XBRL_TREE_PERIOD_ORDER)'
    )
    parser.add_argument(
        '--format', '-f',
        choices=OUTPUT_FORMATS,
        default=FORMAT_TEXT,
        help='Output format'
    )
    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Write one file per statement into this directory'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress banner and console logging'
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for xbrl_tree.

    Returns:
        Exit code (0 success, 1 error, 130 interrupted)
    """
    args = build_parser().parse_args(argv)

    if not args.quiet:
        print_banner()

    try:
        config = ConfigLoader()
        setup_ipo_logging(
            log_dir=config.get('log_dir'),
            log_level=config.get('log_level', 'INFO'),
            console_output=config.get('log_console', True) and not args.quiet,
        )
        return run(args, config)

    except (ValueError, HierarchyError) as e:
        status(f"\n{STATUS_FAIL} Error: {e}")
        return EXIT_ERROR

    except KeyboardInterrupt:
        status("\n[Interrupted]")
        return EXIT_INTERRUPTED

    except Exception as e:
        status(f"\n{STATUS_FAIL} Unexpected error: {e}")
        traceback.print_exc()
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
