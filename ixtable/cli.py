from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup

from ixtable.export_xlsx import save_exported_file
from ixtable.facts import FactStore, FactStoreError
from ixtable.inspector import FactNotFoundError, describe_fact, hidden_facts
from ixtable.settings import Settings, SettingsError, get_settings
from ixtable.table_export import (
    TableExport,
    TableNotFoundError,
    add_handles,
    find_table,
    summarize_table,
)


def load_document(html_path: Path) -> BeautifulSoup:
    html = Path(html_path).expanduser().read_text(encoding="utf-8", errors="ignore")
    return BeautifulSoup(html, "lxml")


def _load_store(soup: BeautifulSoup, taxonomy: Optional[str], settings: Settings) -> FactStore:
    if taxonomy:
        return FactStore.from_json_file(Path(taxonomy), lang=settings.label_lang)
    return FactStore.from_document(soup, lang=settings.label_lang)


def _cmd_tables(args: argparse.Namespace, settings: Settings) -> int:
    soup = load_document(args.document)
    store = _load_store(soup, args.taxonomy, settings)
    for h in add_handles(soup, store):
        s = summarize_table(h)
        print(f"{s.table_id}\trows={s.n_rows}\tcols={s.n_cols}\tfacts={s.n_facts}", flush=True)
    return 0


def _cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    soup = load_document(args.document)
    store = _load_store(soup, args.taxonomy, settings)
    exported = TableExport(find_table(soup, args.table), store).export_table()
    out_dir = Path(args.out_dir) if args.out_dir else settings.output_dir
    out = save_exported_file(exported, out_dir)
    print(str(out), flush=True)
    return 0


def _cmd_inspect(args: argparse.Namespace, settings: Settings) -> int:
    soup = load_document(args.document)
    store = _load_store(soup, args.taxonomy, settings)
    summary = describe_fact(store, args.fact)
    print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False, default=str), flush=True)
    return 0


def _cmd_hidden(args: argparse.Namespace, settings: Settings) -> int:
    soup = load_document(args.document)
    store = _load_store(soup, args.taxonomy, settings)
    for hf in hidden_facts(soup, store):
        print(f"{hf.fact_id}\t{hf.concept}\t{hf.value}", flush=True)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ixtable", description="Inspect inline XBRL facts and export fact tables to .xlsx.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    def _doc_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("document", help="Inline XBRL / viewer HTML document")
        p.add_argument("--taxonomy", default=None, help="Taxonomy JSON (default: embedded taxonomy-data script)")

    p_tables = sub.add_parser("tables", help="List tables that carry facts")
    _doc_args(p_tables)
    p_tables.set_defaults(func=_cmd_tables)

    p_export = sub.add_parser("export", help="Export one table to table.xlsx")
    _doc_args(p_export)
    p_export.add_argument("--table", required=True, help="Table id, e.g. t0003")
    p_export.add_argument("--out-dir", default=None, help="Output directory (default: IXTABLE_OUTPUT_DIR or .)")
    p_export.set_defaults(func=_cmd_export)

    p_inspect = sub.add_parser("inspect", help="Show labels and dimensions of one fact")
    _doc_args(p_inspect)
    p_inspect.add_argument("--fact", required=True, help="Fact id")
    p_inspect.set_defaults(func=_cmd_inspect)

    p_hidden = sub.add_parser("hidden", help="List facts tagged inside ix:hidden")
    _doc_args(p_hidden)
    p_hidden.set_defaults(func=_cmd_hidden)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except SettingsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args, settings)
    except (FactStoreError, TableNotFoundError, FactNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
