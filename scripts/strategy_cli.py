from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
import sys

# Ensure project root is on sys.path so 'strategy_porter' resolves when running this script directly
def project_root() -> Path:
    return Path(__file__).resolve().parents[1]

_ROOT = project_root()
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from strategy_porter.config import PorterConfig
from strategy_porter.errors import StrategyError
from strategy_porter.manager import FORMAT_ORIGINAL, FORMAT_SHORTHAND, StrategyManager
from strategy_porter.validator import validate_strategies


def build_manager(args: argparse.Namespace) -> StrategyManager:
    overrides = {
        k: v
        for k, v in {"db_path": args.db, "store_key": args.key, "export_dir": getattr(args, "out_dir", None)}.items()
        if v is not None
    }
    return StrategyManager.from_config(PorterConfig(**overrides))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Strategy store CLI – export, import and inspect strategies")
    ap.add_argument("--db", default=None, help="SQLite store path (env STRATEGY_DB_PATH)")
    ap.add_argument("--key", default=None, help="Store key (env STRATEGY_STORE_KEY)")
    sub = ap.add_subparsers(dest="cmd", required=True)
    formats = [FORMAT_ORIGINAL, FORMAT_SHORTHAND]

    p_exp = sub.add_parser("export", help="Export stored strategies to a dated JSON file")
    p_exp.add_argument("--format", choices=formats, default=FORMAT_ORIGINAL)
    p_exp.add_argument("--out-dir", default=None, help="Export directory (env STRATEGY_EXPORT_DIR)")

    p_imp = sub.add_parser("import", help="Validate a strategy file and replace the stored list")
    p_imp.add_argument("file")
    p_imp.add_argument("--format", choices=formats, default=FORMAT_ORIGINAL)

    p_show = sub.add_parser("show", help="Print stored strategies as JSON")
    p_show.add_argument("--format", choices=formats, default=FORMAT_ORIGINAL)

    p_val = sub.add_parser("validate", help="Check a canonical strategy file without touching the store")
    p_val.add_argument("file")

    sub.add_parser("clear", help="Remove the stored strategies")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.cmd == "validate":
        try:
            data = json.loads(Path(args.file).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            print(f"Invalid: {exc}", file=sys.stderr)
            return 1
        if not validate_strategies(data):
            print("Invalid strategy format", file=sys.stderr)
            return 1
        print(f"OK: {len(data)} strategies")
        return 0

    manager = build_manager(args)
    try:
        if args.cmd == "export":
            out = manager.export_strategies(args.format)
            if out is None:
                print("No strategies stored")
            else:
                print(f"Wrote {manager.last_export_path}")
            return 0

        if args.cmd == "import":
            items = asyncio.run(manager.import_strategies([args.file], args.format))
            print(f"Imported {len(items)} strategies")
            return 0

        if args.cmd == "show":
            print(json.dumps(manager.get_strategies(args.format), ensure_ascii=False, indent=2))
            return 0

        if args.cmd == "clear":
            manager.store.remove_item(manager.key)
            print(f"Removed {manager.key}")
            return 0
    except StrategyError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 2


if __name__ == "__main__":
    sys.exit(main())
