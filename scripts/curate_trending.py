"""
Curate homepage trending products from the command line.

Loads every product, applies one edit to the trending selection and saves
it with the same two-phase write the admin API uses.

Usage:
    python scripts/curate_trending.py list
    python scripts/curate_trending.py add <product_id> [<product_id> ...]
    python scripts/curate_trending.py remove <product_id> [...]
    python scripts/curate_trending.py up <product_id>
    python scripts/curate_trending.py down <product_id>
    python scripts/curate_trending.py set <product_id> [<product_id> ...]
"""
import argparse
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import get_admin_client
from exceptions import AppError, TrendingSaveError
from services.trending_service import TrendingCuration, TrendingService


def print_selection(curation: TrendingCuration):
    print("=" * 60)
    print(f"TRENDING ({len(curation.trending)} of {len(curation.products)} products)")
    print("=" * 60)

    if not curation.trending:
        print("  (none - homepage section is hidden)")

    for position, product in enumerate(curation.trending):
        category = product.category.name if product.category else "-"
        print(f"  {position:>2}. {product.name:<35} {category:<15} {product.id}")


def apply_edit(curation: TrendingCuration, command: str, product_ids: list[str]) -> bool:
    """Apply one edit in memory. Returns True if anything changed."""
    if command == "add":
        changed = False
        for pid in product_ids:
            if pid not in curation.selection:
                curation.toggle(pid)
                changed = True
        return changed

    if command == "remove":
        changed = False
        for pid in product_ids:
            if pid in curation.selection:
                curation.toggle(pid)
                changed = True
        return changed

    if command == "up":
        return curation.move_up(curation.index_of(product_ids[0]))

    if command == "down":
        return curation.move_down(curation.index_of(product_ids[0]))

    if command == "set":
        before = curation.selection.ids
        curation.select(product_ids)
        return curation.selection.ids != before

    return False


def main():
    parser = argparse.ArgumentParser(
        description="Curate homepage trending products",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/curate_trending.py list
  python scripts/curate_trending.py add 3f2c... 91ab...
  python scripts/curate_trending.py up 91ab...
  python scripts/curate_trending.py set 91ab... 3f2c... --dry-run
        """
    )
    parser.add_argument(
        "command",
        choices=["list", "add", "remove", "up", "down", "set"],
        help="Edit to apply"
    )
    parser.add_argument(
        "product_ids",
        nargs="*",
        help="Product UUIDs (display order for 'set')"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the resulting order without saving"
    )

    args = parser.parse_args()

    if args.command in ("add", "remove", "up", "down") and not args.product_ids:
        parser.error(f"'{args.command}' needs at least one product id")
    if args.command in ("up", "down") and len(args.product_ids) != 1:
        parser.error(f"'{args.command}' takes exactly one product id")

    curation = TrendingCuration(TrendingService(client=get_admin_client()))

    try:
        curation.load()

        if args.command == "list":
            print_selection(curation)
            return 0

        changed = apply_edit(curation, args.command, args.product_ids)

        if not changed:
            print("Nothing to change.")
            print_selection(curation)
            return 0

        if args.dry_run:
            print("[DRY RUN] Not saved.")
            print_selection(curation)
            return 0

        curation.save()
        print("Saved.")
        print_selection(curation)
        return 0

    except TrendingSaveError as e:
        print(f"\nSAVE FAILED during {e.details['phase']}: {e.message}")
        print(f"{e.details['completed']} product(s) were flagged before the failure.")
        print("Persisted state:")
        print_selection(curation)
        print("\nRe-run the same command to retry.")
        return 1

    except AppError as e:
        print(f"\nERROR [{e.code}]: {e.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
