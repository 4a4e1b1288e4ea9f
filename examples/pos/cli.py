"""
Interactive POS — one cashier session against a store.

┌─────────────────────────────────────────────────────────────────────────┐
│  COMMAND      WHAT RUNS                                                  │
├─────────────────────────────────────────────────────────────────────────┤
│  add          snapshot lookup → fresh stock check → cart                 │
│  checkout     hard stops → stock per line → submit → reset + refresh     │
│  report       range fetch → day/month buckets                            │
│  dashboard    daily totals ∥ active products → low-stock filter          │
└─────────────────────────────────────────────────────────────────────────┘
"""

from datetime import date, timedelta
from decimal import Decimal, InvalidOperation

from kungfu import Ok, Error

from lonja.config import Settings
from lonja.domain import ItemKind
from lonja.remote import RemoteStore
from lonja.reports import Granularity, ReportService, load_dashboard
from lonja.session import SaleSession

from examples._infra import banner


# ═══════════════════════════════════════════════════════════════════════════════
# Help
# ═══════════════════════════════════════════════════════════════════════════════

HELP_TEXT = """
┌─────────────────────────────────────────────────────────────────────────────┐
│                              COMMANDS                                        │
├─────────────────────────────────────────────────────────────────────────────┤
│  products                   List active products                            │
│  combos                     List active combos with savings                 │
│  add p|c <id> [qty]         Add product (lb) or combo (units) to the cart   │
│  remove <line>              Remove a cart line (1-based)                    │
│  cart                       Show the cart                                   │
│  customer <name>            Set the customer                                │
│  notes <text>               Set sale notes                                  │
│  checkout                   Validate stock and record the sale              │
│  cancel                     Empty the cart                                  │
├─────────────────────────────────────────────────────────────────────────────┤
│  report day|month [days]    Sales over the last N days (default 60)         │
│  dashboard                  Today's totals and low-stock products           │
│  help                       Show this help                                  │
│  quit                       Exit                                            │
└─────────────────────────────────────────────────────────────────────────────┘

Examples:
  add p 1 2.5        → 2.5 lb of product 1
  add c 10           → one unit of combo 10
  customer Rosa Méndez
"""


def print_help() -> None:
    print(HELP_TEXT)


# ═══════════════════════════════════════════════════════════════════════════════
# Display
# ═══════════════════════════════════════════════════════════════════════════════

def print_products(session: SaleSession) -> None:
    low = {p.id for p in session.low_stock()}
    print("\n┌──────────────────────────────────────────────────────────┐")
    print("│                       PRODUCTS                            │")
    print("├──────────────────────────────────────────────────────────┤")
    for p in session.catalog.products:
        flag = " ⚠" if p.id in low else "  "
        print(f"│  [{p.id:3}] {p.name:22} ${p.price_per_lb:>7}/lb {p.stock_lb:>7} lb{flag} │")
    print("└──────────────────────────────────────────────────────────┘")


def print_combos(session: SaleSession) -> None:
    print("\n┌──────────────────────────────────────────────────────────┐")
    print("│                        COMBOS                             │")
    print("├──────────────────────────────────────────────────────────┤")
    for c in session.catalog.combos:
        savings = session.combo_savings(c.id)
        print(f"│  [{c.id:3}] {c.name:24} ${c.price:>7}  saves ${savings:>6} │")
    print("└──────────────────────────────────────────────────────────┘")


def print_cart(session: SaleSession) -> None:
    cart = session.cart
    print(f"""
┌──────────────────────────────────────────────────────────┐
│  CART   customer: {cart.customer or '—':38} │
├──────────────────────────────────────────────────────────┤""")
    if cart.is_empty:
        print("│  (empty)                                                  │")
    for n, line in enumerate(cart.lines, start=1):
        unit = "lb" if line.kind is ItemKind.PRODUCT else "u "
        print(f"│  {n:2}. {line.item.name:22} {line.quantity:>6} {unit} ${line.subtotal:>9.2f} │")
    print(f"""├──────────────────────────────────────────────────────────┤
│  TOTAL (estimate):                          ${cart.total:>9} │
└──────────────────────────────────────────────────────────┘""")


# ═══════════════════════════════════════════════════════════════════════════════
# Commands
# ═══════════════════════════════════════════════════════════════════════════════

async def cmd_add(session: SaleSession, args: list[str]) -> None:
    if len(args) not in (2, 3) or args[0] not in ("p", "c"):
        print("  Usage: add p|c <id> [qty]")
        return
    kind = ItemKind.PRODUCT if args[0] == "p" else ItemKind.COMBO
    try:
        item_id = int(args[1])
        quantity = Decimal(args[2]) if len(args) == 3 else Decimal(1)
    except (ValueError, InvalidOperation):
        print("  ✗ id must be a number and qty a decimal")
        return

    match await session.add(kind, item_id, quantity):
        case Ok(cart):
            print(f"  ✓ Added. Cart total (estimate): ${cart.total}")
        case Error(e):
            print(f"  ✗ {e.message}")


async def cmd_checkout(session: SaleSession) -> None:
    print("\n  Validating stock and submitting...")
    match await session.checkout():
        case Ok(sale):
            print(f"""
╔══════════════════════════════════════════════════════════╗
║  SALE #{sale.id:<50} ║
╠══════════════════════════════════════════════════════════╣
║  Customer: {sale.customer:45} ║
║  Date:     {sale.sold_at or '':45} ║
╠══════════════════════════════════════════════════════════╣""")
            for d in sale.details:
                print(f"║  {d.quantity:>6} x {d.name:24} @ ${d.unit_price:>7} ${d.subtotal:>8} ║")
            print(f"""╠══════════════════════════════════════════════════════════╣
║  TOTAL:                                        ${sale.total:>8} ║
╚══════════════════════════════════════════════════════════╝

  ✓ Sale recorded. Catalog refreshed.
""")
        case Error(e) if e.is_validation:
            print(f"  ✗ {e.user_message}")
        case Error(e):
            retry = " (you can try again)" if e.is_retryable else ""
            print(f"  ✗ Checkout failed: {e.user_message}{retry}")


async def cmd_report(reports: ReportService, args: list[str]) -> None:
    granularity = Granularity.MONTH if args and args[0] == "month" else Granularity.DAY
    try:
        days = int(args[1]) if len(args) > 1 else 60
    except ValueError:
        print("  ✗ days must be a number")
        return
    end = date.today()
    start = end - timedelta(days=days)

    match await reports.sales_report(start, end, granularity):
        case Ok(report):
            banner(f"Sales {start} → {end} by {granularity.value}")
            print("  ┌────────────┬────────────┬───────┬────────────┐")
            print("  │ period     │      total │ sales │    average │")
            print("  ├────────────┼────────────┼───────┼────────────┤")
            for b in report.buckets:
                print(f"  │ {b.key:10} │ {b.total:>10.2f} │ {b.count:>5} │ {b.average:>10} │")
            print("  └────────────┴────────────┴───────┴────────────┘")
            if report.skipped:
                print(f"  ⚠ {report.skipped} sale(s) without a readable date left out")
        case Error(e):
            print(f"  ✗ Report failed: {e}")
            if reports.last_report is not None:
                print("  (showing nothing new; last report is still available)")


async def cmd_dashboard(store: RemoteStore, settings: Settings) -> None:
    match await load_dashboard(store, date.today(), settings.low_stock_threshold_lb):
        case Ok(summary):
            print(f"""
┌──────────────────────────────────────────────────────────┐
│  DASHBOARD {summary.day.isoformat():46} │
├──────────────────────────────────────────────────────────┤
│  Sales today:     {summary.totals.sale_count:<39} │
│  Amount today:    ${summary.totals.amount:<38} │
│  Active products: {summary.active_products:<39} │
├──────────────────────────────────────────────────────────┤
│  Low stock:                                               │""")
            for p in summary.low_stock:
                print(f"│    ⚠ {p.name:30} {p.stock_lb:>8} lb          │")
            if not summary.low_stock:
                print("│    none                                                  │")
            print("└──────────────────────────────────────────────────────────┘")
        case Error(e):
            print(f"  ✗ Dashboard failed: {e}")


# ═══════════════════════════════════════════════════════════════════════════════
# Main Loop
# ═══════════════════════════════════════════════════════════════════════════════

BANNER = """
╔════════════════════════════════════════════════════════════════════════════╗
║                         LONJA — FISH COUNTER POS                            ║
╠════════════════════════════════════════════════════════════════════════════╣
║  Products sell by the pound, combos by the unit.                            ║
║  Stock is checked against the store on every add and again at checkout.     ║
║  The cart total is an estimate; the recorded sale carries the real total.   ║
╚════════════════════════════════════════════════════════════════════════════╝
"""


async def run_cli(store: RemoteStore, settings: Settings) -> None:
    session = SaleSession(store, settings)
    reports = ReportService(store)

    print(BANNER)
    match await session.open():
        case Ok(_):
            pass
        case Error(e):
            print(f"  ✗ Could not load the catalog: {e}")
            return
    print_help()
    print_products(session)

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            break

        if not line:
            continue

        cmd, _, rest = line.partition(" ")
        args = rest.split()

        match cmd.lower():
            case "quit" | "exit" | "q":
                print("Bye!")
                break

            case "help" | "h" | "?":
                print_help()

            case "products":
                print_products(session)

            case "combos":
                print_combos(session)

            case "add":
                await cmd_add(session, args)

            case "remove":
                try:
                    index = int(args[0]) - 1
                except (IndexError, ValueError):
                    print("  Usage: remove <line>")
                    continue
                match session.remove(index):
                    case Ok(removed):
                        print(f"  ✓ Removed {removed.item.name}")
                    case Error(e):
                        print(f"  ✗ {e.message}")

            case "cart":
                print_cart(session)

            case "customer":
                session.cart.customer = rest.strip()
                print(f"  ✓ Customer: {session.cart.customer or '—'}")

            case "notes":
                session.cart.notes = rest.strip()
                print("  ✓ Notes set")

            case "checkout":
                await cmd_checkout(session)

            case "cancel":
                if session.cancel():
                    print("  ✓ Sale cancelled")
                else:
                    print("  ✗ A checkout is in progress")

            case "report":
                await cmd_report(reports, args)

            case "dashboard":
                await cmd_dashboard(store, settings)

            case _:
                print(f"  ✗ Unknown command: {cmd}")
                print("  Type 'help' for available commands.")
