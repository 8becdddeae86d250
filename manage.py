#!/usr/bin/env python3
"""
StockLedger management CLI.

Usage:
    python manage.py serve       Apply migrations and start the API server
    python manage.py migrate     Apply pending migrations
    python manage.py status      Show migration status
    python manage.py verify      Check schema integrity
    python manage.py reconcile   Compare stock levels with movement totals
"""

import argparse
import asyncio
import sys
from pathlib import Path


def cmd_serve(args: argparse.Namespace) -> None:
    """Start uvicorn; the app applies migrations on startup."""
    import uvicorn

    print(f"Starting server on {args.host}:{args.port}...")
    print(f"  API docs:  http://{args.host}:{args.port}/docs")
    uvicorn.run(
        "stockledger.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=None if args.reload else args.workers,
    )


def cmd_migrate(args: argparse.Namespace) -> None:
    from stockledger.infrastructure.storage.sqlite.migrations.migrator import run_migrations

    results = asyncio.run(run_migrations(args.db_path))
    if not results:
        print("Database is up to date.")
        return
    for r in results:
        state = "OK" if r.success else "FAILED"
        print(f"[{state}] {r.version}: {r.name} ({r.execution_time_ms}ms)")
        if r.error:
            print(f"       {r.error}")
    if not all(r.success for r in results):
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    from stockledger.infrastructure.storage.sqlite.migrations.migrator import get_migration_status

    status = asyncio.run(get_migration_status(args.db_path))
    print(f"Database exists: {status['exists']}")
    print(f"Current version: {status.get('current_version') or 'N/A'}")
    print(f"Applied migrations: {status.get('applied_migrations', [])}")
    print(f"Pending migrations: {status.get('pending_migrations', [])}")
    if status.get("drifted_migrations"):
        print(f"Drifted migrations: {status['drifted_migrations']}")


def cmd_verify(args: argparse.Namespace) -> None:
    from stockledger.infrastructure.storage.sqlite.migrations.migrator import (
        verify_schema_integrity,
    )

    checks = asyncio.run(verify_schema_integrity(args.db_path))
    failed = False
    for check in checks:
        print(f"[{check['status']}] {check['check']}")
        if check["status"] != "PASS":
            failed = True
            for key, value in check.items():
                if key not in ("check", "status"):
                    print(f"       {key}: {value}")
    if failed:
        sys.exit(1)


async def _reconcile():
    from stockledger.application.services import get_reconciler
    from stockledger.infrastructure.storage.sqlite import close_pool

    try:
        reconciler = await get_reconciler()
        return await reconciler.reconcile()
    finally:
        await close_pool()


def cmd_reconcile(args: argparse.Namespace) -> None:
    """Report SKUs whose stock level differs from their movement total."""
    report = asyncio.run(_reconcile())
    print(f"Checked {report.checked} SKUs.")
    if report.is_consistent:
        print("Ledger is consistent with the movement log.")
        return
    for drift in report.drifts:
        level = "missing" if drift.stock_level is None else f"{drift.stock_level:g}"
        print(
            f"  {drift.sku}: ledger={level} movements={drift.movement_total:g} "
            f"diff={drift.difference:+g}"
        )
    sys.exit(1)


def main() -> None:
    from stockledger.config import configure_logging

    configure_logging()

    parser = argparse.ArgumentParser(
        description="StockLedger management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    p_status.set_defaults(func=cmd_status)

    # verify
    p_verify = sub.add_parser("verify", help="Check schema integrity")
    p_verify.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    p_verify.set_defaults(func=cmd_verify)

    # reconcile
    p_reconcile = sub.add_parser("reconcile", help="Compare ledger with movement log")
    p_reconcile.set_defaults(func=cmd_reconcile)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
