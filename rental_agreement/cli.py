"""CLI for the rental agreement service: create tables, inspect a property, run the API."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys


async def cmd_init_db(args):
    """Create all tables on the configured database."""
    from rental_agreement.config import get_settings
    from rental_agreement.db.engine import create_tables, engine

    await create_tables()
    await engine.dispose()
    print(f"Tables created on {get_settings().database_url}")


async def cmd_show_property(args):
    """Print the requests and contracts recorded for a property."""
    from rental_agreement.db.engine import async_session_factory, engine
    from rental_agreement.db import crud
    from rental_agreement.services import request_lifecycle

    async with async_session_factory() as db:
        requests = await request_lifecycle.list_for_property(db, args.property_id)
        print(f"Property {args.property_id}: {len(requests)} request(s)")
        for req in requests:
            contract = await crud.find_contract_by_request(db, req.id)
            line = f"  {req.id}  tenant={req.tenant_id}  {req.status.value}"
            if contract:
                line += f"  contract={contract.id} ({contract.state.value})"
            print(line)
    await engine.dispose()


def cmd_serve(args):
    import uvicorn

    uvicorn.run("rental_agreement.main:app", host=args.host, port=args.port, reload=args.reload)


def main():
    from rental_agreement.config import get_settings

    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="Rental agreement service CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init-db", help="Create database tables")

    sp = subparsers.add_parser("show-property", help="List requests and contracts for a property")
    sp.add_argument("property_id", type=int)

    sv = subparsers.add_parser("serve", help="Run the HTTP API")
    sv.add_argument("--host", default="127.0.0.1")
    sv.add_argument("--port", type=int, default=8000)
    sv.add_argument("--reload", action="store_true")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "show-property":
        asyncio.run(cmd_show_property(args))
    elif args.command == "serve":
        cmd_serve(args)


if __name__ == "__main__":
    main()
