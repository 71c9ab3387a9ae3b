#!/usr/bin/env python3
"""
Run a load → search → add → update-quantity → remove session against the
in-memory dev service and print each stage to the terminal.

The HTTP clients talk to the dev FastAPI app through httpx's ASGI transport,
so no server process is needed.

Usage (from repo root):
  python scripts/run_storefront_demo.py
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from storefront.api.dev_server import DEFAULT_TOKENS, create_app
from storefront.integrations.clients.real_http import HttpCartClient, HttpCatalogClient
from storefront.integrations.contracts.interfaces import SessionAuth
from storefront.orchestrator import CatalogCartOrchestrator


def setup_logging():
    """Log to terminal at INFO so every stage is visible."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def print_stage(title: str, data: dict | list | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)
    print()


def print_notice(notice):
    print(f"  [{notice.variant.value.upper()}] {notice.message}")


async def main():
    setup_logging()
    app = create_app()
    transport = httpx.ASGITransport(app=app)
    base_url = "http://storefront.dev"

    async with httpx.AsyncClient(transport=transport, base_url=base_url) as http:
        engine = CatalogCartOrchestrator(
            HttpCatalogClient(base_url=base_url, client=http),
            HttpCartClient(base_url=base_url, client=http),
            SessionAuth(token=DEFAULT_TOKENS[0], username="crio.do"),
            debounce_ms=200,
        )
        engine.notices.listener = print_notice

        await engine.load()
        print_stage("LOAD: catalog", [asdict(p) for p in engine.products])

        # Simulate fast typing; only the last query is sent.
        for text in ("b", "ba", "bas"):
            engine.on_search_input(text)
        await engine.debouncer.join()
        print_stage("SEARCH 'bas'", [p.name for p in engine.products])

        engine.on_search_input("nonexistent")
        await engine.debouncer.join()
        print_stage("SEARCH 'nonexistent'", [p.name for p in engine.products])

        first = engine.catalog[0].id
        await engine.add_to_cart(first)
        await engine.add_to_cart(first)
        await engine.increment(first)
        print_stage("CART", [asdict(e) for e in engine.cart_items])
        print_stage("ORDER SUMMARY", asdict(engine.order_summary()))

        second = engine.catalog[1].id
        await engine.add_to_cart(second)
        await engine.remove_from_cart(first)
        print_stage("CART after removing the first product", [asdict(e) for e in engine.cart_items])

        engine.logout()
        await engine.add_to_cart(first)
        print_stage("AFTER LOGOUT", asdict(engine.view()))
        engine.close()


if __name__ == "__main__":
    asyncio.run(main())
