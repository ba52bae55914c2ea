#!/usr/bin/env python3
"""
Demo script showing the Hazel registry in action.
Run this to see how modules are registered, launched, run and shut down.
"""

import asyncio
import logging
import sys

from hazel import EXECUTOR, LAUNCHER, TERMINATOR, Registry

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def print_separator(title=""):
    """Print a visual separator."""
    if title:
        print(f"\n{'='*60}")
        print(f"  {title}")
        print(f"{'='*60}")
    else:
        print(f"{'='*60}\n")


def report_error(registry, error):
    """Error module executor: print instead of logging."""
    print(f"  ⚠️  {type(error).__name__}: {error}")


def open_database(registry):
    registry.config["connections"] = []
    print(f"  ✓ database: opened ({registry.setting('database.path')})")


async def warm_cache(registry):
    await asyncio.sleep(0.05)
    print("  ✓ cache: warmed (after database)")


def handle_request(registry, request):
    registry.config["connections"].append(request)
    return f"handled {request!r}"


def close_database(registry):
    print(f"  ✓ database: closed after {len(registry.config['connections'])} requests")


def demo_registration(registry):
    """Demo: Bind handlers to modules."""
    print_separator("Registration")

    registry.set("error", report_error)
    registry.set("database", open_database, {"type": LAUNCHER, "priority": 1})
    registry.set("database", close_database, {"type": TERMINATOR, "priority": 1})
    registry.set("cache", warm_cache, {"type": LAUNCHER, "priority": 2})
    registry.set("requests", handle_request)

    for info in registry.get_module_info():
        print(f"📦 {info['name']}")
        for handler_type, priority in info['priority'].items():
            print(f"    {handler_type!r} priority={priority}")


async def demo_lifecycle(registry):
    """Demo: Launch, run and terminate."""
    print_separator("Launch")
    await registry.traverse(LAUNCHER)

    print_separator("Run")
    for request in ["GET /", "GET /health"]:
        result = await registry.run("requests", EXECUTOR, request)
        print(f"  ✓ {result}")

    print_separator("Errors")
    print("Bad calls report through the error module:\n")
    registry.set(42, handle_request)
    await registry.run("missing")

    print_separator("Terminate")
    await registry.traverse(TERMINATOR)


def main():
    """Run all demos."""
    print("\n" + "="*60)
    print("  HAZEL MODULE REGISTRY DEMO")
    print("="*60)

    try:
        registry = Registry({"database": {"path": ":memory:"}})
        demo_registration(registry)
        asyncio.run(demo_lifecycle(registry))

        print_separator()
        print("✅ Demo completed successfully!")

    except Exception as e:
        logger.error(f"Demo failed: {e}", exc_info=True)
        print(f"\n❌ Demo failed: {e}\n")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
