#!/usr/bin/env python
"""
Create the schema and seed the clinic's roles and demo users.

Scenarios:
- roles: Create the standard roles with their permissions
- full: Create the standard roles and the demo users

Usage:
    python scripts/seed.py                    # Run roles scenario
    python scripts/seed.py --scenario full    # Also create demo users
"""

import argparse
import asyncio

from medihub.core.database import (
    async_engine,
    async_session_factory,
    commit,
    init_models,
)
from medihub.seeding import DEMO_PASSWORD, seed_roles, seed_users


async def run(scenario: str) -> None:
    await init_models()

    async with async_session_factory() as session:
        roles = await seed_roles(session)
        print(f"✓ Roles created: {', '.join(roles) or 'none (already seeded)'}")

        if scenario == "full":
            users = await seed_users(session)
            print(f"✓ Users created: {', '.join(users) or 'none (already seeded)'}")
            print(f"\n📝 Demo password for every user: {DEMO_PASSWORD}")

        await commit(session)

    await async_engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the MediHub database")
    parser.add_argument(
        "--scenario",
        choices=["roles", "full"],
        default="roles",
        help="Seeding scenario to run (default: roles)",
    )
    args = parser.parse_args()
    asyncio.run(run(args.scenario))


if __name__ == "__main__":
    main()
