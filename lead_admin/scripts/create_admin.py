"""CLI entrypoint for bootstrapping the first super_admin account.

Usage:
    python -m lead_admin.scripts.create_admin
    python -m lead_admin.scripts.create_admin admin admin@company.com 's3cret!'
"""

import argparse
import asyncio
import logging
import sys

from sqlmodel import SQLModel

from lead_admin.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from lead_admin.app.use_cases.users import CreateUserCommand, CreateUserUseCase
from lead_admin.depends import AsyncSessionLocal, engine
from lead_admin.domain.entities import UserRole

logger = logging.getLogger(__name__)


async def main(username: str, email: str, password: str) -> int:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSessionLocal() as session:
        result = await CreateUserUseCase(SqlAlchemyUnitOfWork(session)).execute(
            CreateUserCommand(
                username=username,
                email=email,
                password=password,
                role=UserRole.super_admin,
            )
        )

    await engine.dispose()

    if result.is_err():
        logger.error(f"Could not create admin user: {result.error.message}")
        return 1

    user = result.value
    logger.info(f"Admin user created: id={user.id} username={user.username} role={user.role.value}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    parser = argparse.ArgumentParser(description="Create a super_admin user")
    parser.add_argument("username", nargs="?", default="admin")
    parser.add_argument("email", nargs="?", default="admin@company.com")
    parser.add_argument("password", nargs="?", default="admin123")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.username, args.email, args.password)))
