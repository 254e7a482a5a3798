"""Seed idempotent demo data for local/non-production environments."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from juvo.core.config import get_settings
from juvo.core.database import db
from juvo.core.enums import AccountTypeEnum
from juvo.core.security import create_access_token, hash_password, verify_password
from juvo.modules.catalog.models import CatalogItem
from juvo.modules.identity.models import User
from juvo.modules.identity.repository import IdentityRepository

DEMO_PASSWORD = "DemoPass123!"

DEMO_MEMBER_EMAIL = "demo-member@juvo.dev"
DEMO_HELPER_EMAIL = "demo-helper@juvo.dev"
DEMO_CHEF_EMAIL = "demo-chef@juvo.dev"

DEMO_CATALOG = (
    (DEMO_HELPER_EMAIL, "Deep home cleaning", 5000, ["cleaning", "home"]),
    (DEMO_CHEF_EMAIL, "Dinner for four", 12000, ["cooking", "dinner"]),
)


@dataclass(slots=True)
class SeedStats:
    users_created: int = 0
    users_updated: int = 0
    catalog_items_created: int = 0
    tokens: dict[str, str] = field(default_factory=dict)


async def _ensure_user(
    session: AsyncSession,
    *,
    email: str,
    account_type: AccountTypeEnum,
) -> tuple[User, bool]:
    user = await IdentityRepository(session).get_user_by_email(email)
    is_worker = account_type != AccountTypeEnum.MEMBER
    created = False
    if user is None:
        user = User(
            email=email,
            username=email.split("@", 1)[0],
            password_hash=hash_password(DEMO_PASSWORD),
            location="Demo City",
            account_type=account_type,
            is_active=True,
            is_verified=is_worker,
            profile_completed=is_worker,
        )
        session.add(user)
        created = True
    else:
        if not verify_password(DEMO_PASSWORD, user.password_hash):
            user.password_hash = hash_password(DEMO_PASSWORD)
        user.account_type = account_type
        user.is_active = True
        if is_worker:
            user.is_verified = True
            user.profile_completed = True

    await session.flush()
    return user, created


async def _ensure_catalog_item(
    session: AsyncSession,
    *,
    provider: User,
    title: str,
    price_cents: int,
    tags: list[str],
) -> bool:
    existing = await session.scalar(
        select(CatalogItem).where(
            CatalogItem.provider_id == provider.id,
            CatalogItem.title == title,
        ),
    )
    if existing is not None:
        existing.price_cents = price_cents
        existing.tags = tags
        await session.flush()
        return False

    session.add(
        CatalogItem(
            title=title,
            description=f"{title} (demo offering)",
            price_cents=price_cents,
            provider_id=provider.id,
            tags=tags,
        ),
    )
    await session.flush()
    return True


async def _run_seed(*, allow_production: bool) -> SeedStats:
    settings = get_settings()
    if settings.is_production and not allow_production:
        raise RuntimeError(
            "Refusing to seed demo data in production. "
            "Re-run with --allow-production only if you are absolutely sure.",
        )

    stats = SeedStats()
    db.init(settings.database_url, echo=settings.database_echo, pool_size=settings.database_pool_size)

    async with db.session() as session:
        try:
            users: dict[str, User] = {}
            for email, account_type in (
                (DEMO_MEMBER_EMAIL, AccountTypeEnum.MEMBER),
                (DEMO_HELPER_EMAIL, AccountTypeEnum.HELPER),
                (DEMO_CHEF_EMAIL, AccountTypeEnum.CHEF),
            ):
                user, created = await _ensure_user(session, email=email, account_type=account_type)
                users[email] = user
                if created:
                    stats.users_created += 1
                else:
                    stats.users_updated += 1

            for email, title, price_cents, tags in DEMO_CATALOG:
                if await _ensure_catalog_item(
                    session,
                    provider=users[email],
                    title=title,
                    price_cents=price_cents,
                    tags=tags,
                ):
                    stats.catalog_items_created += 1

            await session.commit()
        except Exception:
            await session.rollback()
            raise

    stats.tokens = {email: create_access_token(str(user.id)) for email, user in users.items()}
    return stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Seed idempotent demo data for JUVO (member, helper, chef, catalog items).",
    )
    parser.add_argument(
        "--allow-production",
        action="store_true",
        help="Allow seeding even when APP_ENV is production/prod.",
    )
    return parser


def _print_summary(stats: SeedStats) -> None:
    print("Demo seed completed.")
    print(f"- Users created: {stats.users_created}")
    print(f"- Users updated: {stats.users_updated}")
    print(f"- Catalog items created: {stats.catalog_items_created}")
    print("")
    print(f"Demo credentials (non-production only, password {DEMO_PASSWORD}):")
    for email, token in stats.tokens.items():
        print(f"- {email}")
        print(f"  Bearer {token}")


async def _seed_and_close(*, allow_production: bool) -> SeedStats:
    try:
        return await _run_seed(allow_production=allow_production)
    finally:
        await db.dispose()


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    try:
        stats = asyncio.run(_seed_and_close(allow_production=args.allow_production))
    except Exception as exc:
        print(f"Demo seed failed: {exc}")
        return 1

    _print_summary(stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
