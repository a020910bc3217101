"""Seed idempotent demo marketplace data for local/non-production environments."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import close_engine, session_scope
from app.core.enums import ServiceTypeEnum
from app.core.security import create_access_token
from app.modules.experts.models import ExpertCategory, ExpertCategoryAssociation, ExpertService
from app.modules.identity.models import Profile

DEMO_CLIENT_USER_ID = "demo-client"
DEMO_EXPERT_USER_ID = "demo-expert"
DEMO_ADMIN_USER_ID = "demo-admin"

DEMO_CATEGORIES = (
    ("Fitness", 1),
    ("Business", 2),
    ("Creative", 3),
)

DEMO_SERVICES = (
    ("Quick call", ServiceTypeEnum.THIRTY_MINUTES, Decimal("40.00")),
    ("Deep dive", ServiceTypeEnum.ONE_HOUR, Decimal("75.00")),
    ("Week of chat access", ServiceTypeEnum.ONE_WEEK, Decimal("100.00")),
    ("Monthly mentorship", ServiceTypeEnum.ONE_MONTH, Decimal("300.00")),
)


@dataclass(slots=True)
class SeedStats:
    profiles_created: int = 0
    categories_created: int = 0
    services_created: int = 0
    tokens: dict[str, str] = field(default_factory=dict)


async def _ensure_profile(
    session: AsyncSession,
    *,
    user_id: str,
    first_name: str,
    last_name: str,
    is_expert: bool = False,
    is_admin: bool = False,
) -> tuple[Profile, bool]:
    profile = await session.scalar(select(Profile).where(Profile.user_id == user_id))
    created = profile is None
    if profile is None:
        profile = Profile(user_id=user_id, email=f"{user_id}@expertbooking.dev")
        session.add(profile)

    profile.first_name = first_name
    profile.last_name = last_name
    profile.is_expert = is_expert
    profile.is_admin = is_admin
    if is_expert:
        profile.bio = "Demo expert for local marketplace scenarios."
        profile.expert_rank = 1
        profile.starting_price = DEMO_SERVICES[0][2]
    await session.flush()
    return profile, created


async def _ensure_categories(session: AsyncSession, expert: Profile) -> int:
    created = 0
    for name, sort_order in DEMO_CATEGORIES:
        category = await session.scalar(select(ExpertCategory).where(ExpertCategory.name == name))
        if category is None:
            category = ExpertCategory(name=name, sort_order=sort_order)
            session.add(category)
            await session.flush()
            created += 1

        association = await session.scalar(
            select(ExpertCategoryAssociation).where(
                ExpertCategoryAssociation.expert_id == expert.id,
                ExpertCategoryAssociation.category_id == category.id,
            ),
        )
        if association is None:
            session.add(ExpertCategoryAssociation(expert_id=expert.id, category_id=category.id))
    await session.flush()
    return created


async def _ensure_services(session: AsyncSession, expert: Profile) -> int:
    created = 0
    for title, service_type, price in DEMO_SERVICES:
        existing = await session.scalar(
            select(ExpertService).where(
                ExpertService.expert_id == expert.id,
                ExpertService.service_type == service_type,
            ),
        )
        if existing is not None:
            continue
        session.add(
            ExpertService(
                expert_id=expert.id,
                title=title,
                service_type=service_type,
                price=price,
                availability_slots=5,
            ),
        )
        created += 1
    await session.flush()
    return created


async def _run_seed(*, allow_production: bool) -> SeedStats:
    settings = get_settings()
    app_env = settings.app_env.strip().lower()
    if app_env in {"production", "prod"} and not allow_production:
        raise RuntimeError(
            "Refusing to seed demo data in production. "
            "Re-run with --allow-production only if you are absolutely sure.",
        )

    stats = SeedStats()
    async with session_scope() as session:
        _, client_created = await _ensure_profile(
            session,
            user_id=DEMO_CLIENT_USER_ID,
            first_name="Demo",
            last_name="Client",
        )
        expert, expert_created = await _ensure_profile(
            session,
            user_id=DEMO_EXPERT_USER_ID,
            first_name="Demo",
            last_name="Expert",
            is_expert=True,
        )
        _, admin_created = await _ensure_profile(
            session,
            user_id=DEMO_ADMIN_USER_ID,
            first_name="Demo",
            last_name="Admin",
            is_admin=True,
        )
        stats.profiles_created = sum([client_created, expert_created, admin_created])
        stats.categories_created = await _ensure_categories(session, expert)
        stats.services_created = await _ensure_services(session, expert)

    for user_id in (DEMO_CLIENT_USER_ID, DEMO_EXPERT_USER_ID, DEMO_ADMIN_USER_ID):
        stats.tokens[user_id] = create_access_token(subject=user_id)
    return stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Seed idempotent demo data (client, expert with all service types, admin).",
    )
    parser.add_argument(
        "--allow-production",
        action="store_true",
        help="Allow seeding even when APP_ENV is production/prod.",
    )
    return parser


def _print_summary(stats: SeedStats) -> None:
    print("Demo seed completed.")
    print(f"- Profiles created: {stats.profiles_created}")
    print(f"- Categories created: {stats.categories_created}")
    print(f"- Services created: {stats.services_created}")
    print("")
    print("Demo bearer tokens (non-production only):")
    for user_id, token in stats.tokens.items():
        print(f"- {user_id}: {token}")


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    try:
        stats = asyncio.run(_run_seed(allow_production=args.allow_production))
    except Exception as exc:
        print(f"Demo seed failed: {exc}")
        return 1
    finally:
        asyncio.run(close_engine())

    _print_summary(stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
