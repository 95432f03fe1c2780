#!/usr/bin/env python3
"""
Demo Seeder: creates a small kindergarten to click around in.

One organization, facility and group; a parent, a teacher and an admin
(all with password "demo123"); two children with health records, a
day of activities, an invoice and a chat thread.

Usage:
    python scripts/seed_demo.py                 # Seed the configured database
    python scripts/seed_demo.py --reset         # Drop and recreate all tables first
    python scripts/seed_demo.py --db-url=sqlite+aiosqlite:///demo.db
"""

import argparse
import asyncio
import sys
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kinderportal.auth import hash_password
from kinderportal.config import settings
from kinderportal.core.database import Database
from kinderportal.core.models import (
    ActivityType,
    AdditionalService,
    AllergySeverity,
    ChatParticipant,
    ChatThread,
    Child,
    ChildAllergy,
    ChildDocument,
    ChildHealth,
    ChildMedication,
    ChildParent,
    DailyActivity,
    DocumentStatus,
    DocumentType,
    Event,
    ExtraClass,
    ExtraClassAttendance,
    ExtraClassEnrollment,
    ExtraClassPerformance,
    Facility,
    Group,
    Invoice,
    InvoiceStatus,
    Message,
    Notification,
    NotificationType,
    Organization,
    Role,
    Staff,
    StaffGroupAssignment,
    Subscription,
    ThreadType,
    TrustedContact,
    User,
    UserRole,
)

DEMO_PASSWORD = "demo123"


class DemoSeeder:
    """Inserts the demo data set in dependency order."""

    def __init__(self, database: Database):
        self.database = database

    async def reset(self) -> None:
        await self.database.drop_all()
        print("⚠️  Dropped all tables")

    async def create_tables(self) -> None:
        await self.database.create_all()
        print("✅ Database tables created/verified")

    async def already_seeded(self) -> bool:
        async with self.database.session() as session:
            result = await session.execute(
                select(User.id).where(User.email == "parent@demo.kz").limit(1)
            )
            return result.scalar_one_or_none() is not None

    async def seed(self) -> None:
        async with self.database.session() as session:
            group = await self._structure(session)
            parent, teacher, _admin = await self._users(session, group)
            first, _second = await self._children(session, group, parent)
            await self._daily_records(session, first, teacher)
            await self._billing(session, group.facility_id, first)
            await self._engagement(session, group, parent, teacher, first)
            await session.commit()
        print("✅ Demo data committed")

    async def _structure(self, session: AsyncSession) -> Group:
        organization = Organization(
            name='Детский сад "Балдырған"', description="Сеть детских садов в Алматы"
        )
        facility = Facility(
            organization=organization,
            name='Детский сад "Балдырған" - Филиал №1',
            address="пр. Абая, 150, Алматы",
            phone="+7 727 123 4567",
        )
        group = Group(
            facility=facility, name='Средняя группа "Солнышко"', age_range="4-5", capacity=25
        )
        session.add_all([organization, facility, group])
        await session.flush()
        print("✅ Created organization, facility and group")
        return group

    async def _users(self, session: AsyncSession, group: Group) -> tuple[User, User, User]:
        password_hash = hash_password(DEMO_PASSWORD)

        def make_user(email: str, first: str, last: str, role: Role) -> User:
            user = User(
                email=email,
                password_hash=password_hash,
                first_name=first,
                last_name=last,
                current_role=role,
            )
            user.role_assignments.append(UserRole(role=role))
            return user

        parent = make_user("parent@demo.kz", "Алия", "Сейтова", Role.PARENT)
        teacher = make_user("teacher@demo.kz", "Гульнара", "Жаксыбекова", Role.TEACHER)
        admin = make_user("admin@demo.kz", "Ерлан", "Абенов", Role.ADMIN)
        session.add_all([parent, teacher, admin])
        await session.flush()

        staff = Staff(
            user_id=teacher.id,
            facility_id=group.facility_id,
            position="teacher",
            phone="+7 777 234 5678",
        )
        session.add(staff)
        await session.flush()
        session.add(StaffGroupAssignment(staff_id=staff.id, group_id=group.id, is_primary=True))

        print(f"✅ Created demo users (password: {DEMO_PASSWORD})")
        return parent, teacher, admin

    async def _children(
        self, session: AsyncSession, group: Group, parent: User
    ) -> tuple[Child, Child]:
        first = Child(
            group_id=group.id,
            first_name="Айнур",
            last_name="Сейтова",
            date_of_birth=date(2019, 3, 15),
            enrollment_date=date(2023, 9, 1),
        )
        second = Child(
            group_id=group.id,
            first_name="Данияр",
            last_name="Касымов",
            date_of_birth=date(2019, 7, 22),
            enrollment_date=date(2023, 9, 1),
        )
        session.add_all([first, second])
        await session.flush()

        session.add(
            ChildParent(
                child_id=first.id,
                parent_user_id=parent.id,
                relationship_type="mother",
                is_primary=True,
            )
        )
        session.add_all(
            [
                ChildHealth(
                    child_id=first.id,
                    blood_type="A+",
                    diet_restrictions="Без орехов",
                    emergency_contact_name="Нурлан Сейтов",
                    emergency_contact_phone="+7 777 999 8888",
                    emergency_contact_relationship="father",
                ),
                ChildAllergy(
                    child_id=first.id,
                    allergen="Арахис",
                    severity=AllergySeverity.SEVERE,
                    protocol="Эпипен в аптечке группы",
                ),
                ChildMedication(
                    child_id=first.id,
                    medication_name="Витамин D",
                    dosage="1 капля",
                    frequency="daily",
                    administration_time="09:00",
                ),
                ChildDocument(
                    child_id=first.id,
                    document_type=DocumentType.MEDICAL_CERTIFICATE,
                    title="Медицинская справка",
                    file_url="/documents/medical-1.pdf",
                    status=DocumentStatus.VALID,
                    issue_date=date(2024, 8, 15),
                    expiry_date=date(2025, 8, 15),
                ),
            ]
        )
        print("✅ Created demo children")
        return first, second

    async def _daily_records(self, session: AsyncSession, child: Child, teacher: User) -> None:
        today = datetime.now(UTC).replace(hour=0, minute=0, second=0, microsecond=0)
        entries = [
            (ActivityType.MEAL, 8, {"appetite": 90, "description": "Каша, чай"}),
            (ActivityType.ACTIVITY, 10, {"description": "Рисование"}),
            (ActivityType.MEAL, 12, {"appetite": 75, "description": "Суп, котлета"}),
            (ActivityType.SLEEP, 13, {"duration": 90}),
            (ActivityType.MOOD, 16, {"description": "Весёлая"}),
        ]
        session.add_all(
            DailyActivity(
                child_id=child.id,
                date=today.date(),
                activity_type=activity_type,
                time=today + timedelta(hours=hour),
                recorded_by=teacher.id,
                **details,
            )
            for activity_type, hour, details in entries
        )
        print(f"✅ Recorded {len(entries)} activities")

    async def _billing(self, session: AsyncSession, facility_id: int, child: Child) -> None:
        session.add_all(
            [
                Invoice(
                    child_id=child.id,
                    invoice_number="INV-2024-001",
                    amount=Decimal("85000.00"),
                    status=InvoiceStatus.PENDING,
                    due_date=date(2024, 11, 15),
                    description="Ежемесячная оплата - Ноябрь 2024",
                ),
                Subscription(
                    child_id=child.id,
                    plan_name="Полный день",
                    monthly_amount=Decimal("85000.00"),
                    next_billing_date=date(2024, 12, 1),
                ),
                AdditionalService(
                    facility_id=facility_id,
                    name="Английский язык",
                    description="Занятия по английскому языку для детей 4-6 лет",
                    price=Decimal("15000.00"),
                    age_min=4,
                    age_max=6,
                    days_of_week=[1, 3, 5],
                    max_participants=10,
                ),
            ]
        )
        print("✅ Created invoice, subscription and services")

    async def _engagement(
        self, session: AsyncSession, group: Group, parent: User, teacher: User, child: Child
    ) -> None:
        thread = ChatThread(
            type=ThreadType.DIRECT, group_id=group.id, title="Воспитатель Гульнара"
        )
        thread.participants.extend(
            [ChatParticipant(user_id=parent.id), ChatParticipant(user_id=teacher.id)]
        )
        thread.messages.append(
            Message(
                sender_id=teacher.id,
                content="Добрый день! Сегодня у нас было занятие по рисованию.",
            )
        )
        extra_class = ExtraClass(
            facility_id=group.facility_id,
            name="Шахматы",
            instructor="Марат Оспанов",
            schedule="Вт/Чт 16:00",
            price=Decimal("12000.00"),
        )
        enrollment = ExtraClassEnrollment(child_id=child.id)
        extra_class.enrollments.append(enrollment)
        session.add_all([thread, extra_class])
        await session.flush()

        last_lesson = date.today() - timedelta(days=2)
        session.add_all(
            [
                ExtraClassAttendance(enrollment_id=enrollment.id, date=last_lesson),
                ExtraClassPerformance(
                    enrollment_id=enrollment.id,
                    date=last_lesson,
                    rating=4,
                    comment="Уверенно решает задачи в два хода",
                    recorded_by=teacher.id,
                ),
                Notification(
                    user_id=parent.id,
                    type=NotificationType.MESSAGE,
                    title="Новое сообщение",
                    message="Воспитатель Гульнара отправила сообщение",
                    related_id=thread.id,
                ),
                Event(
                    facility_id=group.facility_id,
                    title="Осенний утренник",
                    start_date=datetime.now(UTC) + timedelta(days=7),
                    location="Музыкальный зал",
                ),
                TrustedContact(
                    parent_user_id=parent.id,
                    child_id=child.id,
                    full_name="Сейтов Нурлан",
                    relationship_type="father",
                    phone="+7 777 999 8888",
                ),
            ]
        )
        print("✅ Created chat, extra class with lesson records, notifications and contacts")


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed KinderPortal with demo data")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop and recreate all tables before seeding",
    )
    parser.add_argument(
        "--db-url",
        type=str,
        help="Custom database URL (default from settings)",
    )
    args = parser.parse_args()

    db_url = args.db_url or settings.DATABASE_URL

    print("🚀 KinderPortal Demo Seeder")
    print(f"🗄️  Database: {db_url.split('@')[1] if '@' in db_url else db_url}\n")

    database = Database(db_url)
    seeder = DemoSeeder(database)

    try:
        if args.reset:
            await seeder.reset()

        await seeder.create_tables()

        if await seeder.already_seeded():
            print("ℹ️  Demo data already present, nothing to do (use --reset to start over)")
            return

        await seeder.seed()

        print("\n✅ Seed complete!")

    except Exception as e:
        print(f"\n❌ Error: {e}")
        raise
    finally:
        await database.close()


if __name__ == "__main__":
    asyncio.run(main())
