"""Seed script for the leave management backend.

Populates the database with demo data:
- the default leave types (Casual, Sick, Earned)
- 6 users (1 admin, 1 manager, 4 employees), each with a full balance
  of every leave type
- a handful of leave requests (pending, approved and rejected)
- the company-wide system settings

Requests go through the same workflow as the API, so the seeded balances
already reflect them.

Usage:
    cd backend && python seed.py
"""

import asyncio
import sys
import os
from datetime import date

# Ensure the backend directory is on the path when running from backend/
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from leave_management.core.database import async_session_factory
from leave_management.core.enums import Role, SystemSettingKey
from leave_management.repositories import UnitOfWork
from leave_management.services.auth import AuthService
from leave_management.services.leave_types import LeaveTypeRegistry
from leave_management.services.leave_workflow import LeaveWorkflow
from leave_management.services.system_settings import SystemSettingsService
from leave_management.services.users import UserService


# ── Seed Data Definitions ────────────────────────────────────────────────────

DEMO_PASSWORD = "password123"

USERS_DATA = [
    {"role": Role.ADMIN, "name": "Sarah Chen", "email": "sarah.chen@acme.com"},
    {"role": Role.MANAGER, "name": "Michael Roberts", "email": "michael.roberts@acme.com"},
    {"role": Role.EMPLOYEE, "name": "Emily Johnson", "email": "emily.johnson@acme.com"},
    {"role": Role.EMPLOYEE, "name": "James Wilson", "email": "james.wilson@acme.com"},
    {"role": Role.EMPLOYEE, "name": "Priya Patel", "email": "priya.patel@acme.com"},
    {"role": Role.EMPLOYEE, "name": "David Kim", "email": "david.kim@acme.com"},
]

# (user index, leave type name, start, end, outcome, reason)
LEAVE_REQUESTS = [
    (2, "Casual Leave", date(2026, 11, 2), date(2026, 11, 4), "pending",
     "Family vacation"),
    (3, "Sick Leave", date(2026, 10, 12), date(2026, 10, 13), "approved",
     "Flu and fever"),
    (4, "Earned Leave", date(2026, 12, 21), date(2026, 12, 31), "pending",
     "Year-end holiday"),
    (5, "Casual Leave", date(2026, 10, 26), date(2026, 10, 27), "rejected",
     "Personal errands during release week"),
    (2, "Sick Leave", date(2026, 9, 8), date(2026, 9, 8), "approved",
     "Dental appointment"),
]

SYSTEM_SETTINGS = [
    (SystemSettingKey.COMPANY_NAME.value, "Acme Corporation"),
    (SystemSettingKey.LEAVE_YEAR_START_MONTH.value, "1"),
    (SystemSettingKey.MAX_CARRY_FORWARD_DAYS.value, "5"),
]


# ── Main Seed Function ────────────────────────────────────────────────────────

async def seed():
    """Seed the database with demo leave data."""
    async with async_session_factory() as db:
        uow = UnitOfWork(db)

        # 1. Check idempotency
        if await uow.users.get_by_email(USERS_DATA[0]["email"]):
            print("⚠️  Demo users already exist. Skipping seed.")
            print("   To re-seed, reset the database first.")
            return

        print("🌱 Starting database seed...\n")

        # 2. Leave types
        print("📦 Creating default leave types...")
        registry = LeaveTypeRegistry(uow)
        created = await registry.initialize_defaults()
        leave_types = {lt.name: lt for lt in await registry.list_all()}
        print(f"   ✅ {created} leave types created, {len(leave_types)} available")

        # 3. Users (registration creates their balances)
        print("\n👥 Creating users...")
        auth = AuthService(uow)
        users_service = UserService(uow)
        users = []
        for data in USERS_DATA:
            user = await auth.register(data["name"], data["email"], DEMO_PASSWORD)
            if data["role"] is not Role.EMPLOYEE:
                user = await users_service.update_role(user.id, data["role"].value)
            users.append(user)
            print(f"   ✅ {data['name']} ({data['role'].value})")

        manager = next(u for u in users if u.role == Role.MANAGER)

        # 4. Leave requests
        print("\n📝 Creating leave requests...")
        workflow = LeaveWorkflow(uow)
        for user_idx, type_name, start, end, outcome, reason in LEAVE_REQUESTS:
            leave_request = await workflow.apply(
                users[user_idx].id, leave_types[type_name].id, start, end, reason
            )
            if outcome == "approved":
                await workflow.approve(leave_request.id, manager.id)
            elif outcome == "rejected":
                await workflow.reject(leave_request.id, manager.id)
        print(f"   ✅ {len(LEAVE_REQUESTS)} leave requests created")

        # 5. System settings
        print("\n⚙️  Writing system settings...")
        await SystemSettingsService(uow).upsert(SYSTEM_SETTINGS)
        print(f"   ✅ {len(SYSTEM_SETTINGS)} settings written")

        print("\n" + "=" * 60)
        print("✅ Database seeding complete!")
        print("=" * 60)
        print(f"\n🔑 Login Credentials (all use password: {DEMO_PASSWORD}):")
        print(f"   {'Email':<35} {'Role':<15} {'Name'}")
        print(f"   {'-'*35} {'-'*15} {'-'*20}")
        for data in USERS_DATA:
            print(f"   {data['email']:<35} {data['role'].value:<15} {data['name']}")
        print()


# ── Entry Point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    print("=" * 60)
    print("🌱 Leave Management Seed Script")
    print("=" * 60)
    print()
    asyncio.run(seed())
