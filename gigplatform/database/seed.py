"""
Gig Platform Seeder Script

- Seeds gig categories and locations (skips names that already exist)
- Ensures the super admin account exists and prints a development access token
- With --demo, adds fake clients and service providers via Faker, half of them approved

Run with: python -m gigplatform.database.seed [--demo]
"""

import argparse
import random
from uuid import uuid4

from faker import Faker
from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session

from gigplatform.catalog.models import Category, Location
from gigplatform.core.config import settings
from gigplatform.core.tokens import create_access_token
from gigplatform.database.enums import UserRole, VerificationStatus
from gigplatform.database.models import Account
from gigplatform.verification.models import ClientProfile, ProviderProfile

# -------------------------------------------------------
# Reference data
# -------------------------------------------------------
CATEGORIES = {
    "CCTV Repair": "Installation, maintenance and repair of CCTV cameras and recorders",
    "Network Installation": "Cabling, router and access point setup for homes and offices",
    "Network Troubleshooting": "Diagnosing and fixing connectivity and performance problems",
    "Computer Repair": "Hardware and software repair for desktops and laptops",
}

LOCATIONS = ["New York", "Los Angeles", "Chicago", "Houston", "Phoenix"]

SKILLS = ["cctv", "cabling", "routers", "firewalls", "windows", "linux", "hardware", "wifi"]

NUM_DEMO_CLIENTS = 5
NUM_DEMO_PROVIDERS = 5


class Seeder:
    def __init__(self) -> None:
        self.faker = Faker()
        self.sync_engine = self._get_sync_engine()
        self.db: Session = Session(bind=self.sync_engine)

    def _get_sync_engine(self) -> Engine:
        """Creates the synchronous engine for the database."""
        raw_url = settings.DATABASE_URL
        print(f"🔍 Using DATABASE URL: {raw_url}")
        sync_url = raw_url.replace("postgresql+asyncpg", "postgresql+psycopg2").replace(
            "sqlite+aiosqlite", "sqlite"
        )
        print(f"🔁 Converted to sync URL: {sync_url}")
        return create_engine(sync_url)

    def seed_categories(self) -> None:
        print("🗂️ Seeding categories...")
        existing = set(self.db.scalars(select(Category.name)))
        for name, description in CATEGORIES.items():
            if name not in existing:
                self.db.add(Category(id=uuid4(), name=name, description=description))
        self.db.commit()
        print("✅ Categories seeded.\n")

    def seed_locations(self) -> None:
        print("📍 Seeding locations...")
        existing = set(self.db.scalars(select(Location.name)))
        for name in LOCATIONS:
            if name not in existing:
                self.db.add(Location(id=uuid4(), name=name))
        self.db.commit()
        print("✅ Locations seeded.\n")

    def seed_super_admin(self) -> Account:
        print("👤 Ensuring super admin exists...")
        admin = self.db.scalar(select(Account).where(Account.email == settings.SUPER_ADMIN_EMAIL))
        if admin is None:
            admin = Account(
                id=uuid4(),
                username=settings.SUPER_ADMIN_USERNAME,
                email=str(settings.SUPER_ADMIN_EMAIL),
                role=UserRole.SUPER_ADMIN,
                is_active=True,
            )
            self.db.add(admin)
            self.db.commit()
            print(f"✅ Super admin created: {admin.email}\n")
        else:
            print(f"ℹ️ Super admin already present: {admin.email}\n")
        return admin

    def seed_demo_accounts(self) -> None:
        print(f"👥 Seeding {NUM_DEMO_CLIENTS} client(s) and {NUM_DEMO_PROVIDERS} provider(s)...")
        for i in range(NUM_DEMO_CLIENTS):
            account = Account(
                id=uuid4(),
                username=f"client_{self.faker.user_name()}_{i}",
                email=f"client{random.randint(1000, 9999)}_{i}@example.com",
                role=UserRole.CLIENT,
                is_active=True,
            )
            account.client_profile = ClientProfile(
                contact_name=self.faker.name(),
                company_name=self.faker.company(),
                location=random.choice(LOCATIONS),
                phone=self.faker.msisdn()[:11],
                verification_status=(
                    VerificationStatus.APPROVED if i % 2 == 0 else VerificationStatus.PENDING
                ),
            )
            self.db.add(account)

        for i in range(NUM_DEMO_PROVIDERS):
            account = Account(
                id=uuid4(),
                username=f"provider_{self.faker.user_name()}_{i}",
                email=f"provider{random.randint(1000, 9999)}_{i}@example.com",
                role=UserRole.SERVICE_PROVIDER,
                is_active=True,
            )
            account.provider_profile = ProviderProfile(
                full_name=self.faker.name(),
                location=random.choice(LOCATIONS),
                skills=random.sample(SKILLS, k=3),
                experience=f"{random.randint(1, 15)} years",
                availability=random.choice(["Weekdays", "Weekends", "Evenings", "Full time"]),
                bio=self.faker.paragraph(nb_sentences=2),
                phone=self.faker.msisdn()[:11],
                verification_status=(
                    VerificationStatus.APPROVED if i % 2 == 0 else VerificationStatus.PENDING
                ),
            )
            self.db.add(account)
        self.db.commit()
        print("✅ Demo accounts seeded.\n")

    def run_all(self, demo: bool = False) -> None:
        """Runs all seeding steps in order."""
        self.seed_categories()
        self.seed_locations()
        admin = self.seed_super_admin()
        if demo:
            self.seed_demo_accounts()
        print("🎉 Seeding completed successfully!")
        token = create_access_token(admin.id, admin.role)
        print(f"🔑 Development access token for {admin.username}:\n{token}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed reference data and the super admin.")
    parser.add_argument("--demo", action="store_true", help="also create fake clients and providers")
    args = parser.parse_args()

    seeder = Seeder()
    try:
        seeder.run_all(demo=args.demo)
    except Exception as e:
        print(f"\n❌ Seeding failed: {e}")
        import traceback

        traceback.print_exc()
    finally:
        if seeder.db:
            seeder.db.close()
            print("🔒 Database session closed.")
