#!/usr/bin/env python3
"""
Seed the users and listings tables with a fixed demo dataset.

Features:
- Deterministic: same users, listings and timestamps every run
- Idempotent: safe to run multiple times (clears before seeding)
- Every demo user logs in with the password "password123"

Usage:
    python scripts/seed_listings.py
"""

from __future__ import annotations

import sys
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from campus_books.infra.db.models import ListingRow, UserRow
from campus_books.infra.db.session import get_session
from campus_books.infra.security import hash_password


# ==============================================================================
# Configuration
# ==============================================================================

DEMO_PASSWORD = "password123"
SEED_NAMESPACE = uuid.UUID("6f1c2b8e-4a57-4e0b-9d6e-2f4b7c1a9e30")
SEED_START = datetime(2026, 9, 1, 9, 0, tzinfo=timezone.utc)


# ==============================================================================
# Demo Data
# ==============================================================================

USERS = [
    ("admin@campus.edu", "Avery", "Admin", "admin"),
    ("jordan.lee@campus.edu", "Jordan", "Lee", "student"),
    ("priya.shah@campus.edu", "Priya", "Shah", "student"),
    ("marco.rossi@campus.edu", "Marco", "Rossi", "student"),
    ("hannah.kim@campus.edu", "Hannah", "Kim", "student"),
]

# (seller index, title, author, publish year, program, program year, price, condition, comments)
LISTINGS = [
    (2, "Organic Chemistry", "Paula Bruice", 2023, "Science", 2, "120.00", "Like New", "Clean, no writing"),
    (4, "Human Anatomy & Physiology", "Elaine Marieb", 2022, "Nursing", 1, "95.00", "Good", "Used for two semesters"),
    (1, "Data Structures and Algorithms", "Michael Goodrich", 2021, "Computer Science", 2, "75.00", "Fair", "Some wear on cover"),
    (3, "Financial Accounting", "Jerry Weygandt", 2023, "Business Administration", 1, "65.00", "New", "Access code unused"),
    (4, "Criminal Law", "Joel Samaha", 2022, "Criminal Justice", 2, "85.00", "Like New", "Highlighting in first 3 chapters only"),
    (2, "Physics for Scientists and Engineers", "Raymond Serway", 2022, "Engineering", 1, "110.00", "Good", "Includes study guide"),
    (1, "Operating System Concepts", "Abraham Silberschatz", 2021, "Computer Science", 3, "70.00", "Good", "Ninth edition"),
    (3, "Principles of Microeconomics", "N. Gregory Mankiw", 2023, "Business Administration", 1, "58.00", "New", "Sealed"),
    (4, "Introduction to Psychology", "James Kalat", 2023, "Social Sciences", 1, "52.00", "Like New", "Minimal highlighting"),
    (2, "Linear Algebra and Its Applications", "David Lay", 2022, "Mathematics", 2, "88.00", "Good", "Worked examples inside"),
    (1, "Networking Essentials", "Jeffrey Beasley", 2021, "Computer Science", 2, "62.00", "Fair", "Previous edition"),
    (3, "Strategic Management", "Fred David", 2022, "Business Administration", 3, "78.00", "Like New", "Case studies unmarked"),
    (4, "Introduction to Sociology", "Anthony Giddens", 2023, "Social Sciences", 1, "48.00", "Good", "Few pages bent"),
    (2, "Statics and Mechanics of Materials", "Ferdinand Beer", 2022, "Engineering", 2, "125.00", "Like New", "Comes with access"),
    (1, "Software Engineering", "Ian Sommerville", 2021, "Computer Science", 3, "68.00", "Good", "Tenth edition"),
    (4, "Medical-Surgical Nursing", "Donna Ignatavicius", 2022, "Nursing", 2, "98.00", "Good", "Heavy use but intact"),
]


# ==============================================================================
# Seed Generation
# ==============================================================================


def build_users() -> list[UserRow]:
    password_hash = hash_password(DEMO_PASSWORD)
    return [
        UserRow(
            id=uuid.uuid5(SEED_NAMESPACE, email),
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        for email, first_name, last_name, role in USERS
    ]


def build_listings(users: list[UserRow]) -> list[ListingRow]:
    rows = []
    for index, (seller, title, author, year, program, program_year, price, condition, comments) in enumerate(
        LISTINGS
    ):
        rows.append(
            ListingRow(
                id=uuid.uuid5(SEED_NAMESPACE, title),
                seller_id=users[seller].id,
                book_title=title,
                author=author,
                publish_year=year,
                program_name=program,
                program_year=program_year,
                price=Decimal(price),
                condition_type=condition,
                comments=comments,
                image1_path=f"uploads/book{index + 5}.jpg",
                status="active",
                # Spread creation times so newest-first ordering is visible
                created_at=SEED_START + timedelta(hours=index),
            )
        )
    return rows


def seed_listings() -> None:
    print(f"🌱 Seeding database with {len(USERS)} users and {len(LISTINGS)} listings...")

    with get_session() as session:
        # Step 1: Clear existing data (idempotent)
        deleted_listings = session.query(ListingRow).delete()
        deleted_users = session.query(UserRow).delete()
        print(f"🗑️  Deleted {deleted_listings} listings and {deleted_users} users")

        # Step 2: Insert users, then their listings
        users = build_users()
        session.add_all(users)
        session.flush()

        listings = build_listings(users)
        session.add_all(listings)
        session.flush()

        print(f"✅ Seeded {len(users)} users and {len(listings)} listings")
        print(f"\n🔑 Log in as any of these with password '{DEMO_PASSWORD}':")
        for user in users:
            print(f"   {user.email} ({user.first_name} {user.last_name})")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_listings()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
