#!/usr/bin/env python3
"""
Database initialization script
"""
import asyncio
import sys
from pathlib import Path

# Add the project root to the Python path
current_dir = Path(__file__).parent
root_dir = current_dir.parent
sys.path.insert(0, str(root_dir))

DEMO_USERS = [
    {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "password": "Password123!",
        "mobile": "9000000001",
        "dob": "1990-12-10",
        "preferences": ["technology", "education"],
    },
    {
        "name": "Marco Polo",
        "email": "marco@example.com",
        "password": "Password123!",
        "mobile": "9000000002",
        "dob": "1988-09-15",
        "preferences": ["travel", "food"],
    },
]

DEMO_BLOGS = {
    "ada@example.com": [
        {"title": "Notes on the Analytical Engine", "content": "It weaves algebraic patterns.",
         "categories": ["technology"], "tags": ["history"], "is_published": True},
        {"title": "Unfinished thoughts", "content": "Draft.",
         "categories": ["education"], "is_published": False},
    ],
    "marco@example.com": [
        {"title": "Eating my way along the Silk Road", "content": "Noodles everywhere.",
         "categories": ["travel", "food"], "tags": ["asia"], "is_published": True},
    ],
}

async def init_database() -> None:
    """Initialize database with tables"""
    from blogsphere.db.session import init_db
    from blogsphere.config import settings

    print(f"🚀 Initializing database: {settings.database_url}")

    try:
        await init_db()
        print("✅ Database initialized successfully")
    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        sys.exit(1)

async def create_initial_data() -> None:
    """Create demo users and blogs for development"""
    from blogsphere.db.session import AsyncSessionLocal
    from blogsphere.schemas.blog_schema import BlogCreate
    from blogsphere.schemas.user_schema import UserCreate
    from blogsphere.services.auth_service import AuthService
    from blogsphere.services.blog_service import BlogService

    print("👤 Creating initial data...")

    async with AsyncSessionLocal() as db:
        auth_service = AuthService(db)
        blog_service = BlogService(db)
        created_users = created_blogs = 0

        try:
            for user_data in DEMO_USERS:
                user = await auth_service.get_user_by_email(user_data["email"])
                if user is not None:
                    continue

                user = await auth_service.create_user(UserCreate(**user_data))
                created_users += 1
                for blog_data in DEMO_BLOGS.get(user.email, []):
                    await blog_service.create_blog(user, BlogCreate(**blog_data))
                    created_blogs += 1

            print(f"✅ Created {created_users} users and {created_blogs} blogs")
        except Exception as e:
            await db.rollback()
            print(f"⚠️  Error creating initial data: {e}")
            sys.exit(1)

async def drop_database() -> None:
    """Drop all database tables"""
    from blogsphere.db.session import engine
    from blogsphere.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    print("🗑️  Dropped all tables")

def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Blogsphere database setup")
    parser.add_argument("command", choices=["init", "seed", "reset"])
    parser.add_argument("--confirm", action="store_true", help="Required by reset")
    args = parser.parse_args()

    if args.command == "reset" and not args.confirm:
        print("⚠️  reset drops ALL tables and data; pass --confirm to proceed")
        sys.exit(1)

    async def run() -> None:
        if args.command == "reset":
            await drop_database()
        await init_database()
        if args.command == "seed":
            await create_initial_data()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user")
        sys.exit(1)

if __name__ == "__main__":
    main()
