"""
Initialize database — creates the key-value table.
Run once before first launch.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from platebot.database import create_tables, engine
from platebot.config import settings
from sqlalchemy import inspect, text


def main():
    print("🗄️  Plate bot DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()

    tables = inspect(engine).get_table_names()
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    print("\n🎉 Database ready! Add the first admin, then start the bot:")
    print("   python scripts/setup/add_admin.py +380...")
    print("   uvicorn platebot.main:app --host 0.0.0.0 --port 8080")


if __name__ == "__main__":
    main()
