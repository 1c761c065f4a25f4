"""
Initialize database — creates all tables.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from loto.database import create_tables, engine
from loto.config import settings
from sqlalchemy import inspect, text


def main():
    print(f"🗄️  {settings.APP_NAME} DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    print("\n📋 Creating tables...")
    create_tables()

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    tables = sorted(inspect(engine).get_table_names())
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn loto.main:app --host {settings.BACKEND_HOST} --port {settings.BACKEND_PORT}")


if __name__ == "__main__":
    main()
