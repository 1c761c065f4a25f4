"""
Populate the database with sample breakers, locks and personnel (development only).
Goes through the services, so lock usage and history are written exactly as in the app.
Usage: python scripts/setup/init_sample_data.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from loto.database import SessionLocal, create_tables
from loto.schemas.breaker import BreakerIn
from loto.schemas.lock import LockIn
from loto.schemas.personnel import PersonnelIn
from loto.services.lock_reconciliation import create_breaker, resync_locks
from loto.services.lock_service import create_lock
from loto.services.personnel_service import create_personnel

SAMPLE_LOCKS = [
    LockIn(key_number="K001", zone="Zone A", remarks="Red lock"),
    LockIn(key_number="K002", zone="Zone A"),
    LockIn(key_number="K003", zone="Zone A"),
    LockIn(key_number="K004", zone="Zone B"),
    LockIn(key_number="K005", zone="Zone B", remarks="Blue lock"),
    LockIn(key_number="K006", zone="Zone B"),
]

SAMPLE_BREAKERS = [
    BreakerIn(name="Main Panel A", zone="Zone A", location="Building 1", state="On"),
    BreakerIn(name="Sub Panel A-1", zone="Zone A", location="Building 1", state="Off",
              general_breaker="Main Panel A"),
    BreakerIn(name="Breaker A-1-01", zone="Zone A", location="Building 1", state="Closed",
              lock_key="K001", general_breaker="Sub Panel A-1"),
    BreakerIn(name="Breaker A-1-02", zone="Zone A", location="Building 1", state="Off",
              general_breaker="Sub Panel A-1"),
    BreakerIn(name="Main Panel B", zone="Zone B", location="Building 2", state="On"),
    BreakerIn(name="Breaker B-01", zone="Zone B", location="Building 2", state="Closed",
              lock_key="K005", general_breaker="Main Panel B"),
]

SAMPLE_PERSONNEL = [
    PersonnelIn(name="John", lastname="Smith", id_card="EMP001", company="ABC Electric",
                habilitation="Electrical Safety Level 2"),
    PersonnelIn(name="Jane", lastname="Doe", id_card="EMP002", company="ABC Electric",
                habilitation="Electrical Safety Level 1"),
    PersonnelIn(name="Mike", lastname="Johnson", id_card="EMP003", company="XYZ Contractors",
                habilitation="Electrical Safety Level 3"),
]


def main():
    print("Adding sample data to database...\n")
    create_tables()
    db = SessionLocal()
    try:
        for lock in SAMPLE_LOCKS:
            create_lock(db, lock)
        print(f"✓ Added {len(SAMPLE_LOCKS)} sample locks")

        for breaker in SAMPLE_BREAKERS:
            create_breaker(db, breaker)
        print(f"✓ Added {len(SAMPLE_BREAKERS)} sample breakers")

        for person in SAMPLE_PERSONNEL:
            create_personnel(db, person)
        print(f"✓ Added {len(SAMPLE_PERSONNEL)} sample personnel")

        in_use = resync_locks(db)
        print(f"✓ Lock usage resynced ({in_use} in use)")
    except Exception as e:
        print(f"❌ Error adding sample data: {e}")
        sys.exit(1)
    finally:
        db.close()

    print("\n✅ Sample data initialization complete!")
    print(f"  - {len(SAMPLE_BREAKERS)} breakers (2 locked)")
    print(f"  - {len(SAMPLE_LOCKS)} locks (2 in use)")
    print(f"  - {len(SAMPLE_PERSONNEL)} personnel records")


if __name__ == "__main__":
    main()
