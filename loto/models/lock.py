"""
Locks table — physical padlock inventory.
used / assigned_to are written both by direct edits and as a side effect of
breaker mutations (see services/lock_reconciliation.py).
"""

from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from loto.database import Base


class Lock(Base):
    __tablename__ = "locks"
    __table_args__ = (
        CheckConstraint("used IN (0, 1)", name="ck_locks_used"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    key_number = Column(String(50), unique=True, nullable=False, index=True)
    zone = Column(String(100), nullable=False)
    used = Column(Integer, default=0, nullable=False)
    assigned_to = Column(String(200))        # breaker name, free text
    remarks = Column(Text)

    def __repr__(self):
        return f"<Lock {self.key_number} used={self.used} assigned_to={self.assigned_to}>"
