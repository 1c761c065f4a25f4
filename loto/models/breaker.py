"""
Breakers table — electrical disconnects and their On / Off / Closed (locked out) state.
lock_key references locks.key_number by value; general_breaker references another
breaker by name (soft link, not enforced).
"""

from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from loto.database import Base

BREAKER_STATES = ("On", "Off", "Closed")
STATE_ON, STATE_OFF, STATE_CLOSED = BREAKER_STATES


class Breaker(Base):
    __tablename__ = "breakers"
    __table_args__ = (
        CheckConstraint("state IN ('On', 'Off', 'Closed')", name="ck_breakers_state"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    zone = Column(String(100), nullable=False, index=True)
    location = Column(String(200), nullable=False)
    state = Column(String(10), default=STATE_OFF, nullable=False)
    lock_key = Column(String(50))            # locks.key_number while Closed
    general_breaker = Column(String(200), index=True)   # parent breaker name
    last_updated = Column(DateTime)

    def __repr__(self):
        return f"<Breaker {self.id} {self.name} state={self.state} key={self.lock_key}>"
