"""
History table — append-only audit trail of every mutation.
breaker_id is nulled (not cascaded) when the breaker is deleted so the log survives.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, CheckConstraint
from loto.database import Base

USER_MODES = ("Editor", "Visitor")


class HistoryEntry(Base):
    __tablename__ = "history"
    __table_args__ = (
        CheckConstraint("user_mode IN ('Editor', 'Visitor')", name="ck_history_user_mode"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    breaker_id = Column(Integer, ForeignKey("breakers.id", ondelete="SET NULL"), index=True)
    action = Column(Text, nullable=False)
    user_mode = Column(String(10), nullable=False)
    details = Column(Text)
    timestamp = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<HistoryEntry {self.id} breaker={self.breaker_id} {self.action!r}>"
