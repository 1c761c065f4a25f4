"""Electrical plan documents (metadata only; the files live in the blob store)."""

from sqlalchemy import Column, Integer, String, DateTime
from loto.database import Base


class Plan(Base):
    __tablename__ = "plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(300), nullable=False)
    file_path = Column(String(500), nullable=False)
    version = Column(String(50))
    uploaded_at = Column(DateTime, index=True)

    def __repr__(self):
        return f"<Plan {self.id} {self.filename} v={self.version}>"
