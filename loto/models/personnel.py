"""Personnel table — people certified (habilitation) to perform lockout work."""

from sqlalchemy import Column, Integer, String, DateTime
from loto.database import Base


class Personnel(Base):
    __tablename__ = "personnel"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    lastname = Column(String(100), nullable=False)
    id_card = Column(String(50), unique=True, nullable=False, index=True)
    company = Column(String(200))
    habilitation = Column(String(200))
    pdf_path = Column(String(500))           # certificate file, stored outside this service
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<Personnel {self.id_card} {self.name} {self.lastname}>"
