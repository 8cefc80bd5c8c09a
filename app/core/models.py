from datetime import date
from typing import NamedTuple

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# =========================
# Patient
# =========================
class Patient(Base):
    __tablename__ = "patient"
    __table_args__ = {"mysql_engine": "InnoDB"}

    patientid = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    date_of_birth = Column("dateOfBirth", DateTime, nullable=False)


# =========================
# Seed data
# =========================
class SeedRow(NamedTuple):
    name: str
    date_of_birth: date


# Inserted as-is by POST /insert, every call appends these again
SEED_ROWS = (
    SeedRow("Sara Brown", date(1901, 1, 1)),
    SeedRow("John Smith", date(1941, 1, 1)),
    SeedRow("Jack Ma", date(1961, 1, 30)),
    SeedRow("Elon Musk", date(1999, 1, 1)),
)
