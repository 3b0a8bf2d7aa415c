"""Admin model definitions."""

from sqlalchemy import Column, Integer, String
from werkzeug.security import check_password_hash, generate_password_hash

from clinic.database import Base


class Admin(Base):
    """Represents a clinic administrator."""
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(80), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    def set_password(self, raw_password: str) -> None:
        self.hashed_password = generate_password_hash(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return check_password_hash(self.hashed_password, raw_password)
