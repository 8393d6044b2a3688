from sqlalchemy import Column, Integer, String, Enum
from sqlalchemy.orm import relationship
from galatide.database import Base
import enum


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    AUTHOR = "AUTHOR"


# Author/translator reference only; no credentials are stored.
class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True)
    email = Column(String, unique=True, nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.AUTHOR)

    articles = relationship("Article", back_populates="author")
