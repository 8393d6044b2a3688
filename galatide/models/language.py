from sqlalchemy import Boolean, Column, Integer, String

from galatide.database import Base


class Language(Base):
    __tablename__ = "languages"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(10), unique=True, index=True, nullable=False)  # used in URLs, e.g. "fr"
    name = Column(String, nullable=False)
    native_name = Column(String, nullable=False)
    is_rtl = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    is_default = Column(Boolean, nullable=False, default=False)
