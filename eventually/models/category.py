from sqlalchemy import Column, Integer, Text
from eventually.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, unique=True, nullable=False)
    color = Column(Text, nullable=False)  # hex, e.g. #7aa2f7
    created_at = Column(Integer, nullable=False)  # epoch seconds
    updated_at = Column(Integer, nullable=False)
