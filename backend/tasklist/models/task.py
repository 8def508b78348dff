from sqlalchemy import Column, Integer, BigInteger, String, Boolean, Date, ForeignKey
from tasklist.core.database import Base

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    status = Column(Boolean, nullable=False, default=False)
    due_date = Column(Date, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    position = Column(BigInteger, nullable=False, default=0)  # manual order key
