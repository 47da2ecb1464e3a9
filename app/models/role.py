# app/models/role.py
from sqlalchemy import Column, Integer, String
from app.database import Base


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False)   # student | staff | visitor ...

    def __repr__(self):
        return f"<Role {self.id} {self.name}>"
