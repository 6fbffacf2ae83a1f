from sqlalchemy import Column, String, UniqueConstraint
from .base import Base, BigIntegerPK


class Stack(Base):
    __tablename__ = 'stack'
    stack_id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    stack_name = Column(String(255), nullable=False)
    stack_version = Column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint('stack_name', 'stack_version', name='UQ_stack'),
    )

    def __repr__(self) -> str:
        return f"<Stack {self.stack_name}-{self.stack_version} id={self.stack_id}>"
