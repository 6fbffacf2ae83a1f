from sqlalchemy import BigInteger, Column, ForeignKey, String
from sqlalchemy.orm import relationship
from .base import Base, BigIntegerPK


class Cluster(Base):
    __tablename__ = 'clusters'
    cluster_id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    resource_id = Column(BigInteger, nullable=False, unique=True)
    cluster_name = Column(String(100), nullable=False, unique=True)
    cluster_info = Column(String(255), nullable=False, default='')
    provisioning_state = Column(String(255), nullable=False, default='INIT')
    security_type = Column(String(32), nullable=False, default='NONE')
    desired_cluster_state = Column(String(255), nullable=False, default='')
    desired_stack_id = Column(BigInteger, ForeignKey('stack.stack_id'), nullable=True)

    desired_stack = relationship("Stack")
    # Removing a cluster removes its configurations and mappings with it
    config_entities = relationship(
        "ClusterConfig", back_populates="cluster", cascade="save-update, merge, delete"
    )
    config_mapping_entities = relationship(
        "ClusterConfigMapping", back_populates="cluster", cascade="save-update, merge, delete"
    )

    def __repr__(self) -> str:
        return f"<Cluster {self.cluster_name!r} id={self.cluster_id}>"
