import json
from sqlalchemy import BigInteger, Column, ForeignKey, Integer, String, Text, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from .base import Base, BigIntegerPK, now_millis


class ClusterConfig(Base):
    __tablename__ = 'clusterconfig'
    config_id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    cluster_id = Column(BigInteger, ForeignKey('clusters.cluster_id', ondelete='CASCADE'), nullable=False)
    type_name = Column(String(100), nullable=False)
    tag = Column('version_tag', String(100), nullable=False)
    version = Column(BigInteger, nullable=False)
    stack_id = Column(BigInteger, ForeignKey('stack.stack_id'), nullable=False)
    config_data = Column(Text, nullable=False, default='{}')
    config_attributes = Column(Text, nullable=True)
    create_timestamp = Column(BigInteger, nullable=False, default=now_millis)

    cluster = relationship("Cluster", back_populates="config_entities")
    stack = relationship("Stack")

    __table_args__ = (
        UniqueConstraint('cluster_id', 'type_name', 'version_tag', name='UQ_config_type_tag'),
        UniqueConstraint('cluster_id', 'type_name', 'version', name='UQ_config_type_version'),
    )

    @property
    def properties(self) -> dict:
        """Decoded ``config_data``."""
        return json.loads(self.config_data) if self.config_data else {}

    @properties.setter
    def properties(self, value: dict) -> None:
        self.config_data = json.dumps(value or {}, sort_keys=True)

    @property
    def property_attributes(self) -> dict | None:
        if self.config_attributes is None:
            return None
        return json.loads(self.config_attributes)

    @property_attributes.setter
    def property_attributes(self, value: dict | None) -> None:
        self.config_attributes = None if value is None else json.dumps(value, sort_keys=True)

    def __repr__(self) -> str:
        return f"<ClusterConfig {self.type_name}/{self.tag} v{self.version} cluster={self.cluster_id}>"


class ClusterConfigMapping(Base):
    __tablename__ = 'clusterconfigmapping'
    cluster_id = Column(BigInteger, ForeignKey('clusters.cluster_id', ondelete='CASCADE'), primary_key=True)
    type_name = Column(String(255), primary_key=True)
    create_timestamp = Column(BigInteger, primary_key=True, default=now_millis)
    tag = Column('version_tag', String(255), nullable=False)
    selected = Column(Integer, nullable=False, default=0)
    user_name = Column(String(255), nullable=False, default='_db')

    cluster = relationship("Cluster", back_populates="config_mapping_entities")

    __table_args__ = (
        Index('idx_clusterconfigmapping_cluster_type', 'cluster_id', 'type_name'),
    )

    def __repr__(self) -> str:
        return (
            f"<ClusterConfigMapping {self.type_name}/{self.tag} cluster={self.cluster_id} "
            f"selected={self.selected}>"
        )
