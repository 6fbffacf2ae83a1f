from pydantic import BaseModel, ConfigDict


class ClusterConfig(BaseModel):
    config_id: int
    cluster_id: int
    type_name: str
    tag: str
    version: int
    stack_id: int
    properties: dict = {}
    property_attributes: dict | None = None
    create_timestamp: int
    model_config = ConfigDict(from_attributes=True)


class ClusterConfigMapping(BaseModel):
    cluster_id: int
    type_name: str
    tag: str
    create_timestamp: int
    selected: int = 0
    user_name: str = '_db'
    model_config = ConfigDict(from_attributes=True)
