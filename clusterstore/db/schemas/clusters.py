from pydantic import BaseModel, ConfigDict


class Cluster(BaseModel):
    cluster_id: int
    resource_id: int
    cluster_name: str
    cluster_info: str = ''
    provisioning_state: str = 'INIT'
    security_type: str = 'NONE'
    desired_cluster_state: str = ''
    desired_stack_id: int | None = None
    model_config = ConfigDict(from_attributes=True)
