from pydantic import BaseModel, ConfigDict


class StackId(BaseModel):
    """Name and version identifying a stack, e.g. ``HDP-2.6``."""

    stack_name: str
    stack_version: str
    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, value: str) -> "StackId":
        name, sep, version = value.partition("-")
        if not sep or not name or not version:
            raise ValueError(f"Stack id must look like NAME-VERSION, got {value!r}")
        return cls(stack_name=name, stack_version=version)

    def __str__(self) -> str:
        return f"{self.stack_name}-{self.stack_version}"


class Stack(BaseModel):
    stack_id: int
    stack_name: str
    stack_version: str
    model_config = ConfigDict(from_attributes=True)

    @property
    def key(self) -> StackId:
        return StackId(stack_name=self.stack_name, stack_version=self.stack_version)
