from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelCaseModel(BaseModel):
    """Base model with camelCase alias support."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
    environment: str


class ApiHealthResponse(CamelCaseModel):
    status: str
    api_version: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: dict = {}
