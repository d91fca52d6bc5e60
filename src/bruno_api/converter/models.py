"""OpenAPI 3.0 contract models assembled from parsed Bruno files.

Field names follow Python conventions; aliases carry the OpenAPI spelling
and are used when dumping (`Contract.to_dict`).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

OPENAPI_VERSION = "3.0.0"
JSON_MEDIA_TYPE = "application/json"


class ContractModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ConversionOptions(BaseModel):
    title: str = "API"
    version: str = "1.0.0"
    description: str | None = None
    base_url: str | None = None


class Info(ContractModel):
    title: str
    version: str
    description: str | None = None


class Server(ContractModel):
    url: str


class HeaderParameter(ContractModel):
    name: str
    location: str = Field(default="header", alias="in")
    required: bool = False
    schema_: dict = Field(default_factory=lambda: {"type": "string"}, alias="schema")
    example: str = ""


class MediaType(ContractModel):
    schema_: dict = Field(alias="schema")
    example: Any = None


class RequestBody(ContractModel):
    required: bool = True
    content: dict[str, MediaType]


class Response(ContractModel):
    description: str = "Successful response"
    content: dict[str, MediaType] | None = None


class Operation(ContractModel):
    tags: list[str]
    summary: str
    operation_id: str = Field(alias="operationId")
    parameters: list[HeaderParameter] = []
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = Field(default_factory=lambda: {"200": Response()})


class Tag(ContractModel):
    name: str
    description: str = ""


class Components(ContractModel):
    schemas: dict[str, dict] = {}


class Contract(ContractModel):
    openapi: str = OPENAPI_VERSION
    info: Info
    servers: list[Server] | None = None
    paths: dict[str, dict[str, Operation]] = {}
    components: Components = Field(default_factory=Components)
    tags: list[Tag] = []

    def operation(self, path: str, method: str) -> Operation | None:
        return self.paths.get(path, {}).get(method.lower())

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
