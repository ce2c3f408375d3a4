"""Project snapshot models.

A Project is the single input of every generator. Field aliases match the
camelCase records kept by the project store, so stored projects validate
as-is.
"""

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from api_spec_kit.schema.normalizer import normalize, to_text


class ExtraFlags(BaseModel):
    """Synthetic health-check endpoints to append to the descriptor."""

    model_config = ConfigDict(frozen=True)

    vitality: bool = False
    ping: bool = False


class RequestSpec(BaseModel):
    """One HTTP operation of a project."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    url: str = "/path"  # /users/{id}?active=true
    method: str = "GET"
    std_headers: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("std_headers", "stdHeaders", "selectedHeaders"),
    )
    headers: str = ""  # free-text JSON object of extra headers
    request_example: str = Field(default="", alias="request")
    response_example: str = Field(default="", alias="response")
    summary: str = ""
    description: str = ""
    operation_id: str | None = Field(default=None, alias="operationId")
    request_refs: list[str] = Field(default_factory=list, alias="requestRefs")
    response_refs: list[str] = Field(default_factory=list, alias="responseRefs")

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, v):
        return str(v or "GET").strip().upper() or "GET"

    @field_validator("url", mode="before")
    @classmethod
    def _default_url(cls, v):
        return str(v or "").strip() or "/path"

    @field_validator("headers", "request_example", "response_example", "summary", "description", mode="before")
    @classmethod
    def _text(cls, v):
        return "" if v is None else str(v)

    @field_validator("operation_id", mode="before")
    @classmethod
    def _blank_operation_id(cls, v):
        if v is None or not str(v).strip():
            return None
        return str(v).strip()


class Project(BaseModel):
    """The complete description of one API.

    ``schema_text`` is the raw text the user typed; ``schemas`` is always
    re-derived from it on validation and is never trusted on its own.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    name: str = "API"
    manager_email: str = Field(default="", alias="managerEmail")
    swagger_description: str = Field(default="", alias="swaggerDescription")
    jira_ticket: str = Field(default="", alias="jiraTicket")
    intro_text: str = Field(default="", alias="introText")
    requests: list[RequestSpec] = Field(default_factory=list)
    extra: ExtraFlags = Field(default_factory=ExtraFlags)
    schema_text: str = Field(default="", alias="schema")
    schemas: dict = Field(default_factory=dict)

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, v):
        return str(v or "").strip() or "API"

    @field_validator("manager_email", "swagger_description", "jira_ticket", mode="before")
    @classmethod
    def _strip(cls, v):
        return str(v or "").strip()

    @field_validator("extra", mode="before")
    @classmethod
    def _extra_or_default(cls, v):
        return v or {}

    @model_validator(mode="before")
    @classmethod
    def _sync_schemas(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        text_key = "schema" if "schema" in data else "schema_text"
        text = data.get(text_key) or ""
        if not str(text).strip() and isinstance(data.get("schemas"), dict) and data["schemas"]:
            text = to_text(data["schemas"])

        mapping, error = normalize(str(text))
        if error is not None:
            raise ValueError(f"schema text is invalid: {error}")
        data.pop("schema_text", None)
        data["schema"] = str(text)
        data["schemas"] = mapping
        return data

    def with_schema_text(self, text: str) -> "Project":
        """Return a new snapshot with replaced schema text, re-normalized."""
        data = self.model_dump(by_alias=True)
        data["schema"] = text
        data["schemas"] = {}
        return Project.model_validate(data)


class SchemaProperty(BaseModel):
    """One property row in the schema builder."""

    key: str = "field"
    type: str = "string"  # string / integer / number / boolean / object / array / ref
    ref: str = ""
    required: bool = False
    nullable: bool = False
    description: str = ""
    example: str = ""
    max_length: int | None = None
    pattern: str = ""


class SchemaEntry(BaseModel):
    """One named schema in the builder."""

    name: str
    kind: Literal["object", "array"] = "object"
    properties: list[SchemaProperty] = Field(default_factory=list)
