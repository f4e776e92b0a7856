"""SARIF 2.1.0 output models.

Only the subset of the schema that the converter emits is modelled. Attributes
are snake_case in Python and serialize to the camelCase keys SARIF expects, so
dump with ``by_alias=True``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from perl_critic_sarif.config import SARIF_SCHEMA_URI, SARIF_VERSION


class SarifModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Message(SarifModel):
    text: str


class ArtifactContent(SarifModel):
    text: str


class ArtifactLocation(SarifModel):
    uri: str
    uri_base_id: str | None = None


class Region(SarifModel):
    start_line: int
    start_column: int | None = None
    end_line: int | None = None
    end_column: int | None = None
    snippet: ArtifactContent | None = None


class PhysicalLocation(SarifModel):
    artifact_location: ArtifactLocation
    region: Region | None = None
    context_region: Region | None = None


class Location(SarifModel):
    physical_location: PhysicalLocation


class ReportingDescriptor(SarifModel):
    id: str
    name: str | None = None
    help_uri: str | None = None


class Result(SarifModel):
    message: Message
    level: str
    rule_id: str
    locations: list[Location] = Field(default_factory=list)


class ToolComponent(SarifModel):
    name: str
    full_name: str | None = None
    version: str | None = None
    information_uri: str | None = None
    rules: list[ReportingDescriptor] = Field(default_factory=list)


class Tool(SarifModel):
    driver: ToolComponent


class VersionControlDetails(SarifModel):
    repository_uri: str
    branch: str | None = None
    revision_id: str | None = None
    mapped_to: ArtifactLocation | None = None


class Run(SarifModel):
    tool: Tool
    version_control_provenance: list[VersionControlDetails] = Field(default_factory=list)
    results: list[Result] = Field(default_factory=list)


class SarifLog(SarifModel):
    schema_uri: str = Field(default=SARIF_SCHEMA_URI, alias="$schema")
    version: str = SARIF_VERSION
    runs: list[Run]
