from pydantic import BaseModel, ConfigDict, Field


class Violation(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    filename: str
    line_number: int = Field(ge=1)
    column_number: int = Field(ge=1)
    severity: int = Field(ge=0)
    source: str
    policy: str
    description: str
    explanation: str
    diagnostics: str


class PerlCriticReport(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    perl_critic_version: str
    violations: list[Violation]
