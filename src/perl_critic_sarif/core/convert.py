import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from perl_critic_sarif.config import (
    POLICY_HELP_BASE_URI,
    PROJECT_URI,
    PROJECT_URI_BASE_ID,
    SARIF_SCHEMA_URI,
    SARIF_VERSION,
    TOOL_FULL_NAME,
    TOOL_INFORMATION_URI,
    TOOL_NAME,
)
from perl_critic_sarif.core.policy import policy_to_id, policy_to_name
from perl_critic_sarif.errors import AssemblyError
from perl_critic_sarif.models import PerlCriticReport, Violation
from perl_critic_sarif.sarif import (
    ArtifactContent,
    ArtifactLocation,
    Location,
    Message,
    PhysicalLocation,
    Region,
    ReportingDescriptor,
    Result,
    Run,
    SarifLog,
    Tool,
    ToolComponent,
    VersionControlDetails,
)
from perl_critic_sarif.vcs.git import version_control_provenance

logger = logging.getLogger(__name__)

_SEVERITY_LEVELS = {
    5: "error",
    4: "warning",
    3: "note",
}


def severity_to_level(severity: int) -> str:
    return _SEVERITY_LEVELS.get(severity, "none")


def build_rules(violations: Iterable[Violation]) -> list[ReportingDescriptor]:
    """Build one rule descriptor per derived rule id.

    Ids are kept in order of first appearance. If two policies derive the same
    id the later descriptor replaces the earlier one.
    """
    rules: dict[str, ReportingDescriptor] = {}
    policies: dict[str, str] = {}
    try:
        for v in violations:
            rule_id = policy_to_id(v.policy)
            previous = policies.get(rule_id)
            if previous is not None and previous != v.policy:
                logger.warning(
                    "Policies %s and %s both map to rule id %s; keeping %s", previous, v.policy, rule_id, v.policy
                )
            policies[rule_id] = v.policy
            rules[rule_id] = ReportingDescriptor(
                id=rule_id,
                name=policy_to_name(v.policy),
                help_uri=f"{POLICY_HELP_BASE_URI}{v.policy}",
            )
    except ValidationError as exc:
        raise AssemblyError(f"Could not build rule descriptors: {exc}") from exc
    logger.debug("Built %d rule descriptor(s)", len(rules))
    return list(rules.values())


def violation_to_result(v: Violation) -> Result:
    """Translate one violation into a SARIF result with a single location.

    The context region spans the line above through the line below; its
    columns are fixed at 1. The precise region ends at the byte length of the
    source line rather than at the end of the offending token.
    """
    try:
        snippet = ArtifactContent(text=v.source)
        location = Location(
            physical_location=PhysicalLocation(
                artifact_location=ArtifactLocation(
                    uri=f"{PROJECT_URI}/{v.filename}",
                    uri_base_id=PROJECT_URI_BASE_ID,
                ),
                context_region=Region(
                    start_line=v.line_number - 1,
                    start_column=1,
                    end_line=v.line_number + 1,
                    end_column=1,
                    snippet=snippet,
                ),
                region=Region(
                    start_line=v.line_number,
                    start_column=v.column_number,
                    end_line=v.line_number,
                    end_column=len(v.source.encode("utf-8")),
                    snippet=snippet,
                ),
            )
        )
        return Result(
            message=Message(text=v.diagnostics),
            level=severity_to_level(v.severity),
            rule_id=policy_to_id(v.policy),
            locations=[location],
        )
    except ValidationError as exc:
        raise AssemblyError(f"Could not build result for {v.filename}:{v.line_number}: {exc}") from exc


def build_run(report: PerlCriticReport, provenance: list[VersionControlDetails]) -> Run:
    try:
        driver = ToolComponent(
            name=TOOL_NAME,
            full_name=TOOL_FULL_NAME,
            version=report.perl_critic_version,
            information_uri=TOOL_INFORMATION_URI,
            rules=build_rules(report.violations),
        )
        results = [violation_to_result(v) for v in report.violations]
        return Run(tool=Tool(driver=driver), version_control_provenance=provenance, results=results)
    except ValidationError as exc:
        raise AssemblyError(f"Could not build SARIF run: {exc}") from exc


def build_sarif(report: PerlCriticReport, provenance: list[VersionControlDetails]) -> SarifLog:
    try:
        return SarifLog(
            schema_uri=SARIF_SCHEMA_URI,
            version=SARIF_VERSION,
            runs=[build_run(report, provenance)],
        )
    except ValidationError as exc:
        raise AssemblyError(f"Could not build SARIF log: {exc}") from exc


def convert_report(report: PerlCriticReport, start_dir: Path | None = None) -> SarifLog:
    """Convert a decoded report, taking provenance from the git repository at *start_dir*."""
    provenance = version_control_provenance(start_dir)
    sarif = build_sarif(report, provenance)
    logger.debug("Converted %d violation(s)", len(report.violations))
    return sarif
