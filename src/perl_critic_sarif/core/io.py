import logging
from typing import BinaryIO

from pydantic import ValidationError

from perl_critic_sarif.errors import DecodeError, IoError
from perl_critic_sarif.models import PerlCriticReport
from perl_critic_sarif.sarif import SarifLog

logger = logging.getLogger(__name__)


def decode_report(data: bytes | str) -> PerlCriticReport:
    """Parse a Perl::Critic JSON report.

    Raises ``DecodeError`` on malformed JSON, a missing field or a wrong type.
    """
    try:
        report = PerlCriticReport.model_validate_json(data)
    except ValidationError as exc:
        raise DecodeError(f"Invalid Perl::Critic report: {exc}") from exc
    logger.debug("Decoded %d violation(s) from Perl::Critic %s", len(report.violations), report.perl_critic_version)
    return report


def read_report(stream: BinaryIO) -> PerlCriticReport:
    try:
        data = stream.read()
    except OSError as exc:
        raise IoError(f"Could not read input: {exc}") from exc
    logger.debug("Read %d byte(s) of input", len(data))
    return decode_report(data)


def encode_sarif(sarif: SarifLog, indent: int | None = None) -> str:
    return sarif.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def write_sarif(sarif: SarifLog, stream: BinaryIO, indent: int | None = None) -> None:
    payload = encode_sarif(sarif, indent).encode("utf-8")
    try:
        stream.write(payload)
        stream.flush()
    except OSError as exc:
        raise IoError(f"Could not write output: {exc}") from exc
    logger.debug("Wrote %d byte(s) of SARIF", len(payload))
