"""Speed test command - runs ping, download and upload probes."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from netpath.backends.speedtest import ProbeOutcome, SpeedTester, SpeedTestReport
from netpath.config import EndpointConfig
from netpath.models.constants import ProbeKind

_UNITS = {
    ProbeKind.PING: "ms",
    ProbeKind.DOWNLOAD: "Mbps",
    ProbeKind.UPLOAD: "Mbps",
}


def run_speedtest(
    parallel: bool = False,
    as_json: bool = False,
    details: bool = False,
    export_filename: str | None = None,
    config: EndpointConfig | None = None,
) -> SpeedTestReport:
    """Run a speed test and print the result.

    Args:
        parallel: Run the three sub-probes concurrently.
        as_json: Print the result record as JSON instead of text.
        details: With as_json, print the per-probe report instead of the
            bare result record.
        export_filename: Also write the result record to this JSON file.
        config: Endpoint configuration; read from the environment if omitted.

    Raises:
        TestError: If the wall clock cannot be read.
        OSError: If the export file cannot be written.
    """
    config = config or EndpointConfig.from_env()
    report = SpeedTester(config).run_report(parallel=parallel)
    result = report.to_result()

    if as_json and details:
        print(json.dumps(report.to_dict(), indent=2))
    elif as_json:
        print(result.model_dump_json(indent=2))
    else:
        print(format_report(report))

    if export_filename:
        output_path = Path(export_filename)
        output_path.write_text(result.model_dump_json(indent=2))
        print(f"\n✓ JSON exported to: {export_filename}")

    return report


def format_report(report: SpeedTestReport) -> str:
    """Render a report as text, marking failed probes."""
    started = datetime.fromtimestamp(report.timestamp).strftime("%Y-%m-%d %H:%M:%S")
    lines = [f"Speed Test ({started}):"]
    for label, outcome in (
        ("Ping", report.ping),
        ("Download", report.download),
        ("Upload", report.upload),
    ):
        lines.append(f"  {label + ':':<10} {_format_outcome(outcome)}")
    return "\n".join(lines)


def _format_outcome(outcome: ProbeOutcome) -> str:
    value = f"{outcome.value_or_zero():.2f} {_UNITS[outcome.kind]}"
    if outcome.ok:
        return value
    return f"{value} (failed: {outcome.reason})"
