import json
import sys
from pathlib import Path

import click

from preflight.analysis.verdict import Verdict
from preflight.config.settings import Settings
from preflight.files.exceptions import FileLoadError
from preflight.files.loader import FileLoader
from preflight.logging.logger import Log
from preflight.service.models import PreflightReport, human_size
from preflight.service.preflight import build_preflight

EXIT_OK = 0
EXIT_NOT_ACCEPTED = 1
EXIT_LOAD_ERROR = 2

_VERDICT_TEXT = {
    Verdict.ACCEPT: "Good to process",
    Verdict.BORDERLINE: "Borderline, consider fixes",
    Verdict.REJECT: "Poor, please rescan or fix",
}


def render_report(report: PreflightReport) -> str:
    lines = [
        f"{report.file_name} [{report.content_type or 'unknown'}, {human_size(report.size)}]",
        f"  Score: {report.result.score}/100 - {_VERDICT_TEXT[report.verdict]} "
        f"({report.family.value})",
    ]
    lines.extend(f"  * {message}" for message in report.result.messages)
    lines.extend(f"    {detail}" for detail in report.result.details)
    return "\n".join(lines)


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--json", "as_json", is_flag=True, default=False, help="Print reports as a JSON array.")
@click.option("--log-level", default=None, help="Override LOG_LEVEL from the environment.")
def main(files: tuple[Path, ...], as_json: bool, log_level: str | None) -> None:
    """Preflight FILES: score quality and report whether each may be uploaded."""
    settings = Settings()
    Log.configure(log_level or settings.log_level)

    loader = FileLoader(max_size_bytes=settings.max_file_size_bytes)
    try:
        descriptors = [loader.load(path) for path in files]
    except (FileNotFoundError, FileLoadError) as exc:
        Log.error(str(exc))
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_LOAD_ERROR)

    reports = build_preflight(settings).inspect_many(descriptors)

    if as_json:
        click.echo(json.dumps([report.to_dict() for report in reports], indent=2))
    else:
        click.echo("\n\n".join(render_report(report) for report in reports))

    all_accepted = all(report.upload_allowed for report in reports)
    sys.exit(EXIT_OK if all_accepted else EXIT_NOT_ACCEPTED)


if __name__ == "__main__":
    main()
