"""CLI interface for sitedeploy."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import click
from rich.markup import escape

from . import __version__
from .cdn import CdnClient
from .config import config
from .exceptions import SiteDeployConfigError, SiteDeployScanError
from .output import OutputFormatter
from .progress import AssetStatusReporter
from .storage import StorageClient
from .sync import (
    AssetScanner,
    InvalidationTrigger,
    ProbeErrorPolicy,
    RemoteStateProber,
    SyncEngine,
    SyncResult,
)
from .utils import format_relative_time

logger = logging.getLogger(__name__)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def confirm_deploy_ready(sync_command: str) -> bool:
    """Ask the operator to confirm the two pre-deploy gates.

    Args:
        sync_command: Command that must have been run before deploying

    Returns:
        True only if both questions were answered with yes
    """
    if not click.confirm(
        "Would you like to deploy the latest build in the build directory?",
        default=False,
    ):
        return False

    if not click.confirm(f"Have you run '{sync_command}' already?", default=False):
        return False

    return True


def show_build_info(out: OutputFormatter, build_dir: Path) -> None:
    """Print the build directory's last modification time.

    The relative label is shown in red when the build is more than a few
    minutes old, as a hint that it may be stale.
    """
    mtime = build_dir.stat().st_mtime
    label, is_recent = format_relative_time(mtime)
    color = "white" if is_recent else "red"
    modified = datetime.fromtimestamp(mtime).strftime("%Y-%m-%d %H:%M:%S")
    out.print(f"[{color}][bold]Last modified:[/bold] {modified} ({label})[/{color}]")


def print_upload_summary(out: OutputFormatter, result: SyncResult) -> None:
    """Print the number of uploaded assets followed by their keys."""
    out.print("")
    out.print(
        f"[bold]Upload complete.[/bold] "
        f"{_plural(len(result.uploaded), 'asset')} uploaded."
    )
    if result.uploaded:
        for key in result.uploaded:
            out.print(f" • {escape(key)}")
        out.print("")


@click.group()
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(version=__version__, prog_name="sitedeploy")
@click.pass_context
def main(ctx: Any, quiet: bool, verbose: bool) -> None:
    """sitedeploy - Deploy a static site build to S3 and CloudFront."""
    ctx.ensure_object(dict)
    ctx.obj["out"] = OutputFormatter(quiet=quiet)
    ctx.obj["quiet"] = quiet

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("sitedeploy").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


@main.command()
@click.argument("build_dir", type=click.Path(), required=False, default=None)
@click.option("--bucket", "-b", help="Target S3 bucket")
@click.option("--region", help="AWS region of the bucket")
@click.option("--distribution-id", "-d", help="CloudFront distribution ID")
@click.option("--cloudfront-region", help="AWS region for the CloudFront client")
@click.option(
    "--ignore",
    "-i",
    "ignore_patterns",
    multiple=True,
    help="Glob pattern of files to leave out (can be repeated)",
)
@click.option(
    "--probe-errors",
    type=click.Choice([policy.value for policy in ProbeErrorPolicy]),
    default=ProbeErrorPolicy.UPLOAD.value,
    help=(
        "What to do when looking up a stored object fails: upload the asset "
        "anyway, or abort the run (default: upload)"
    ),
)
@click.option(
    "--invalidate-partial",
    is_flag=True,
    help="Invalidate assets uploaded before an aborted run stopped",
)
@click.option(
    "--dry-run", is_flag=True, help="Show what would be uploaded without uploading"
)
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompts")
@click.pass_context
def deploy(  # noqa: C901
    ctx: Any,
    build_dir: Optional[str],
    bucket: Optional[str],
    region: Optional[str],
    distribution_id: Optional[str],
    cloudfront_region: Optional[str],
    ignore_patterns: tuple[str, ...],
    probe_errors: str,
    invalidate_partial: bool,
    dry_run: bool,
    yes: bool,
) -> None:
    """Upload changed files of a build directory and invalidate the CDN.

    BUILD_DIR: Local build output (defaults to the configured build directory)
    """
    out: OutputFormatter = ctx.obj["out"]
    local_path = Path(build_dir or config.build_dir)

    out.print("[bold]Static Site Release Tool[/bold]")
    out.print("Deploys the latest build to S3")
    out.print("")
    out.print(f"[bold]Build directory:[/bold] {escape(str(local_path))}")

    if not local_path.is_dir():
        out.error(
            f"Directory does not exist: {local_path}. "
            "Run the build to generate it."
        )
        ctx.exit(1)

    show_build_info(out, local_path)
    out.print("")

    try:
        storage = StorageClient(bucket or config.bucket, region or config.region)
    except SiteDeployConfigError as e:
        out.error(str(e))
        ctx.exit(1)

    if not yes and not confirm_deploy_ready(config.sync_command):
        return

    try:
        assets = AssetScanner(ignore_patterns=list(ignore_patterns)).scan(local_path)
    except SiteDeployScanError as e:
        out.error(str(e))
        ctx.exit(1)

    out.print(f"[bold]Beginning S3 upload[/bold] to s3://{storage.bucket}")
    if dry_run:
        out.info("Dry run: No changes will be made")

    prober = RemoteStateProber(storage, ProbeErrorPolicy(probe_errors))
    reporter = AssetStatusReporter(console=out.console, quiet=ctx.obj["quiet"])
    engine = SyncEngine(storage, prober=prober, reporter=reporter)
    result = engine.run(assets, dry_run=dry_run)

    if dry_run:
        out.print("")
        out.success(
            f"Dry run complete! {_plural(len(result.planned), 'asset')} "
            "would be uploaded."
        )
        return

    print_upload_summary(out, result)

    if result.aborted:
        out.error(f"Upload of {result.failed_key} failed: {result.error}")

    _run_invalidation(
        out,
        result,
        distribution_id or config.distribution_id,
        cloudfront_region or config.cloudfront_region,
        invalidate_partial,
    )

    if result.aborted:
        ctx.exit(1)


def _run_invalidation(
    out: OutputFormatter,
    result: SyncResult,
    distribution_id: Optional[str],
    cloudfront_region: Optional[str],
    invalidate_partial: bool,
) -> None:
    """Invalidate the uploaded keys of a run, if the run allows it.

    Aborted runs are not invalidated unless ``invalidate_partial`` is set.
    """
    if not result.uploaded:
        out.print(
            "[bold]Skipping CloudFront invalidation.[/bold] No files were uploaded."
        )
        return

    if result.aborted and not invalidate_partial:
        out.warning(
            "Skipping CloudFront invalidation because the upload was aborted. "
            "Use --invalidate-partial to invalidate the uploaded assets."
        )
        return

    if not distribution_id:
        out.warning(
            "Skipping CloudFront invalidation: no distribution ID configured."
        )
        return

    out.print("[bold]Beginning CloudFront invalidation.[/bold]")
    trigger = InvalidationTrigger(CdnClient(distribution_id, cloudfront_region), out)
    invalidation_id = trigger.invalidate(result.uploaded)
    if invalidation_id:
        out.success(f"Invalidation success. {invalidation_id}")


@main.command()
@click.option("--bucket", prompt="S3 bucket name", help="Target S3 bucket")
@click.option("--region", prompt="Bucket region", default="", help="Bucket region")
@click.option(
    "--distribution-id",
    prompt="CloudFront distribution ID",
    default="",
    help="CloudFront distribution ID",
)
@click.option(
    "--cloudfront-region",
    prompt="CloudFront client region",
    default="",
    help="AWS region for the CloudFront client",
)
@click.option(
    "--build-dir",
    prompt="Build directory",
    default=lambda: config.build_dir,
    help="Local build output directory",
)
@click.option(
    "--sync-command",
    prompt="Command to run before deploying",
    default=lambda: config.sync_command,
    help="Command the operator must run before each deploy",
)
@click.pass_context
def init(
    ctx: Any,
    bucket: str,
    region: str,
    distribution_id: str,
    cloudfront_region: str,
    build_dir: str,
    sync_command: str,
) -> None:
    """Initialize sitedeploy configuration.

    Stores the deploy target in ~/.config/sitedeploy/config for future use.
    """
    out: OutputFormatter = ctx.obj["out"]

    values = {
        "BUCKET": bucket,
        "REGION": region or None,
        "DISTRIBUTION_ID": distribution_id or None,
        "CLOUDFRONT_REGION": cloudfront_region or None,
        "BUILD_DIR": build_dir,
        "SYNC_COMMAND": sync_command,
    }
    try:
        config.save(values)
    except OSError as e:
        out.error(f"Could not write configuration: {e}")
        ctx.exit(1)

    out.print_summary(
        "Initialization Complete",
        [
            ("Status", "✓ Configuration saved successfully"),
            ("Config file", str(config.get_config_path())),
        ],
    )


@main.command(name="config")
@click.pass_context
def show_config(ctx: Any) -> None:
    """Show the effective configuration."""
    out: OutputFormatter = ctx.obj["out"]

    out.print_summary(
        "Configuration",
        [
            ("Bucket", config.bucket or "(not set)"),
            ("Region", config.region or "(default)"),
            ("Distribution ID", config.distribution_id or "(not set)"),
            ("CloudFront region", config.cloudfront_region or "(default)"),
            ("Build directory", config.build_dir),
            ("Sync command", config.sync_command),
            ("Config file", str(config.get_config_path())),
        ],
    )
    if not config.is_configured():
        out.warning("No bucket configured. Run 'sitedeploy init' to set one.")
