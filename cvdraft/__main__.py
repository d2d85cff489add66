"""Main entry point for cv-drafter."""

import argparse
import asyncio
import sys
from pathlib import Path

from cvdraft import __version__
from cvdraft.autonomous.runner import AttemptRunner
from cvdraft.autonomous.scheduler import RetryScheduler
from cvdraft.config.job_config import JobConfig, load_job_config
from cvdraft.config.settings import ConfigurationError, Settings
from cvdraft.drafting.config import DraftingConfig
from cvdraft.drafting.llm import ModelGatewayError
from cvdraft.drafting.profile import ProfileError
from cvdraft.utils.logging import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="cvdraft",
        description="cv-drafter: tailor a CV and covering letter to a job with an LLM",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cvdraft --job "Data Engineer at Acme" --once
  python -m cvdraft --jobcfg config/job.config.json --daemon
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--job",
        default=None,
        help="Job title / description to target (overrides the job config)",
    )
    parser.add_argument(
        "--cv",
        type=Path,
        default=None,
        help="Path to CV base data (JSON or YAML)",
    )
    parser.add_argument(
        "--notes",
        type=Path,
        default=None,
        help="Path to covering letter notes (markdown/text)",
    )
    parser.add_argument(
        "--jobcfg",
        type=Path,
        default=None,
        help="Path to job runtime config (JSON)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single attempt and exit",
    )
    parser.add_argument(
        "--daemon",
        action="store_true",
        help="Run continuously, waiting between attempts",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the log level (overrides settings)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log full LLM requests and responses",
    )

    return parser


def _resolve_job_config(settings: Settings, explicit_path: Path | None) -> JobConfig:
    if explicit_path is not None:
        return load_job_config(explicit_path)
    if settings.job_config_path.exists():
        return load_job_config(settings.job_config_path)
    return JobConfig()


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    if parsed.debug:
        settings.debug = True

    log_level = "DEBUG" if settings.debug else parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)
    logger.info(f"cv-drafter v{__version__} starting")

    try:
        job_config = _resolve_job_config(settings, parsed.jobcfg)
        job = parsed.job or job_config.job
        if not job:
            raise ConfigurationError(
                "No job specified. Provide --job or set 'job' in the job config."
            )

        drafting_config = DraftingConfig()
        if settings.debug:
            drafting_config.debug = True
        drafting_config.require_api_key()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    profile_path = parsed.cv or settings.cv_path
    notes_path = parsed.notes or settings.notes_path
    continuous = (parsed.daemon or job_config.daemon) and not parsed.once
    logger.info("Running %s", "in daemon mode" if continuous else "once")

    runner = AttemptRunner(config=drafting_config)
    scheduler = RetryScheduler(job_config)

    async def _attempt():
        return await runner.run_once(
            job, profile_path=profile_path, notes_path=notes_path
        )

    try:
        asyncio.run(scheduler.run(_attempt, continuous=continuous))
    except (ModelGatewayError, ProfileError) as e:
        logger.error("Attempt failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130

    logger.info("Exiting")
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
