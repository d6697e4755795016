"""
Wise Sandbox Transfer - Main Orchestrator

This script runs one SGD -> GBP transfer against the Wise API:
1. Find the personal profile
2. Create a quote for 1000 SGD and show the BANK_TRANSFER details
3. Register the GBP recipient account
4. Create the transfer and show its status

Progress goes to stdout, warnings and errors to stderr. A failed run is
logged; the process still exits normally.
"""

import sys
import logging
from dotenv import load_dotenv

# Load .env file if it exists (for local development)
load_dotenv()

from config.settings import Settings
from src.wise_client import WiseClient
from src.pipeline import PipelineResult, TransferPipeline

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def configure_logging(level: int = logging.INFO) -> None:
    """
    Send INFO and DEBUG to stdout, WARNING and above to stderr.
    """
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_BelowWarning())

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[stdout_handler, stderr_handler],
        force=True,
    )


def validate_environment(settings: Settings) -> bool:
    """
    Check the API token is present.

    A missing token is only reported; the API rejects the first request
    with an authorization error.

    Returns:
        True if the token is set
    """
    if not settings.has_token:
        logger.warning("WISE_API_TOKEN is not set; requests will be unauthorized")
        return False

    logger.info(f"Using Wise API at {settings.base_url}")
    return True


def run_transfer(settings: Settings) -> PipelineResult:
    """
    Build the client and pipeline from settings and run it once.

    Args:
        settings: Injected connection settings

    Returns:
        PipelineResult of the run
    """
    client = WiseClient(settings)
    pipeline = TransferPipeline(client)
    return pipeline.run()


def report_failure(result: PipelineResult) -> None:
    """Log the step that stopped the run and why."""
    logger.error("An error occurred during the transfer process:")
    logger.error(f"  Step:    {result.failed_step}")
    logger.error(f"  Failure: {result.failure}")
    logger.error(f"  Error:   {result.error}")


def main() -> None:
    """
    Main entry point for the transfer run.

    Errors are logged and not converted to an exit code.
    """
    configure_logging()

    logger.info("=" * 50)
    logger.info("Wise Transfer - Starting")
    logger.info("=" * 50)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return

    validate_environment(settings)

    try:
        result = run_transfer(settings)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return

    if not result.success:
        report_failure(result)
        return

    logger.info("=" * 50)
    logger.info("Transfer complete")
    logger.info("=" * 50)


if __name__ == "__main__":
    main()
