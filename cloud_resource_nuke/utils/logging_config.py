"""Logging for the command line tool, built on AWS Lambda Powertools."""

from aws_lambda_powertools import Logger

from ..models.config import LOG_LEVEL

# One structured logger shared by every module; records go to stdout as JSON
logger = Logger(
    service="cloud-resource-nuke",
    level=LOG_LEVEL,
)


def get_logger():
    """Return the shared logger.

    Pass per-resource fields (region, resource type, identifiers, error
    codes) through ``extra={...}`` so a run can be filtered with jq.
    """
    return logger
