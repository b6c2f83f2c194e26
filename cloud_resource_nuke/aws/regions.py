"""Enabled AWS region discovery."""

from __future__ import annotations
import random

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import RegionsExhaustedError
from ..models.config import OPT_IN_NOT_REQUIRED_REGIONS
from ..utils import get_logger

logger = get_logger()


class AwsRegionEnumerator:
    """
    Lists enabled regions without relying on a configured default region.

    DescribeRegions only returns regions enabled for the account, but it must
    be sent to some region first. Seed regions are drawn at random from the
    regions enabled by default; an operator may still have disabled one of
    them, so each failure moves on to a different candidate.
    """

    def __init__(self, seed_regions=OPT_IN_NOT_REQUIRED_REGIONS, rng=None):
        self.seed_regions = list(seed_regions)
        self.rng = rng or random.Random()

    def _describe_regions(self, region: str) -> list[str]:
        ec2 = boto3.client("ec2", region_name=region)
        response = ec2.describe_regions()
        return [r["RegionName"] for r in response["Regions"]]

    def enabled_regions(self) -> list[str]:
        candidates = self.rng.sample(self.seed_regions, len(self.seed_regions))
        attempted = []

        for region in candidates:
            attempted.append(region)
            try:
                regions = self._describe_regions(region)
            except (ClientError, BotoCoreError) as e:
                logger.warning(
                    "Seed region unavailable, trying another",
                    extra={"region": region, "error": str(e)},
                )
                continue

            logger.info(
                f"Found {len(regions)} enabled regions",
                extra={"seed_region": region},
            )
            return regions

        raise RegionsExhaustedError(attempted)
