"""GCP project and region discovery."""

from __future__ import annotations
from dataclasses import dataclass, field

import google.auth
from google.cloud import compute_v1

from ..errors import ConfigurationError
from ..models.config import GOOGLE_CLOUD_PROJECT
from ..utils import get_logger

logger = get_logger()


def zone_from_url(url: str) -> str:
    """Return the last path segment of a zone URL (or the zone name itself)."""
    zone = url.rstrip("/").split("/")[-1]
    if not zone:
        raise ValueError(f"got invalid zone url: {url}")
    return zone


@dataclass
class GcpContext:
    """The project being nuked and the zones of each of its regions."""

    project: str
    region_zones: dict[str, list[str]] = field(default_factory=dict)

    def contains_region(self, region: str) -> bool:
        return region in self.region_zones

    def zones(self, region: str) -> list[str]:
        return self.region_zones.get(region, [])

    def region_of_zone(self, zone: str) -> str:
        for region, zones in self.region_zones.items():
            if zone in zones:
                return region
        raise ValueError(f"could not get region for zone: {zone}")


def default_project() -> str:
    """Project from GOOGLE_CLOUD_PROJECT or the default credential chain."""
    if GOOGLE_CLOUD_PROJECT:
        return GOOGLE_CLOUD_PROJECT
    _, project = google.auth.default()
    if not project:
        raise ConfigurationError(
            "No GCP project found; set GOOGLE_CLOUD_PROJECT or configure "
            "application default credentials with a project"
        )
    return project


class GcpRegionEnumerator:
    """Lists regions of a project whose status is UP."""

    def __init__(self, project: str, client=None):
        self.project = project
        self.client = client or compute_v1.RegionsClient()

    def region_zones(self) -> dict[str, list[str]]:
        region_zones = {}
        for region in self.client.list(project=self.project):
            if region.status != "UP":
                logger.info(f"Skipping region {region.name} (status {region.status})")
                continue
            region_zones[region.name] = [zone_from_url(url) for url in region.zones]
        return region_zones

    def enabled_regions(self) -> list[str]:
        return list(self.region_zones())


def default_context() -> GcpContext:
    project = default_project()
    logger.info(f"Using project: {project}")
    enumerator = GcpRegionEnumerator(project)
    return GcpContext(project=project, region_zones=enumerator.region_zones())
