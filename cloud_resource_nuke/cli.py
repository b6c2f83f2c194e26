"""Command line entry point."""

from __future__ import annotations
import argparse
import sys

from . import __version__, aws, gcp
from .aws.defaults import (
    get_default_security_groups,
    get_default_vpcs,
    nuke_default_security_group_rules,
    nuke_default_vpcs,
)
from .confirmation import confirm
from .core import ResourceTypeRegistry, build_inventory, nuke_inventory
from .errors import InvalidFlagError, NukeToolError
from .models import Config, ExclusionPolicy, Inventory
from .utils import cutoff_from_duration, get_logger

logger = get_logger()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="cloud-resource-nuke",
        description="A CLI tool to nuke (delete) cloud resources.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    subparsers = parser.add_subparsers(dest="command", required=True)

    aws_parser = subparsers.add_parser(
        "aws",
        help="BEWARE: DESTRUCTIVE OPERATION! Nukes AWS resources "
        "(ASG, LC, ELB, ELBv2, EC2, EBS, EIP, AMI, Snapshots, ECS, EKS).",
    )
    aws_parser.add_argument(
        "--exclude-region", action="append", default=[], help="regions to exclude"
    )
    aws_parser.add_argument(
        "--resource-type", action="append", default=[], help="Resource types to nuke"
    )
    aws_parser.add_argument(
        "--list-resource-types",
        action="store_true",
        help="List available resource types",
    )
    aws_parser.add_argument(
        "--older-than",
        default="0s",
        help="Only delete resources older than this duration, such as 10m or 8h.",
    )
    aws_parser.add_argument(
        "--force",
        action="store_true",
        help="Skip nuke confirmation prompt. WARNING: this will automatically "
        "delete all resources without any confirmation",
    )
    aws_parser.set_defaults(func=aws_nuke)

    defaults_parser = subparsers.add_parser(
        "defaults-aws",
        help="Nukes unused AWS defaults (VPCs, permissive security group rules) "
        "across all regions enabled for this account.",
    )
    defaults_parser.add_argument(
        "--force",
        action="store_true",
        help="Skip confirmation prompt. WARNING: this will automatically delete "
        "defaults without any confirmation",
    )
    defaults_parser.set_defaults(func=aws_defaults)

    gcp_parser = subparsers.add_parser(
        "gcp", help="Clean up GCP resources (GCE instances)"
    )
    gcp_parser.add_argument(
        "--exclude-region", action="append", default=[], help="regions to exclude"
    )
    gcp_parser.add_argument(
        "--older-than",
        default="0s",
        help="Only delete resources older than this duration, such as 10m or 8h.",
    )
    gcp_parser.add_argument(
        "--force",
        action="store_true",
        help="Skip nuke confirmation prompt. WARNING: this will automatically "
        "delete all resources without any confirmation",
    )
    gcp_parser.set_defaults(func=gcp_nuke)

    return parser.parse_args(argv)


def validate_excluded_regions(excluded: list[str], enabled: list[str]) -> None:
    for region in excluded:
        if region not in enabled:
            raise InvalidFlagError("exclude-region", region)


def nuke_with_confirmation(
    registry: ResourceTypeRegistry,
    inventory: Inventory,
    provider: str,
    force: bool,
    config: Config,
) -> int:
    if inventory.is_empty():
        logger.info("Nothing to nuke, you're all good!")
        return 0

    logger.info(f"The following {provider} resources are going to be nuked: ")
    if not confirm(
        inventory.summary_lines(),
        force=force,
        countdown_seconds=config.force_countdown_seconds,
    ):
        logger.info("Nuke cancelled, nothing was deleted")
        return 0

    errors = nuke_inventory(registry, inventory)
    if errors:
        for error in errors:
            logger.error(str(error))
        logger.error("Some resources failed to nuke.")
        return 1
    return 0


def aws_nuke(args, config: Config) -> int:
    registry = aws.get_registry()

    if args.list_resource_types:
        for name in registry.names():
            print(name)
        return 0

    registry.validate(args.resource_type)
    cutoff = cutoff_from_duration(args.older_than)

    regions = aws.AwsRegionEnumerator(config.opt_in_not_required_regions).enabled_regions()
    validate_excluded_regions(args.exclude_region, regions)

    policy = ExclusionPolicy(frozenset(args.exclude_region), cutoff)
    logger.info("Retrieving all active AWS resources")
    inventory = build_inventory(
        registry,
        regions,
        policy,
        args.resource_type,
        max_workers=config.inventory_max_workers,
    )
    return nuke_with_confirmation(registry, inventory, "AWS", args.force, config)


def aws_defaults(args, config: Config) -> int:
    logger.info("Identifying enabled regions")
    regions = aws.AwsRegionEnumerator(config.opt_in_not_required_regions).enabled_regions()
    for region in regions:
        logger.info(f"Found enabled region {region}")

    errors = []

    logger.info("Discovering default VPCs")
    vpcs = get_default_vpcs(regions)
    if not vpcs:
        logger.info("No default VPCs found.")
    elif confirm(
        [f"* Default VPC {vpc.vpc_id} {vpc.region}" for vpc in vpcs],
        force=args.force,
        question="Are you sure you want to nuke all default VPCs?",
        countdown_seconds=config.force_countdown_seconds,
    ):
        errors.extend(nuke_default_vpcs(vpcs))

    logger.info("Discovering default security groups")
    groups = get_default_security_groups(regions)
    if not groups:
        logger.info("No default security groups found.")
    elif confirm(
        [
            f"* Default rules for SG {sg.group_id} {sg.group_name} {sg.region}"
            for sg in groups
        ],
        force=args.force,
        question="Are you sure you want to nuke the rules in these default "
        "security groups?",
        countdown_seconds=config.force_countdown_seconds,
    ):
        errors.extend(nuke_default_security_group_rules(groups))

    if errors:
        for error in errors:
            logger.error(f"[Failed] {error}")
        return 1
    return 0


def gcp_nuke(args, config: Config) -> int:
    cutoff = cutoff_from_duration(args.older_than)
    context = gcp.default_context()

    for region in args.exclude_region:
        if not context.contains_region(region):
            raise InvalidFlagError("exclude-region", region)

    registry = gcp.get_registry(context)
    policy = ExclusionPolicy(frozenset(args.exclude_region), cutoff)
    logger.info("Retrieving all active GCP resources")
    inventory = build_inventory(
        registry,
        list(context.region_zones),
        policy,
        max_workers=config.inventory_max_workers,
    )
    return nuke_with_confirmation(registry, inventory, "GCP", args.force, config)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = Config()
    try:
        return args.func(args, config)
    except NukeToolError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
