"""Default VPCs and default security group rules.

Every region of a new account ships with a default VPC and every VPC with a
"default" security group whose rules allow all egress and all traffic from
itself. Default VPCs are deleted in dependency order; default security
groups cannot be deleted, so their rules are revoked instead.
"""

from __future__ import annotations
from dataclasses import dataclass

import boto3
from botocore.exceptions import ClientError

from ..errors import DiscoveryError
from ..utils import get_error_code, get_logger

logger = get_logger()


@dataclass(frozen=True)
class DefaultVpc:
    region: str
    vpc_id: str


@dataclass(frozen=True)
class DefaultSecurityGroup:
    region: str
    group_id: str
    group_name: str


@dataclass
class DefaultsError:
    """A default VPC or security group that could not be cleaned up."""

    region: str
    resource_id: str
    error: Exception

    def __str__(self) -> str:
        return f"[{self.region}] {self.resource_id}: {self.error}"


def get_default_vpcs(regions: list[str]) -> list[DefaultVpc]:
    vpcs = []
    for region in regions:
        ec2 = boto3.client("ec2", region_name=region)
        try:
            response = ec2.describe_vpcs(
                Filters=[{"Name": "isDefault", "Values": ["true"]}]
            )
        except ClientError as e:
            raise DiscoveryError(region, "default-vpc", e) from e
        for vpc in response["Vpcs"]:
            vpcs.append(DefaultVpc(region=region, vpc_id=vpc["VpcId"]))
    return vpcs


def delete_internet_gateways(ec2, vpc_id: str) -> None:
    """Detach and delete internet gateways."""
    igws = ec2.describe_internet_gateways(
        Filters=[{"Name": "attachment.vpc-id", "Values": [vpc_id]}]
    )["InternetGateways"]

    for igw in igws:
        ec2.detach_internet_gateway(
            InternetGatewayId=igw["InternetGatewayId"], VpcId=vpc_id
        )
        ec2.delete_internet_gateway(InternetGatewayId=igw["InternetGatewayId"])
        logger.info(f"Deleted IGW: {igw['InternetGatewayId']}")


def delete_subnets(ec2, vpc_id: str) -> None:
    subnets = ec2.describe_subnets(Filters=[{"Name": "vpc-id", "Values": [vpc_id]}])[
        "Subnets"
    ]
    for subnet in subnets:
        ec2.delete_subnet(SubnetId=subnet["SubnetId"])
        logger.info(f"Deleted subnet: {subnet['SubnetId']}")


def delete_route_tables(ec2, vpc_id: str) -> None:
    """Delete route tables; the main one goes away with the VPC."""
    rts = ec2.describe_route_tables(Filters=[{"Name": "vpc-id", "Values": [vpc_id]}])[
        "RouteTables"
    ]
    for rt in rts:
        is_main = any(assoc.get("Main", False) for assoc in rt.get("Associations", []))
        if is_main:
            continue
        ec2.delete_route_table(RouteTableId=rt["RouteTableId"])
        logger.info(f"Deleted route table: {rt['RouteTableId']}")


def delete_security_groups(ec2, vpc_id: str) -> None:
    """Delete non-default security groups; the default one goes away with the VPC."""
    sgs = ec2.describe_security_groups(
        Filters=[{"Name": "vpc-id", "Values": [vpc_id]}]
    )["SecurityGroups"]
    for sg in sgs:
        if sg["GroupName"] == "default":
            continue
        ec2.delete_security_group(GroupId=sg["GroupId"])
        logger.info(f"Deleted SG: {sg['GroupId']}")


def nuke_default_vpc(vpc: DefaultVpc) -> None:
    ec2 = boto3.client("ec2", region_name=vpc.region)
    delete_internet_gateways(ec2, vpc.vpc_id)
    delete_subnets(ec2, vpc.vpc_id)
    delete_route_tables(ec2, vpc.vpc_id)
    delete_security_groups(ec2, vpc.vpc_id)
    ec2.delete_vpc(VpcId=vpc.vpc_id)
    logger.info(
        "Deleted default VPC", extra={"vpc_id": vpc.vpc_id, "region": vpc.region}
    )


def nuke_default_vpcs(vpcs: list[DefaultVpc]) -> list[DefaultsError]:
    """Delete each default VPC; a failure in one region does not stop the others."""
    errors = []
    for vpc in vpcs:
        try:
            nuke_default_vpc(vpc)
        except ClientError as e:
            logger.error(
                "Failed to delete default VPC",
                extra={
                    "vpc_id": vpc.vpc_id,
                    "region": vpc.region,
                    "error_code": get_error_code(e),
                    "error": str(e),
                },
            )
            errors.append(DefaultsError(vpc.region, vpc.vpc_id, e))
    return errors


def get_default_security_groups(regions: list[str]) -> list[DefaultSecurityGroup]:
    groups = []
    for region in regions:
        ec2 = boto3.client("ec2", region_name=region)
        paginator = ec2.get_paginator("describe_security_groups")
        try:
            for page in paginator.paginate(
                Filters=[{"Name": "group-name", "Values": ["default"]}]
            ):
                for sg in page["SecurityGroups"]:
                    groups.append(
                        DefaultSecurityGroup(
                            region=region,
                            group_id=sg["GroupId"],
                            group_name=sg["GroupName"],
                        )
                    )
        except ClientError as e:
            raise DiscoveryError(region, "default-security-group", e) from e
    return groups


def revoke_default_rules(group: DefaultSecurityGroup) -> None:
    """Revoke every ingress and egress rule of a default security group."""
    ec2 = boto3.client("ec2", region_name=group.region)
    response = ec2.describe_security_groups(GroupIds=[group.group_id])
    if not response["SecurityGroups"]:
        return
    sg = response["SecurityGroups"][0]

    if sg.get("IpPermissions"):
        ec2.revoke_security_group_ingress(
            GroupId=group.group_id, IpPermissions=sg["IpPermissions"]
        )
    if sg.get("IpPermissionsEgress"):
        ec2.revoke_security_group_egress(
            GroupId=group.group_id, IpPermissions=sg["IpPermissionsEgress"]
        )
    logger.info(
        "Revoked default security group rules",
        extra={"group_id": group.group_id, "region": group.region},
    )


def nuke_default_security_group_rules(
    groups: list[DefaultSecurityGroup],
) -> list[DefaultsError]:
    errors = []
    for group in groups:
        try:
            revoke_default_rules(group)
        except ClientError as e:
            error_code = get_error_code(e)
            if error_code == "InvalidGroup.NotFound":
                # Removed together with its default VPC
                continue
            logger.error(
                "Failed to revoke default security group rules",
                extra={
                    "group_id": group.group_id,
                    "region": group.region,
                    "error_code": error_code,
                    "error": str(e),
                },
            )
            errors.append(DefaultsError(group.region, group.group_id, e))
    return errors
