"""Load balancer resource types: classic ELBs and ALB/NLBs."""

from __future__ import annotations

from ..models import ResourceDescriptor
from ..utils import get_logger
from .common import delete_each, get_client, parse_aws_timestamp, waiter_config

logger = get_logger()


def list_classic_load_balancers(region: str) -> list[ResourceDescriptor]:
    elb = get_client("elb", region)
    paginator = elb.get_paginator("describe_load_balancers")
    descriptors = []

    for page in paginator.paginate():
        for lb in page["LoadBalancerDescriptions"]:
            descriptors.append(
                ResourceDescriptor(
                    identifier=lb["LoadBalancerName"],
                    region=region,
                    resource_type="elb",
                    created_at=parse_aws_timestamp(lb.get("CreatedTime")),
                )
            )

    return descriptors


def delete_classic_load_balancers(region: str, names: list[str]) -> None:
    elb = get_client("elb", region)
    delete_each(
        "elb",
        names,
        lambda name: elb.delete_load_balancer(LoadBalancerName=name),
    )


def _is_deletion_protected(elbv2, arn: str) -> bool:
    attributes = elbv2.describe_load_balancer_attributes(LoadBalancerArn=arn)[
        "Attributes"
    ]
    for attribute in attributes:
        if attribute["Key"] == "deletion_protection.enabled":
            return attribute["Value"].lower() == "true"
    return False


def list_load_balancers_v2(region: str) -> list[ResourceDescriptor]:
    """List application, network and gateway load balancers."""
    elbv2 = get_client("elbv2", region)
    paginator = elbv2.get_paginator("describe_load_balancers")
    descriptors = []

    for page in paginator.paginate():
        for lb in page["LoadBalancers"]:
            arn = lb["LoadBalancerArn"]
            protected = _is_deletion_protected(elbv2, arn)
            if protected:
                logger.info(
                    "Load balancer protected",
                    extra={
                        "load_balancer": lb["LoadBalancerName"],
                        "protection_reason": "Deletion protection enabled",
                    },
                )
            descriptors.append(
                ResourceDescriptor(
                    identifier=arn,
                    region=region,
                    resource_type="elbv2",
                    created_at=parse_aws_timestamp(lb.get("CreatedTime")),
                    protected=protected,
                    name=lb["LoadBalancerName"],
                )
            )

    return descriptors


def delete_load_balancers_v2(region: str, arns: list[str]) -> None:
    elbv2 = get_client("elbv2", region)
    delete_each(
        "elbv2",
        arns,
        lambda arn: elbv2.delete_load_balancer(LoadBalancerArn=arn),
        not_found_codes=["LoadBalancerNotFound"],
        wait=lambda deleted: elbv2.get_waiter("load_balancers_deleted").wait(
            LoadBalancerArns=deleted, WaiterConfig=waiter_config()
        ),
    )
