"""ECS services resource type."""

from __future__ import annotations
from collections import defaultdict


from ..models import ResourceDescriptor
from .common import delete_each, get_client, parse_aws_timestamp, waiter_config

# DescribeServices accepts at most 10 services per call
DESCRIBE_SERVICES_LIMIT = 10


def _list_cluster_arns(ecs) -> list[str]:
    cluster_arns = []
    for page in ecs.get_paginator("list_clusters").paginate():
        cluster_arns.extend(page["clusterArns"])
    return cluster_arns


def _list_service_arns(ecs, cluster_arn: str) -> list[str]:
    service_arns = []
    for page in ecs.get_paginator("list_services").paginate(cluster=cluster_arn):
        service_arns.extend(page["serviceArns"])
    return service_arns


def _cluster_of(ecs, service_arn: str) -> str:
    """
    Resolve the cluster owning a service.

    Current ARNs embed the cluster (``service/<cluster>/<service>``); legacy
    ARNs (``service/<service>``) are looked up cluster by cluster.
    """
    resource = service_arn.split(":", 5)[-1]
    parts = resource.split("/")
    if len(parts) == 3:
        return parts[1]

    for cluster_arn in _list_cluster_arns(ecs):
        if service_arn in _list_service_arns(ecs, cluster_arn):
            return cluster_arn
    raise LookupError(f"No cluster found for ECS service {service_arn}")


def list_services(region: str) -> list[ResourceDescriptor]:
    ecs = get_client("ecs", region)
    descriptors = []

    for cluster_arn in _list_cluster_arns(ecs):
        service_arns = _list_service_arns(ecs, cluster_arn)
        for i in range(0, len(service_arns), DESCRIBE_SERVICES_LIMIT):
            chunk = service_arns[i : i + DESCRIBE_SERVICES_LIMIT]
            response = ecs.describe_services(cluster=cluster_arn, services=chunk)
            for service in response["services"]:
                descriptors.append(
                    ResourceDescriptor(
                        identifier=service["serviceArn"],
                        region=region,
                        resource_type="ecsserv",
                        created_at=parse_aws_timestamp(service.get("createdAt")),
                        name=service.get("serviceName", ""),
                    )
                )

    return descriptors


def delete_services(region: str, service_arns: list[str]) -> None:
    """Scale services to zero, delete them and wait until they are inactive."""
    ecs = get_client("ecs", region)
    clusters = {}

    def delete_one(service_arn: str) -> None:
        cluster = _cluster_of(ecs, service_arn)
        ecs.update_service(cluster=cluster, service=service_arn, desiredCount=0)
        ecs.delete_service(cluster=cluster, service=service_arn, force=True)
        clusters[service_arn] = cluster

    def wait_inactive(deleted: list[str]) -> None:
        # Services that were already gone have no cluster recorded
        by_cluster = defaultdict(list)
        for service_arn in deleted:
            if service_arn in clusters:
                by_cluster[clusters.pop(service_arn)].append(service_arn)

        waiter = ecs.get_waiter("services_inactive")
        for cluster, arns in by_cluster.items():
            for i in range(0, len(arns), DESCRIBE_SERVICES_LIMIT):
                waiter.wait(
                    cluster=cluster,
                    services=arns[i : i + DESCRIBE_SERVICES_LIMIT],
                    WaiterConfig=waiter_config(),
                )

    delete_each(
        "ecsserv",
        service_arns,
        delete_one,
        not_found_codes=["ServiceNotFoundException", "ServiceNotActiveException"],
        wait=wait_inactive,
    )
