"""EKS clusters resource type."""

from __future__ import annotations

from ..models import ResourceDescriptor
from ..utils import get_logger
from .common import delete_each, get_client, parse_aws_timestamp, waiter_config

logger = get_logger()


def list_clusters(region: str) -> list[ResourceDescriptor]:
    eks = get_client("eks", region)
    descriptors = []

    for page in eks.get_paginator("list_clusters").paginate():
        for cluster_name in page["clusters"]:
            cluster = eks.describe_cluster(name=cluster_name)["cluster"]
            descriptors.append(
                ResourceDescriptor(
                    identifier=cluster_name,
                    region=region,
                    resource_type="ekscluster",
                    created_at=parse_aws_timestamp(cluster.get("createdAt")),
                    protected=bool(cluster.get("deletionProtection", False)),
                )
            )

    return descriptors


def _delete_node_groups(eks, cluster_name: str) -> None:
    """Node groups must be gone before the cluster itself can be deleted."""
    node_groups = []
    for page in eks.get_paginator("list_nodegroups").paginate(
        clusterName=cluster_name
    ):
        node_groups.extend(page["nodegroups"])

    for node_group in node_groups:
        logger.info(
            "Deleting node group",
            extra={"cluster_name": cluster_name, "node_group": node_group},
        )
        eks.delete_nodegroup(clusterName=cluster_name, nodegroupName=node_group)

    waiter = eks.get_waiter("nodegroup_deleted")
    for node_group in node_groups:
        waiter.wait(
            clusterName=cluster_name,
            nodegroupName=node_group,
            WaiterConfig=waiter_config(),
        )


def delete_clusters(region: str, cluster_names: list[str]) -> None:
    eks = get_client("eks", region)

    def delete_one(cluster_name: str) -> None:
        _delete_node_groups(eks, cluster_name)
        eks.delete_cluster(name=cluster_name)

    def wait_deleted(deleted: list[str]) -> None:
        waiter = eks.get_waiter("cluster_deleted")
        for cluster_name in deleted:
            waiter.wait(name=cluster_name, WaiterConfig=waiter_config())

    delete_each(
        "ekscluster",
        cluster_names,
        delete_one,
        not_found_codes=["ResourceNotFoundException"],
        wait=wait_deleted,
    )
