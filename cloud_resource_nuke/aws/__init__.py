"""AWS resource types, in the order they must be nuked."""

from ..core import ResourceType, ResourceTypeRegistry
from ..models.config import EKS_SUPPORTED_REGIONS
from . import autoscaling, ec2, ecs, eks, elb
from .regions import AwsRegionEnumerator

# Tentative batch size to stay below AWS API throttling
DEFAULT_BATCH_SIZE = 49

# Dependents first: groups before the launch configurations they use, load
# balancers and instances before volumes and addresses, images before the
# snapshots backing them.
AWS_NUKE_ORDER = (
    "asg",
    "lc",
    "elb",
    "elbv2",
    "ec2",
    "ebs",
    "eip",
    "ami",
    "snap",
    "ecsserv",
    "ekscluster",
)

AWS_RESOURCE_TYPES = (
    ResourceType(
        name="asg",
        list_resources=autoscaling.list_auto_scaling_groups,
        delete_resources=autoscaling.delete_auto_scaling_groups,
        max_batch_size=DEFAULT_BATCH_SIZE,
        description="Auto Scaling groups",
    ),
    ResourceType(
        name="lc",
        list_resources=autoscaling.list_launch_configurations,
        delete_resources=autoscaling.delete_launch_configurations,
        max_batch_size=DEFAULT_BATCH_SIZE,
        description="Launch configurations",
    ),
    ResourceType(
        name="elb",
        list_resources=elb.list_classic_load_balancers,
        delete_resources=elb.delete_classic_load_balancers,
        max_batch_size=DEFAULT_BATCH_SIZE,
        description="Classic load balancers",
    ),
    ResourceType(
        name="elbv2",
        list_resources=elb.list_load_balancers_v2,
        delete_resources=elb.delete_load_balancers_v2,
        max_batch_size=DEFAULT_BATCH_SIZE,
        description="Application and network load balancers",
    ),
    ResourceType(
        name="ec2",
        list_resources=ec2.list_instances,
        delete_resources=ec2.terminate_instances,
        max_batch_size=DEFAULT_BATCH_SIZE,
        description="EC2 instances",
    ),
    ResourceType(
        name="ebs",
        list_resources=ec2.list_volumes,
        delete_resources=ec2.delete_volumes,
        max_batch_size=DEFAULT_BATCH_SIZE,
        description="Unattached EBS volumes",
    ),
    ResourceType(
        name="eip",
        list_resources=ec2.list_elastic_ips,
        delete_resources=ec2.release_elastic_ips,
        max_batch_size=DEFAULT_BATCH_SIZE,
        description="Elastic IP addresses",
    ),
    ResourceType(
        name="ami",
        list_resources=ec2.list_amis,
        delete_resources=ec2.deregister_amis,
        max_batch_size=DEFAULT_BATCH_SIZE,
        description="Self-owned AMIs",
    ),
    ResourceType(
        name="snap",
        list_resources=ec2.list_snapshots,
        delete_resources=ec2.delete_snapshots,
        max_batch_size=DEFAULT_BATCH_SIZE,
        description="Self-owned EBS snapshots",
    ),
    ResourceType(
        name="ecsserv",
        list_resources=ecs.list_services,
        delete_resources=ecs.delete_services,
        max_batch_size=DEFAULT_BATCH_SIZE,
        description="ECS services",
    ),
    ResourceType(
        name="ekscluster",
        list_resources=eks.list_clusters,
        delete_resources=eks.delete_clusters,
        max_batch_size=10,
        regions=EKS_SUPPORTED_REGIONS,
        description="EKS clusters",
    ),
)


def get_registry() -> ResourceTypeRegistry:
    return ResourceTypeRegistry(AWS_RESOURCE_TYPES, AWS_NUKE_ORDER)


__all__ = [
    "AWS_NUKE_ORDER",
    "AWS_RESOURCE_TYPES",
    "AwsRegionEnumerator",
    "get_registry",
]
