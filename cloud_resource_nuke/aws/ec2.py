"""EC2 resource types: instances, EBS volumes, Elastic IPs, AMIs and snapshots."""

from __future__ import annotations

from ..models import ResourceDescriptor
from ..utils import convert_tags_to_dict, get_logger
from .common import delete_each, get_client, parse_aws_timestamp, waiter_config

logger = get_logger()

INSTANCE_STATES = ["pending", "running", "stopping", "stopped"]
VOLUME_STATES = ["available", "creating", "error"]


def _is_termination_protected(ec2, instance_id: str) -> bool:
    response = ec2.describe_instance_attribute(
        InstanceId=instance_id, Attribute="disableApiTermination"
    )
    return response.get("DisableApiTermination", {}).get("Value", False)


def list_instances(region: str) -> list[ResourceDescriptor]:
    """List instances that are not already shutting down or terminated."""
    ec2 = get_client("ec2", region)
    paginator = ec2.get_paginator("describe_instances")
    descriptors = []

    for page in paginator.paginate(
        Filters=[{"Name": "instance-state-name", "Values": INSTANCE_STATES}]
    ):
        for reservation in page["Reservations"]:
            for instance in reservation["Instances"]:
                instance_id = instance["InstanceId"]
                tags_dict = convert_tags_to_dict(instance.get("Tags", []))
                protected = _is_termination_protected(ec2, instance_id)
                if protected:
                    logger.info(
                        "Instance protected",
                        extra={
                            "instance_id": instance_id,
                            "protection_reason": "Termination protection enabled",
                        },
                    )
                descriptors.append(
                    ResourceDescriptor(
                        identifier=instance_id,
                        region=region,
                        resource_type="ec2",
                        created_at=parse_aws_timestamp(instance.get("LaunchTime")),
                        protected=protected,
                        name=tags_dict.get("Name", ""),
                    )
                )

    return descriptors


def terminate_instances(region: str, instance_ids: list[str]) -> None:
    """Terminate a batch of instances and wait until they are gone."""
    ec2 = get_client("ec2", region)
    ec2.terminate_instances(InstanceIds=instance_ids)
    logger.info(
        f"Terminating {len(instance_ids)} instances, waiting for termination",
        extra={"region": region, "instance_ids": instance_ids},
    )
    ec2.get_waiter("instance_terminated").wait(
        InstanceIds=instance_ids, WaiterConfig=waiter_config()
    )


def list_volumes(region: str) -> list[ResourceDescriptor]:
    """List EBS volumes not attached to anything."""
    ec2 = get_client("ec2", region)
    paginator = ec2.get_paginator("describe_volumes")
    descriptors = []

    for page in paginator.paginate(
        Filters=[{"Name": "status", "Values": VOLUME_STATES}]
    ):
        for volume in page["Volumes"]:
            tags_dict = convert_tags_to_dict(volume.get("Tags", []))
            descriptors.append(
                ResourceDescriptor(
                    identifier=volume["VolumeId"],
                    region=region,
                    resource_type="ebs",
                    created_at=parse_aws_timestamp(volume.get("CreateTime")),
                    name=tags_dict.get("Name", ""),
                )
            )

    return descriptors


def delete_volumes(region: str, volume_ids: list[str]) -> None:
    ec2 = get_client("ec2", region)
    delete_each(
        "ebs",
        volume_ids,
        lambda volume_id: ec2.delete_volume(VolumeId=volume_id),
        not_found_codes=["InvalidVolume.NotFound"],
        wait=lambda deleted: ec2.get_waiter("volume_deleted").wait(
            VolumeIds=deleted, WaiterConfig=waiter_config()
        ),
    )


def list_elastic_ips(region: str) -> list[ResourceDescriptor]:
    """List VPC Elastic IP allocations. AWS exposes no allocation time."""
    ec2 = get_client("ec2", region)
    descriptors = []

    for address in ec2.describe_addresses()["Addresses"]:
        if "AllocationId" not in address:
            continue
        tags_dict = convert_tags_to_dict(address.get("Tags", []))
        descriptors.append(
            ResourceDescriptor(
                identifier=address["AllocationId"],
                region=region,
                resource_type="eip",
                name=tags_dict.get("Name", address.get("PublicIp", "")),
            )
        )

    return descriptors


def release_elastic_ips(region: str, allocation_ids: list[str]) -> None:
    ec2 = get_client("ec2", region)
    delete_each(
        "eip",
        allocation_ids,
        lambda allocation_id: ec2.release_address(AllocationId=allocation_id),
        not_found_codes=["InvalidAllocationID.NotFound"],
    )


def list_amis(region: str) -> list[ResourceDescriptor]:
    """List AMIs owned by this account."""
    ec2 = get_client("ec2", region)
    paginator = ec2.get_paginator("describe_images")
    descriptors = []

    for page in paginator.paginate(Owners=["self"]):
        for image in page["Images"]:
            protection = image.get("DeregistrationProtection", "disabled")
            descriptors.append(
                ResourceDescriptor(
                    identifier=image["ImageId"],
                    region=region,
                    resource_type="ami",
                    created_at=parse_aws_timestamp(image.get("CreationDate")),
                    protected=protection.startswith("enabled"),
                    name=image.get("Name", ""),
                )
            )

    return descriptors


def deregister_amis(region: str, image_ids: list[str]) -> None:
    ec2 = get_client("ec2", region)
    delete_each(
        "ami",
        image_ids,
        lambda image_id: ec2.deregister_image(ImageId=image_id),
        not_found_codes=["InvalidAMIID.NotFound", "InvalidAMIID.Unavailable"],
    )


def list_snapshots(region: str) -> list[ResourceDescriptor]:
    """List EBS snapshots owned by this account."""
    ec2 = get_client("ec2", region)
    paginator = ec2.get_paginator("describe_snapshots")
    descriptors = []

    for page in paginator.paginate(OwnerIds=["self"]):
        for snapshot in page["Snapshots"]:
            tags_dict = convert_tags_to_dict(snapshot.get("Tags", []))
            descriptors.append(
                ResourceDescriptor(
                    identifier=snapshot["SnapshotId"],
                    region=region,
                    resource_type="snap",
                    created_at=parse_aws_timestamp(snapshot.get("StartTime")),
                    name=tags_dict.get("Name", ""),
                )
            )

    return descriptors


def delete_snapshots(region: str, snapshot_ids: list[str]) -> None:
    ec2 = get_client("ec2", region)
    delete_each(
        "snap",
        snapshot_ids,
        lambda snapshot_id: ec2.delete_snapshot(SnapshotId=snapshot_id),
        not_found_codes=["InvalidSnapshot.NotFound"],
    )
