"""Unit tests for default VPC and default security group cleanup."""

import pytest
from unittest.mock import MagicMock, call, patch

from cloud_resource_nuke.aws import defaults
from cloud_resource_nuke.aws.defaults import DefaultSecurityGroup, DefaultVpc
from cloud_resource_nuke.errors import DiscoveryError

pytestmark = [pytest.mark.unit, pytest.mark.aws]


@pytest.fixture
def mock_ec2():
    with patch("cloud_resource_nuke.aws.defaults.boto3") as mock_boto3:
        client = MagicMock()
        mock_boto3.client.return_value = client
        yield client


class TestDefaultVpcs:
    def test_get_default_vpcs(self, mock_ec2):
        mock_ec2.describe_vpcs.side_effect = [
            {"Vpcs": [{"VpcId": "vpc-1"}]},
            {"Vpcs": []},
        ]

        vpcs = defaults.get_default_vpcs(["us-east-1", "eu-west-1"])

        assert vpcs == [DefaultVpc("us-east-1", "vpc-1")]
        mock_ec2.describe_vpcs.assert_called_with(
            Filters=[{"Name": "isDefault", "Values": ["true"]}]
        )

    def test_discovery_failure(self, mock_ec2, make_client_error):
        mock_ec2.describe_vpcs.side_effect = make_client_error(
            "UnauthorizedOperation", "DescribeVpcs"
        )

        with pytest.raises(DiscoveryError, match="default-vpc"):
            defaults.get_default_vpcs(["us-east-1"])

    def test_nuke_default_vpc_in_dependency_order(self, mock_ec2):
        """
        GIVEN a default VPC with an IGW, a subnet, route tables and security groups
        WHEN it is nuked
        THEN dependencies are removed first, main route table and default SG are kept
        """
        mock_ec2.describe_internet_gateways.return_value = {
            "InternetGateways": [{"InternetGatewayId": "igw-1"}]
        }
        mock_ec2.describe_subnets.return_value = {"Subnets": [{"SubnetId": "subnet-1"}]}
        mock_ec2.describe_route_tables.return_value = {
            "RouteTables": [
                {"RouteTableId": "rtb-main", "Associations": [{"Main": True}]},
                {"RouteTableId": "rtb-extra", "Associations": []},
            ]
        }
        mock_ec2.describe_security_groups.return_value = {
            "SecurityGroups": [
                {"GroupId": "sg-default", "GroupName": "default"},
                {"GroupId": "sg-web", "GroupName": "web"},
            ]
        }

        defaults.nuke_default_vpc(DefaultVpc("us-east-1", "vpc-1"))

        deletes = [
            c
            for c in mock_ec2.mock_calls
            if c[0].startswith(("detach_", "delete_"))
        ]
        assert deletes == [
            call.detach_internet_gateway(InternetGatewayId="igw-1", VpcId="vpc-1"),
            call.delete_internet_gateway(InternetGatewayId="igw-1"),
            call.delete_subnet(SubnetId="subnet-1"),
            call.delete_route_table(RouteTableId="rtb-extra"),
            call.delete_security_group(GroupId="sg-web"),
            call.delete_vpc(VpcId="vpc-1"),
        ]

    def test_failure_in_one_region_does_not_stop_others(
        self, mock_ec2, make_client_error
    ):
        mock_ec2.describe_internet_gateways.return_value = {"InternetGateways": []}
        mock_ec2.describe_subnets.return_value = {"Subnets": []}
        mock_ec2.describe_route_tables.return_value = {"RouteTables": []}
        mock_ec2.describe_security_groups.return_value = {"SecurityGroups": []}
        mock_ec2.delete_vpc.side_effect = [
            make_client_error("DependencyViolation", "DeleteVpc"),
            None,
        ]
        vpcs = [DefaultVpc("us-east-1", "vpc-1"), DefaultVpc("us-west-2", "vpc-2")]

        errors = defaults.nuke_default_vpcs(vpcs)

        assert [e.resource_id for e in errors] == ["vpc-1"]
        assert mock_ec2.delete_vpc.call_count == 2
        assert "us-east-1" in str(errors[0])


class TestDefaultSecurityGroups:
    def test_get_default_security_groups(self, mock_ec2):
        mock_ec2.get_paginator.return_value.paginate.return_value = [
            {"SecurityGroups": [{"GroupId": "sg-1", "GroupName": "default"}]}
        ]

        groups = defaults.get_default_security_groups(["us-east-1"])

        assert groups == [DefaultSecurityGroup("us-east-1", "sg-1", "default")]

    def test_revoke_default_rules(self, mock_ec2):
        ingress = [{"IpProtocol": "-1", "UserIdGroupPairs": [{"GroupId": "sg-1"}]}]
        egress = [{"IpProtocol": "-1", "IpRanges": [{"CidrIp": "0.0.0.0/0"}]}]
        mock_ec2.describe_security_groups.return_value = {
            "SecurityGroups": [
                {"IpPermissions": ingress, "IpPermissionsEgress": egress}
            ]
        }

        defaults.revoke_default_rules(
            DefaultSecurityGroup("us-east-1", "sg-1", "default")
        )

        mock_ec2.revoke_security_group_ingress.assert_called_once_with(
            GroupId="sg-1", IpPermissions=ingress
        )
        mock_ec2.revoke_security_group_egress.assert_called_once_with(
            GroupId="sg-1", IpPermissions=egress
        )

    def test_groups_without_rules_are_left_alone(self, mock_ec2):
        mock_ec2.describe_security_groups.return_value = {
            "SecurityGroups": [{"IpPermissions": [], "IpPermissionsEgress": []}]
        }

        defaults.revoke_default_rules(
            DefaultSecurityGroup("us-east-1", "sg-1", "default")
        )

        mock_ec2.revoke_security_group_ingress.assert_not_called()
        mock_ec2.revoke_security_group_egress.assert_not_called()

    def test_missing_group_is_skipped(self, mock_ec2, make_client_error):
        mock_ec2.describe_security_groups.side_effect = [
            make_client_error("InvalidGroup.NotFound"),
            make_client_error("UnauthorizedOperation"),
        ]
        groups = [
            DefaultSecurityGroup("us-east-1", "sg-1", "default"),
            DefaultSecurityGroup("us-west-2", "sg-2", "default"),
        ]

        errors = defaults.nuke_default_security_group_rules(groups)

        assert [e.resource_id for e in errors] == ["sg-2"]
