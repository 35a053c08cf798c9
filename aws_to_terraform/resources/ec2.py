"""
EC2 resources: instances, VPCs and subnets.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from aws_to_terraform.hcl import Block
from aws_to_terraform.helpers import (
    get_tag_value,
    monitoring_enabled,
    sanitize_resource_name,
    short_name,
    tags_to_dict,
)
from aws_to_terraform.resources.base import Resource

# https://docs.aws.amazon.com/AWSEC2/latest/APIReference/API_InstanceState.html
TERMINATED = 48


def is_terminated(instance: Dict[str, Any]) -> bool:
    """The high byte of the state code is reserved by AWS and ignored."""
    code = instance.get('State', {}).get('Code')
    return code is not None and (code & 0xFF) == TERMINATED


@dataclass
class Instance(Resource):
    resource_type = 'aws_instance'

    instance_id: str
    ami: Optional[str] = None
    instance_type: Optional[str] = None
    ebs_optimized: Optional[bool] = None
    iam_instance_profile: Optional[str] = None
    key_name: Optional[str] = None
    monitoring: Optional[bool] = None
    security_group_ids: Optional[List[str]] = None
    source_dest_check: Optional[bool] = None
    subnet_id: Optional[str] = None
    vpc_id: Optional[str] = None
    availability_zone: Optional[str] = None
    tenancy: Optional[str] = None
    placement_group: Optional[str] = None
    private_ip: Optional[str] = None
    tags: Optional[Dict[str, str]] = None

    @classmethod
    def from_api(cls, src: Dict[str, Any]) -> 'Instance':
        placement = src.get('Placement', {})
        monitoring = src.get('Monitoring')
        groups = src.get('SecurityGroups')

        return cls(
            instance_id=src['InstanceId'],
            ami=src.get('ImageId'),
            instance_type=src.get('InstanceType'),
            ebs_optimized=src.get('EbsOptimized'),
            iam_instance_profile=short_name(src.get('IamInstanceProfile', {}).get('Arn')),
            key_name=src.get('KeyName'),
            monitoring=monitoring_enabled(monitoring.get('State')) if monitoring is not None else None,
            security_group_ids=[g['GroupId'] for g in groups] if groups is not None else None,
            source_dest_check=src.get('SourceDestCheck'),
            subnet_id=src.get('SubnetId'),
            vpc_id=src.get('VpcId'),
            availability_zone=placement.get('AvailabilityZone'),
            tenancy=placement.get('Tenancy'),
            placement_group=placement.get('GroupName') or None,
            private_ip=src.get('PrivateIpAddress'),
            tags=tags_to_dict(src.get('Tags')),
        )

    def resource_name(self) -> str:
        return sanitize_resource_name(f'{self.instance_id}_instance', 'instance')

    def import_id(self) -> str:
        return self.instance_id

    def to_block(self, name: str) -> Block:
        block = self.new_block(name)
        block.set('ami', self.ami)
        block.set('instance_type', self.instance_type)
        block.set('availability_zone', self.availability_zone)
        block.set('ebs_optimized', self.ebs_optimized)
        block.set('iam_instance_profile', self.iam_instance_profile)
        block.set('key_name', self.key_name)
        block.set('monitoring', self.monitoring)
        block.set('placement_group', self.placement_group)
        block.set('private_ip', self.private_ip)
        block.set('source_dest_check', self.source_dest_check)
        block.set('subnet_id', self.subnet_id)
        block.set('tenancy', self.tenancy)
        block.set('vpc_security_group_ids', self.security_group_ids or None)
        block.set('tags', self.tags or None)
        return block


def map_instances(reservations: List[Dict[str, Any]]) -> List[Instance]:
    """Flatten reservations into instances, skipping terminated ones."""
    instances = []
    for reservation in reservations:
        for src in reservation.get('Instances', []):
            if is_terminated(src):
                continue
            instances.append(Instance.from_api(src))
    return instances


def get_instances(ec2: Any) -> List[Instance]:
    """
    Describe every instance in the client's region.

    Args:
        ec2: boto3 EC2 client

    Returns:
        Instances that are not terminated, in API order
    """
    reservations = []
    paginator = ec2.get_paginator('describe_instances')
    for page in paginator.paginate():
        reservations.extend(page.get('Reservations', []))

    return map_instances(reservations)


@dataclass
class VPC(Resource):
    resource_type = 'aws_vpc'

    vpc_id: str
    cidr_block: Optional[str] = None
    instance_tenancy: Optional[str] = None
    assign_generated_ipv6_cidr_block: Optional[bool] = None
    enable_dns_hostnames: Optional[bool] = None
    enable_dns_support: Optional[bool] = None
    tags: Optional[Dict[str, str]] = None

    @classmethod
    def from_api(cls, src: Dict[str, Any]) -> 'VPC':
        return cls(
            vpc_id=src['VpcId'],
            cidr_block=src.get('CidrBlock'),
            instance_tenancy=src.get('InstanceTenancy'),
            assign_generated_ipv6_cidr_block=True if src.get('Ipv6CidrBlockAssociationSet') else None,
            tags=tags_to_dict(src.get('Tags')),
        )

    def resource_name(self) -> str:
        return sanitize_resource_name(get_tag_value(self.tags, 'Name') or self.vpc_id, 'vpc')

    def import_id(self) -> str:
        return self.vpc_id

    def to_block(self, name: str) -> Block:
        block = self.new_block(name)
        block.set('cidr_block', self.cidr_block)
        block.set('instance_tenancy', self.instance_tenancy)
        block.set('assign_generated_ipv6_cidr_block', self.assign_generated_ipv6_cidr_block)
        block.set('enable_dns_hostnames', self.enable_dns_hostnames)
        block.set('enable_dns_support', self.enable_dns_support)
        block.set('tags', self.tags or None)
        return block


def _vpc_attribute(ec2: Any, vpc_id: str, attribute: str) -> Optional[bool]:
    response = ec2.describe_vpc_attribute(VpcId=vpc_id, Attribute=attribute)
    # enableDnsHostnames -> EnableDnsHostnames
    key = attribute[0].upper() + attribute[1:]
    return response.get(key, {}).get('Value')


def get_vpcs(ec2: Any) -> List[VPC]:
    """
    Describe every VPC, including the DNS attributes describe_vpcs omits.

    Args:
        ec2: boto3 EC2 client

    Returns:
        List of VPCs in API order
    """
    vpcs = []
    paginator = ec2.get_paginator('describe_vpcs')
    for page in paginator.paginate():
        for src in page.get('Vpcs', []):
            vpc = VPC.from_api(src)
            vpc.enable_dns_hostnames = _vpc_attribute(ec2, vpc.vpc_id, 'enableDnsHostnames')
            vpc.enable_dns_support = _vpc_attribute(ec2, vpc.vpc_id, 'enableDnsSupport')
            vpcs.append(vpc)

    return vpcs


@dataclass
class Subnet(Resource):
    resource_type = 'aws_subnet'

    subnet_id: str
    vpc_id: Optional[str] = None
    cidr_block: Optional[str] = None
    availability_zone: Optional[str] = None
    map_public_ip_on_launch: Optional[bool] = None
    assign_ipv6_address_on_creation: Optional[bool] = None
    ipv6_cidr_block: Optional[str] = None
    tags: Optional[Dict[str, str]] = None

    @classmethod
    def from_api(cls, src: Dict[str, Any]) -> 'Subnet':
        ipv6 = src.get('Ipv6CidrBlockAssociationSet') or [{}]
        return cls(
            subnet_id=src['SubnetId'],
            vpc_id=src.get('VpcId'),
            cidr_block=src.get('CidrBlock'),
            availability_zone=src.get('AvailabilityZone'),
            map_public_ip_on_launch=src.get('MapPublicIpOnLaunch'),
            assign_ipv6_address_on_creation=src.get('AssignIpv6AddressOnCreation'),
            ipv6_cidr_block=ipv6[0].get('Ipv6CidrBlock'),
            tags=tags_to_dict(src.get('Tags')),
        )

    def resource_name(self) -> str:
        return sanitize_resource_name(get_tag_value(self.tags, 'Name') or self.subnet_id, 'subnet')

    def import_id(self) -> str:
        return self.subnet_id

    def to_block(self, name: str) -> Block:
        block = self.new_block(name)
        block.set('vpc_id', self.vpc_id)
        block.set('cidr_block', self.cidr_block)
        block.set('availability_zone', self.availability_zone)
        block.set('map_public_ip_on_launch', self.map_public_ip_on_launch)
        block.set('assign_ipv6_address_on_creation', self.assign_ipv6_address_on_creation)
        block.set('ipv6_cidr_block', self.ipv6_cidr_block)
        block.set('tags', self.tags or None)
        return block


def get_subnets(ec2: Any) -> List[Subnet]:
    """Describe every subnet in the client's region."""
    subnets = []
    paginator = ec2.get_paginator('describe_subnets')
    for page in paginator.paginate():
        subnets.extend(Subnet.from_api(src) for src in page.get('Subnets', []))
    return subnets
