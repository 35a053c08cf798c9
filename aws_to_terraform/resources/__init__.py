"""Resource families, keyed by boto3 service name and resource kind."""

from typing import Any, Callable, Dict, List

from aws_to_terraform.resources import ec2, iam, route53, s3
from aws_to_terraform.resources.base import Resource

Fetcher = Callable[[Any], List[Resource]]

RESOURCE_TYPES: Dict[str, Dict[str, Fetcher]] = {
    'ec2': {
        'instances': ec2.get_instances,
        'vpcs': ec2.get_vpcs,
        'subnets': ec2.get_subnets,
    },
    'iam': {
        'policies': iam.get_policies,
        'roles': iam.get_roles,
        'users': iam.get_users,
        'groups': iam.get_groups,
    },
    's3': {
        'buckets': s3.get_buckets,
    },
    'route53': {
        'zones': route53.get_zones,
        'records': route53.get_records,
    },
}

__all__ = ['RESOURCE_TYPES', 'Resource']
