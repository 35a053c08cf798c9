"""
S3 buckets and their inline configurations.

Each bucket needs one call per configuration kind. Buckets without a given
configuration answer with one of the allow-listed "not found" errors, which
leave that configuration unset instead of failing the run.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from aws_to_terraform.errors import call_optional
from aws_to_terraform.hcl import Block, Heredoc
from aws_to_terraform.helpers import pretty_json, sanitize_resource_name
from aws_to_terraform.resources.base import Resource

DEFAULT_REGION = 'us-east-1'

# Location constraints that predate region names
_LEGACY_LOCATIONS = {'EU': 'eu-west-1'}


def bucket_region(location: Optional[Dict[str, Any]]) -> str:
    """An empty location constraint means the bucket lives in us-east-1."""
    constraint = (location or {}).get('LocationConstraint')
    if not constraint:
        return DEFAULT_REGION
    return _LEGACY_LOCATIONS.get(constraint, constraint)


def _filter_prefix(rule: Dict[str, Any]) -> Optional[str]:
    if 'Filter' in rule and 'Prefix' in rule['Filter']:
        return rule['Filter']['Prefix']
    return rule.get('Prefix')


def map_website(src: Optional[Dict[str, Any]]) -> Optional[Dict[str, Optional[str]]]:
    if src is None:
        return None

    redirect = None
    if 'RedirectAllRequestsTo' in src:
        target = src['RedirectAllRequestsTo']
        protocol = target.get('Protocol')
        redirect = f"{protocol}://{target['HostName']}" if protocol else target['HostName']

    return {
        'index_document': src.get('IndexDocument', {}).get('Suffix'),
        'error_document': src.get('ErrorDocument', {}).get('Key'),
        'redirect_all_requests_to': redirect,
    }


def map_cors_rules(src: Optional[Dict[str, Any]]) -> Optional[List[Dict[str, Any]]]:
    if src is None:
        return None
    return [
        {
            'allowed_headers': rule.get('AllowedHeaders'),
            'allowed_methods': rule.get('AllowedMethods'),
            'allowed_origins': rule.get('AllowedOrigins'),
            'expose_headers': rule.get('ExposeHeaders'),
            'max_age_seconds': rule.get('MaxAgeSeconds'),
        }
        for rule in src.get('CORSRules', [])
    ]


def map_lifecycle_rules(src: Optional[Dict[str, Any]]) -> Optional[List[Dict[str, Any]]]:
    if src is None:
        return None
    return [
        {
            'id': rule.get('ID'),
            'prefix': _filter_prefix(rule),
            'enabled': rule.get('Status') == 'Enabled',
            'expiration_days': rule.get('Expiration', {}).get('Days'),
            'noncurrent_version_expiration_days': rule.get('NoncurrentVersionExpiration', {}).get('NoncurrentDays'),
        }
        for rule in src.get('Rules', [])
    ]


def map_encryption(src: Optional[Dict[str, Any]]) -> Optional[Dict[str, Optional[str]]]:
    if src is None:
        return None
    rules = src.get('ServerSideEncryptionConfiguration', {}).get('Rules', [])
    if not rules:
        return None
    default = rules[0].get('ApplyServerSideEncryptionByDefault', {})
    return {
        'sse_algorithm': default.get('SSEAlgorithm'),
        'kms_master_key_id': default.get('KMSMasterKeyID'),
    }


def map_replication(src: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if src is None:
        return None
    config = src.get('ReplicationConfiguration', {})
    return {
        'role': config.get('Role'),
        'rules': [
            {
                'id': rule.get('ID'),
                'prefix': _filter_prefix(rule),
                'status': rule.get('Status'),
                'bucket': rule.get('Destination', {}).get('Bucket'),
                'storage_class': rule.get('Destination', {}).get('StorageClass'),
            }
            for rule in config.get('Rules', [])
        ],
    }


@dataclass
class Bucket(Resource):
    resource_type = 'aws_s3_bucket'

    name: str
    region: Optional[str] = None
    policy: Optional[str] = None
    versioning_enabled: Optional[bool] = None
    mfa_delete: Optional[bool] = None
    website: Optional[Dict[str, Optional[str]]] = None
    cors_rules: Optional[List[Dict[str, Any]]] = None
    lifecycle_rules: Optional[List[Dict[str, Any]]] = None
    encryption: Optional[Dict[str, Optional[str]]] = None
    replication: Optional[Dict[str, Any]] = None

    def resource_name(self) -> str:
        return sanitize_resource_name(self.name, 'bucket')

    def import_id(self) -> str:
        return self.name

    def to_block(self, name: str) -> Block:
        block = self.new_block(name)
        block.set('bucket', self.name)
        if self.policy is not None:
            block.set('policy', Heredoc(self.policy, tag='POLICY'))

        if self.versioning_enabled is not None:
            versioning = block.add_block(Block('versioning'))
            versioning.set('enabled', self.versioning_enabled)
            versioning.set('mfa_delete', self.mfa_delete)

        if self.website is not None:
            website = block.add_block(Block('website'))
            for key, value in self.website.items():
                website.set(key, value)

        for rule in self.cors_rules or []:
            cors = block.add_block(Block('cors_rule'))
            for key, value in rule.items():
                cors.set(key, value)

        for rule in self.lifecycle_rules or []:
            lifecycle = block.add_block(Block('lifecycle_rule'))
            lifecycle.set('id', rule['id'])
            lifecycle.set('prefix', rule['prefix'])
            lifecycle.set('enabled', rule['enabled'])
            if rule['expiration_days'] is not None:
                lifecycle.add_block(Block('expiration')).set('days', rule['expiration_days'])
            if rule['noncurrent_version_expiration_days'] is not None:
                lifecycle.add_block(Block('noncurrent_version_expiration')).set(
                    'days', rule['noncurrent_version_expiration_days']
                )

        if self.encryption is not None:
            sse = block.add_block(Block('server_side_encryption_configuration'))
            default = sse.add_block(Block('rule')).add_block(Block('apply_server_side_encryption_by_default'))
            default.set('sse_algorithm', self.encryption['sse_algorithm'])
            default.set('kms_master_key_id', self.encryption['kms_master_key_id'])

        if self.replication is not None:
            replication = block.add_block(Block('replication_configuration'))
            replication.set('role', self.replication['role'])
            for rule in self.replication['rules']:
                rules = replication.add_block(Block('rules'))
                rules.set('id', rule['id'])
                rules.set('prefix', rule['prefix'])
                rules.set('status', rule['status'])
                destination = rules.add_block(Block('destination'))
                destination.set('bucket', rule['bucket'])
                destination.set('storage_class', rule['storage_class'])

        return block


def describe_bucket(s3: Any, name: str, region: str) -> Bucket:
    """
    Collect every configuration of one bucket.

    Raises:
        ClientError: For any error outside the allow-list
    """
    bucket = Bucket(name=name, region=region)

    policy = call_optional(s3.get_bucket_policy, Bucket=name)
    if policy is not None and policy.get('Policy'):
        bucket.policy = pretty_json(policy['Policy'])

    versioning = s3.get_bucket_versioning(Bucket=name)
    if versioning.get('Status'):
        bucket.versioning_enabled = versioning['Status'] == 'Enabled'
        if 'MFADelete' in versioning:
            bucket.mfa_delete = versioning['MFADelete'] == 'Enabled'

    bucket.website = map_website(call_optional(s3.get_bucket_website, Bucket=name))
    bucket.cors_rules = map_cors_rules(call_optional(s3.get_bucket_cors, Bucket=name))
    bucket.lifecycle_rules = map_lifecycle_rules(
        call_optional(s3.get_bucket_lifecycle_configuration, Bucket=name)
    )
    bucket.encryption = map_encryption(call_optional(s3.get_bucket_encryption, Bucket=name))
    bucket.replication = map_replication(call_optional(s3.get_bucket_replication, Bucket=name))
    return bucket


def get_buckets(s3: Any) -> List[Bucket]:
    """
    Describe the buckets located in the client's region.

    Args:
        s3: boto3 S3 client

    Returns:
        List of buckets in API order
    """
    region = s3.meta.region_name or DEFAULT_REGION
    buckets = []

    response = s3.list_buckets()
    for src in response.get('Buckets', []):
        name = src['Name']
        if bucket_region(s3.get_bucket_location(Bucket=name)) != region:
            continue
        buckets.append(describe_bucket(s3, name, region))

    return buckets
