"""
Route 53 hosted zones and record sets.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from aws_to_terraform.hcl import Block
from aws_to_terraform.helpers import get_zone_id, sanitize_resource_name
from aws_to_terraform.resources.base import Resource

# Created together with the zone and managed by aws_route53_zone
DEFAULT_RECORD_TYPES = ('NS', 'SOA')


def _strip_dot(name: str) -> str:
    return name[:-1] if name.endswith('.') else name


@dataclass
class Zone(Resource):
    resource_type = 'aws_route53_zone'

    zone_id: str
    name: str
    comment: Optional[str] = None
    private: Optional[bool] = None

    @classmethod
    def from_api(cls, src: Dict[str, Any]) -> 'Zone':
        config = src.get('Config', {})
        return cls(
            zone_id=get_zone_id(src['Id']),
            name=_strip_dot(src['Name']),
            comment=config.get('Comment') or None,
            private=config.get('PrivateZone'),
        )

    def resource_name(self) -> str:
        return sanitize_resource_name(self.name, 'zone')

    def import_id(self) -> str:
        return self.zone_id

    def to_block(self, name: str) -> Block:
        return self.new_block(name).set('name', self.name).set('comment', self.comment)


def get_zones(route53: Any) -> List[Zone]:
    """
    List all hosted zones with pagination support.

    Args:
        route53: boto3 Route 53 client

    Returns:
        List of zones in API order
    """
    zones = []
    paginator = route53.get_paginator('list_hosted_zones')
    for page in paginator.paginate():
        zones.extend(Zone.from_api(src) for src in page.get('HostedZones', []))
    return zones


@dataclass
class Record(Resource):
    resource_type = 'aws_route53_record'

    zone_id: str
    name: str
    type: str
    ttl: Optional[int] = None
    records: Optional[List[str]] = None
    set_identifier: Optional[str] = None
    alias_name: Optional[str] = None
    alias_zone_id: Optional[str] = None
    alias_evaluate_target_health: Optional[bool] = None

    @classmethod
    def from_api(cls, zone_id: str, src: Dict[str, Any]) -> 'Record':
        values = src.get('ResourceRecords')
        alias = src.get('AliasTarget', {})
        return cls(
            zone_id=zone_id,
            name=_strip_dot(src['Name']),
            type=src['Type'],
            ttl=src.get('TTL'),
            records=[r['Value'] for r in values] if values else None,
            set_identifier=src.get('SetIdentifier'),
            alias_name=_strip_dot(alias['DNSName']) if alias.get('DNSName') else None,
            alias_zone_id=alias.get('HostedZoneId'),
            alias_evaluate_target_health=alias.get('EvaluateTargetHealth'),
        )

    def resource_name(self) -> str:
        parts = [self.name, self.type]
        if self.set_identifier:
            parts.append(self.set_identifier)
        return sanitize_resource_name('_'.join(parts), 'record')

    def import_id(self) -> str:
        parts = [self.zone_id, self.name, self.type]
        if self.set_identifier:
            parts.append(self.set_identifier)
        return '_'.join(parts)

    def to_block(self, name: str) -> Block:
        block = self.new_block(name)
        block.set('zone_id', self.zone_id)
        block.set('name', self.name)
        block.set('type', self.type)
        block.set('ttl', self.ttl)
        block.set('records', self.records)
        block.set('set_identifier', self.set_identifier)
        if self.alias_name is not None:
            alias = block.add_block(Block('alias'))
            alias.set('name', self.alias_name)
            alias.set('zone_id', self.alias_zone_id)
            alias.set('evaluate_target_health', self.alias_evaluate_target_health)
        return block


def is_default_record(zone_name: str, src: Dict[str, Any]) -> bool:
    """NS and SOA at the zone apex come with the zone itself."""
    return src['Type'] in DEFAULT_RECORD_TYPES and _strip_dot(src['Name']) == zone_name


def get_records(route53: Any) -> List[Record]:
    """
    List the record sets of every hosted zone.

    Args:
        route53: boto3 Route 53 client

    Returns:
        Records grouped by zone, in API order
    """
    records = []
    for zone in get_zones(route53):
        paginator = route53.get_paginator('list_resource_record_sets')
        for page in paginator.paginate(HostedZoneId=zone.zone_id):
            for src in page.get('ResourceRecordSets', []):
                if is_default_record(zone.name, src):
                    continue
                records.append(Record.from_api(zone.zone_id, src))

    return records
