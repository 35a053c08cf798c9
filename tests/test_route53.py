"""Tests for Route 53 hosted zones and records."""

from aws_to_terraform.render import build_document, import_commands
from aws_to_terraform.resources.route53 import Record, Zone, get_records, get_zones


def zone(zone_id, name, comment=None):
    src = {'Id': f'/hostedzone/{zone_id}', 'Name': name, 'CallerReference': f'ref-{zone_id}'}
    if comment is not None:
        src['Config'] = {'Comment': comment, 'PrivateZone': False}
    return src


def zones_page(*zones, next_marker=None):
    response = {
        'HostedZones': list(zones),
        'Marker': '',
        'IsTruncated': next_marker is not None,
        'MaxItems': '100',
    }
    if next_marker:
        response['NextMarker'] = next_marker
    return response


def test_get_zones_paginated(route53):
    client, stubber = route53
    stubber.add_response('list_hosted_zones', zones_page(zone('Z1', 'example.com.', 'main'), next_marker='Z2'), {})
    stubber.add_response('list_hosted_zones', zones_page(zone('Z2', 'internal.example.', '')), {'Marker': 'Z2'})

    zones = get_zones(client)

    assert zones == [
        Zone(zone_id='Z1', name='example.com', comment='main', private=False),
        Zone(zone_id='Z2', name='internal.example', comment=None, private=False),
    ]
    assert build_document(zones[:1]).render() == (
        'resource "aws_route53_zone" "example_com" {\n'
        '  name    = "example.com"\n'
        '  comment = "main"\n'
        '}\n'
    )
    assert import_commands(zones) == [
        'terraform import aws_route53_zone.example_com Z1',
        'terraform import aws_route53_zone.internal_example Z2',
    ]


def test_get_records_skips_apex_defaults(route53):
    client, stubber = route53
    stubber.add_response('list_hosted_zones', zones_page(zone('Z1', 'example.com.')), {})
    stubber.add_response('list_resource_record_sets', {
        'ResourceRecordSets': [
            {'Name': 'example.com.', 'Type': 'NS', 'TTL': 172800,
             'ResourceRecords': [{'Value': 'ns-1.awsdns-00.com.'}]},
            {'Name': 'example.com.', 'Type': 'SOA', 'TTL': 900,
             'ResourceRecords': [{'Value': 'ns-1.awsdns-00.com. hostmaster.example.com. 1 7200 900 1209600 86400'}]},
            {'Name': 'sub.example.com.', 'Type': 'NS', 'TTL': 300,
             'ResourceRecords': [{'Value': 'ns.other.net.'}]},
            {'Name': 'www.example.com.', 'Type': 'A', 'TTL': 300,
             'ResourceRecords': [{'Value': '192.0.2.10'}, {'Value': '192.0.2.11'}]},
            {'Name': 'cdn.example.com.', 'Type': 'A', 'AliasTarget': {
                'HostedZoneId': 'Z2FDTNDATAQYW2',
                'DNSName': 'd111111abcdef8.cloudfront.net.',
                'EvaluateTargetHealth': False,
            }},
        ],
        'IsTruncated': False,
        'MaxItems': '300',
    }, {'HostedZoneId': 'Z1'})

    records = get_records(client)

    assert [(r.name, r.type) for r in records] == [
        ('sub.example.com', 'NS'),
        ('www.example.com', 'A'),
        ('cdn.example.com', 'A'),
    ]
    assert records[1].records == ['192.0.2.10', '192.0.2.11']
    assert records[2].ttl is None
    assert records[2].records is None

    text = build_document(records[2:]).render()
    assert text == (
        'resource "aws_route53_record" "cdn_example_com_a" {\n'
        '  zone_id = "Z1"\n'
        '  name    = "cdn.example.com"\n'
        '  type    = "A"\n'
        '\n'
        '  alias {\n'
        '    name                   = "d111111abcdef8.cloudfront.net"\n'
        '    zone_id                = "Z2FDTNDATAQYW2"\n'
        '    evaluate_target_health = false\n'
        '  }\n'
        '}\n'
    )


def test_record_import_id_with_set_identifier():
    record = Record(zone_id='Z1', name='api.example.com', type='CNAME', ttl=60,
                    records=['a.example.net'], set_identifier='blue')
    assert import_commands([record]) == [
        'terraform import aws_route53_record.api_example_com_cname_blue Z1_api.example.com_CNAME_blue',
    ]
