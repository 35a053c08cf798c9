"""Tests for rendering whole collections."""

import io

import hcl2

from aws_to_terraform.render import assign_names, write_hcl, write_import_commands
from aws_to_terraform.resources.ec2 import VPC, Instance
from aws_to_terraform.resources.iam import Policy, Role
from aws_to_terraform.resources.s3 import Bucket


def test_names_are_unique_per_type():
    resources = [
        VPC(vpc_id='vpc-1', tags={'Name': 'main'}),
        VPC(vpc_id='vpc-2', tags={'Name': 'main'}),
        Bucket(name='main'),
    ]
    assert [name for name, _ in assign_names(resources)] == ['main', 'main_1', 'main']


def test_empty_collection():
    stream = io.StringIO()
    write_hcl([], stream)
    write_import_commands([], stream)
    assert stream.getvalue() == ''


def test_generated_configuration_parses():
    resources = [
        Instance(
            instance_id='i-1',
            ami='ami-1',
            instance_type='t3.micro',
            monitoring=True,
            security_group_ids=['sg-1'],
            tags={'Name': 'web', 'aws:autoscaling:groupName': 'web-asg'},
        ),
        VPC(vpc_id='vpc-1', cidr_block='10.0.0.0/16', enable_dns_support=True),
        Policy(
            name='read',
            arn='arn:aws:iam::123456789012:policy/read',
            policy='{\n  "Version": "2012-10-17"\n}',
        ),
        Bucket(name='logs', versioning_enabled=True, lifecycle_rules=[{
            'id': 'expire',
            'prefix': None,
            'enabled': True,
            'expiration_days': 30,
            'noncurrent_version_expiration_days': None,
        }]),
    ]
    stream = io.StringIO()

    write_hcl(resources, stream)

    parsed = hcl2.loads(stream.getvalue())
    assert len(parsed['resource']) == 4


def test_import_commands_follow_unique_names():
    stream = io.StringIO()
    write_import_commands([VPC(vpc_id='vpc-1'), VPC(vpc_id='vpc-1')], stream)
    assert stream.getvalue() == (
        'terraform import aws_vpc.vpc_1 vpc-1\n'
        'terraform import aws_vpc.vpc_1_1 vpc-1\n'
    )


def test_suffix_skips_names_already_taken():
    resources = [
        VPC(vpc_id='vpc-1', tags={'Name': 'main_1'}),
        VPC(vpc_id='vpc-2', tags={'Name': 'main'}),
        VPC(vpc_id='vpc-3', tags={'Name': 'main'}),
        VPC(vpc_id='vpc-4', tags={'Name': 'main'}),
    ]
    names = [name for name, _ in assign_names(resources)]
    assert names == ['main_1', 'main', 'main_2', 'main_3']


def test_user_strings_with_quotes_parse():
    resources = [VPC(vpc_id='vpc-1', tags={'Name': '"a" b "c"', 'Env': '"prod"'})]
    stream = io.StringIO()

    write_hcl(resources, stream)

    text = stream.getvalue()
    assert 'Env  = "\\"prod\\""' in text
    parsed = hcl2.loads(text)
    assert len(parsed['resource']) == 1


def test_interpolation_in_descriptions_is_escaped():
    stream = io.StringIO()

    write_hcl([Role(name='r', description='"${file("/etc/passwd")}"')], stream)

    assert '  description = "\\"$${file(\\"/etc/passwd\\")}\\""\n' in stream.getvalue()
