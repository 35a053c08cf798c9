"""
IAM resources: customer managed policies, roles, users and groups.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from aws_to_terraform.hcl import Block, Heredoc
from aws_to_terraform.helpers import policy_document, sanitize_resource_name
from aws_to_terraform.resources.base import Resource

SERVICE_LINKED_ROLE_PATH = '/aws-service-role/'


def _heredoc(document: Optional[str], tag: str) -> Optional[Heredoc]:
    return Heredoc(document, tag=tag) if document is not None else None


@dataclass
class Policy(Resource):
    resource_type = 'aws_iam_policy'

    name: str
    arn: str
    path: Optional[str] = None
    description: Optional[str] = None
    policy: Optional[str] = None

    @classmethod
    def from_api(cls, src: Dict[str, Any], document: Any = None) -> 'Policy':
        return cls(
            name=src['PolicyName'],
            arn=src['Arn'],
            path=src.get('Path'),
            description=src.get('Description'),
            policy=policy_document(document),
        )

    def resource_name(self) -> str:
        return sanitize_resource_name(self.name, 'policy')

    def import_id(self) -> str:
        return self.arn

    def to_block(self, name: str) -> Block:
        block = self.new_block(name)
        block.set('name', self.name)
        block.set('path', self.path)
        block.set('description', self.description)
        block.set('policy', _heredoc(self.policy, 'POLICY'))
        return block


def get_policies(iam: Any) -> List[Policy]:
    """
    List customer managed policies with their default policy document.

    Args:
        iam: boto3 IAM client

    Returns:
        List of policies in API order
    """
    policies = []
    paginator = iam.get_paginator('list_policies')
    for page in paginator.paginate(Scope='Local'):
        for src in page.get('Policies', []):
            version = iam.get_policy_version(
                PolicyArn=src['Arn'],
                VersionId=src['DefaultVersionId'],
            )
            document = version.get('PolicyVersion', {}).get('Document')
            policies.append(Policy.from_api(src, document))

    return policies


@dataclass
class Role(Resource):
    resource_type = 'aws_iam_role'

    name: str
    path: Optional[str] = None
    description: Optional[str] = None
    assume_role_policy: Optional[str] = None
    max_session_duration: Optional[int] = None
    permissions_boundary: Optional[str] = None

    @classmethod
    def from_api(cls, src: Dict[str, Any]) -> 'Role':
        return cls(
            name=src['RoleName'],
            path=src.get('Path'),
            description=src.get('Description') or None,
            assume_role_policy=policy_document(src.get('AssumeRolePolicyDocument')),
            max_session_duration=src.get('MaxSessionDuration'),
            permissions_boundary=src.get('PermissionsBoundary', {}).get('PermissionsBoundaryArn'),
        )

    def resource_name(self) -> str:
        return sanitize_resource_name(self.name, 'role')

    def import_id(self) -> str:
        return self.name

    def to_block(self, name: str) -> Block:
        block = self.new_block(name)
        block.set('name', self.name)
        block.set('path', self.path)
        block.set('description', self.description)
        block.set('max_session_duration', self.max_session_duration)
        block.set('permissions_boundary', self.permissions_boundary)
        block.set('assume_role_policy', _heredoc(self.assume_role_policy, 'POLICY'))
        return block


def get_roles(iam: Any) -> List[Role]:
    """
    List IAM roles, skipping service-linked roles Terraform cannot manage.

    ListRoles leaves out permissions boundaries, so each role is read back
    with GetRole.
    """
    roles = []
    paginator = iam.get_paginator('list_roles')
    for page in paginator.paginate():
        for src in page.get('Roles', []):
            if src.get('Path', '').startswith(SERVICE_LINKED_ROLE_PATH):
                continue
            detail = iam.get_role(RoleName=src['RoleName'])
            roles.append(Role.from_api(detail['Role']))

    return roles


@dataclass
class User(Resource):
    resource_type = 'aws_iam_user'

    name: str
    path: Optional[str] = None
    permissions_boundary: Optional[str] = None

    @classmethod
    def from_api(cls, src: Dict[str, Any]) -> 'User':
        return cls(
            name=src['UserName'],
            path=src.get('Path'),
            permissions_boundary=src.get('PermissionsBoundary', {}).get('PermissionsBoundaryArn'),
        )

    def resource_name(self) -> str:
        return sanitize_resource_name(self.name, 'user')

    def import_id(self) -> str:
        return self.name

    def to_block(self, name: str) -> Block:
        block = self.new_block(name)
        block.set('name', self.name)
        block.set('path', self.path)
        block.set('permissions_boundary', self.permissions_boundary)
        return block


def get_users(iam: Any) -> List[User]:
    users = []
    paginator = iam.get_paginator('list_users')
    for page in paginator.paginate():
        for src in page.get('Users', []):
            # ListUsers does not return PermissionsBoundary
            detail = iam.get_user(UserName=src['UserName'])
            users.append(User.from_api(detail['User']))
    return users


@dataclass
class Group(Resource):
    resource_type = 'aws_iam_group'

    name: str
    path: Optional[str] = None

    @classmethod
    def from_api(cls, src: Dict[str, Any]) -> 'Group':
        return cls(name=src['GroupName'], path=src.get('Path'))

    def resource_name(self) -> str:
        return sanitize_resource_name(self.name, 'group')

    def import_id(self) -> str:
        return self.name

    def to_block(self, name: str) -> Block:
        return self.new_block(name).set('name', self.name).set('path', self.path)


def get_groups(iam: Any) -> List[Group]:
    groups = []
    paginator = iam.get_paginator('list_groups')
    for page in paginator.paginate():
        groups.extend(Group.from_api(src) for src in page.get('Groups', []))
    return groups
