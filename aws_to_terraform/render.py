"""Render collections of mapped resources as HCL or `terraform import` commands."""

from typing import Dict, List, Sequence, Set, TextIO, Tuple

from aws_to_terraform.hcl import Document
from aws_to_terraform.resources.base import Resource


def assign_names(resources: Sequence[Resource]) -> List[Tuple[str, Resource]]:
    """
    Give every resource a unique Terraform name.

    The first resource keeps its name; later ones sharing the same type and
    name get the next numeric suffix not already issued (`web`, `web_1`,
    `web_2`, ...).
    """
    issued: Set[Tuple[str, str]] = set()
    suffixes: Dict[Tuple[str, str], int] = {}
    named = []
    for resource in resources:
        base = resource.resource_name()
        key = (resource.resource_type, base)
        suffix = suffixes.get(key, 0)
        name = base
        while (resource.resource_type, name) in issued:
            suffix += 1
            name = f'{base}_{suffix}'
        suffixes[key] = suffix
        issued.add((resource.resource_type, name))
        named.append((name, resource))
    return named


def build_document(resources: Sequence[Resource]) -> Document:
    document = Document()
    for name, resource in assign_names(resources):
        document.add(resource.to_block(name))
    return document


def write_hcl(resources: Sequence[Resource], stream: TextIO) -> None:
    """Write one resource block per resource to the stream."""
    build_document(resources).write(stream)


def import_commands(resources: Sequence[Resource]) -> List[str]:
    return [
        f'terraform import {resource.resource_type}.{name} {resource.import_id()}'
        for name, resource in assign_names(resources)
    ]


def write_import_commands(resources: Sequence[Resource], stream: TextIO) -> None:
    """Write the `terraform import` command for each resource, one per line."""
    for command in import_commands(resources):
        stream.write(command + '\n')
