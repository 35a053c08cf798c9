"""Common interface of the mapped resource records."""

from abc import ABC, abstractmethod
from typing import ClassVar

from aws_to_terraform.hcl import Block


class Resource(ABC):
    """
    A remote resource reduced to the fields Terraform needs.

    Subclasses are dataclasses whose optional fields default to None; a field
    the API did not return stays None and is left out of the rendered block.
    """

    resource_type: ClassVar[str] = ''

    @abstractmethod
    def resource_name(self) -> str:
        """Terraform resource name before de-duplication."""

    @abstractmethod
    def import_id(self) -> str:
        """The id `terraform import` expects for this resource."""

    @abstractmethod
    def to_block(self, name: str) -> Block:
        """Build the `resource` block for this record."""

    def new_block(self, name: str) -> Block:
        return Block('resource', self.resource_type, name)
