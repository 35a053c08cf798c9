"""
HCL document builder.

Resources are rendered by building a tree of blocks and attributes in memory
and serializing it in canonical Terraform layout: two-space indentation, a
blank line between top-level blocks, and `=` aligned across each run of
consecutive single-line attributes.
"""

import re
from typing import Any, List, Optional, TextIO, Union

INDENT = '  '

_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_-]*$')


class Heredoc:
    """A multi-line string written as `<<TAG ... TAG`."""

    def __init__(self, text: str, tag: str = 'EOF'):
        self.text = text
        self.tag = tag

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Heredoc) and (self.text, self.tag) == (other.text, other.tag)

    def __repr__(self) -> str:
        return f'Heredoc({self.text!r}, tag={self.tag!r})'


class Attribute:
    """A single `name = value` line."""

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value


class Block:
    """
    A labelled HCL block with an ordered body.

    Example:
        >>> block = Block('resource', 'aws_vpc', 'main')
        >>> block = block.set('cidr_block', '10.0.0.0/16').set('instance_tenancy', None)
        >>> print(render_block(block))
        resource "aws_vpc" "main" {
          cidr_block = "10.0.0.0/16"
        }
    """

    def __init__(self, block_type: str, *labels: str):
        self.type = block_type
        self.labels = list(labels)
        self.body: List[Union[Attribute, 'Block']] = []

    def set(self, name: str, value: Any) -> 'Block':
        """Add an attribute. A `None` value leaves the attribute out entirely."""
        if value is not None:
            self.body.append(Attribute(name, value))
        return self

    def add_block(self, block: 'Block') -> 'Block':
        """Append a nested block and return it."""
        self.body.append(block)
        return block


class Document:
    """An ordered collection of top-level blocks."""

    def __init__(self, blocks: Optional[List[Block]] = None):
        self.blocks: List[Block] = list(blocks or [])

    def add(self, block: Block) -> Block:
        self.blocks.append(block)
        return block

    def render(self) -> str:
        if not self.blocks:
            return ''
        return '\n\n'.join(render_block(block) for block in self.blocks) + '\n'

    def write(self, stream: TextIO) -> None:
        stream.write(self.render())


def escape_string(value: str) -> str:
    """Escape a string for use inside an HCL quoted string or heredoc."""
    return value.replace('${', '$${').replace('%{', '%%{')


def quote(value: str) -> str:
    """Wrap a string in double quotes, escaping its contents."""
    escaped = (
        escape_string(value)
        .replace('\\', '\\\\')
        .replace('"', '\\"')
        .replace('\n', '\\n')
        .replace('\r', '\\r')
        .replace('\t', '\\t')
    )
    return f'"{escaped}"'


def format_key(key: str) -> str:
    """Map keys are left bare when they are valid identifiers."""
    return key if _IDENTIFIER.match(key) else quote(key)


def format_value(value: Any, level: int = 0) -> str:
    """
    Serialize a Python value as an HCL expression.

    Args:
        value: bool, int, float, str, list, dict or Heredoc
        level: Indentation level of the line holding the value

    Returns:
        HCL source for the value
    """
    if isinstance(value, Heredoc):
        body = escape_string(value.text)
        if not body.endswith('\n'):
            body += '\n'
        return f'<<{value.tag}\n{body}{value.tag}'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, (list, tuple)):
        return '[' + ', '.join(format_value(item, level) for item in value) + ']'
    if isinstance(value, dict):
        if not value:
            return '{}'
        pad = INDENT * (level + 1)
        keys = [format_key(str(key)) for key in value]
        width = max(len(key) for key in keys)
        lines = ['{']
        for key, item in zip(keys, value.values()):
            lines.append(f'{pad}{key.ljust(width)} = {format_value(item, level + 1)}')
        lines.append(INDENT * level + '}')
        return '\n'.join(lines)

    raise TypeError(f'Cannot render {type(value).__name__} value as HCL: {value!r}')


def _is_multiline(value: Any) -> bool:
    return isinstance(value, (dict, Heredoc)) and bool(value)


def render_block(block: Block, level: int = 0) -> str:
    """Serialize a block (and everything nested in it) to HCL source."""
    pad = INDENT * level
    header = ' '.join([block.type] + [quote(label) for label in block.labels])
    lines = [f'{pad}{header} {{']

    # Runs of single-line attributes share an aligned `=` column
    run: List[Attribute] = []

    def flush() -> None:
        if not run:
            return
        width = max(len(attr.name) for attr in run)
        for attr in run:
            lines.append(f'{pad}{INDENT}{attr.name.ljust(width)} = {format_value(attr.value, level + 1)}')
        run.clear()

    previous = None
    for item in block.body:
        if isinstance(item, Attribute) and not _is_multiline(item.value):
            if isinstance(previous, Block) or (
                isinstance(previous, Attribute) and _is_multiline(previous.value)
            ):
                lines.append('')
            run.append(item)
        else:
            flush()
            if previous is not None:
                lines.append('')
            if isinstance(item, Attribute):
                lines.append(f'{pad}{INDENT}{item.name} = {format_value(item.value, level + 1)}')
            else:
                lines.append(render_block(item, level + 1))
        previous = item
    flush()

    lines.append(f'{pad}}}')
    return '\n'.join(lines)
