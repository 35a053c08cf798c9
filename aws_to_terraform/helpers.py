"""Small translation helpers used while mapping AWS responses."""

import json
from typing import Any, Dict, List, Optional
from urllib.parse import unquote


def short_name(arn: Optional[str]) -> Optional[str]:
    """
    Return the last path segment of an ARN.

    `arn:aws:iam::123456789012:instance-profile/myprofile` becomes `myprofile`.
    """
    if not arn:
        return None
    return arn.split('/')[-1]


def get_zone_id(zone_id: Optional[str]) -> Optional[str]:
    """Strip the `/hostedzone/` prefix Route 53 puts on hosted zone ids."""
    if zone_id and '/' in zone_id:
        return zone_id.split('/')[-1]
    return zone_id


def monitoring_enabled(state: Optional[str]) -> bool:
    """Detailed monitoring is on for every state except `disabled`."""
    return state != 'disabled'


def tags_to_dict(tags: Optional[List[Dict[str, str]]]) -> Optional[Dict[str, str]]:
    """
    Convert an AWS tag list into a mapping keyed by tag key.

    Args:
        tags: List of {'Key': ..., 'Value': ...} dictionaries, or None

    Returns:
        Mapping of tag key to value (later duplicates win), or None when the
        response carried no tag list at all
    """
    if tags is None:
        return None
    return {tag['Key']: tag.get('Value', '') for tag in tags}


def get_tag_value(tags: Optional[Dict[str, str]], key: str) -> Optional[str]:
    """Get tag value by key."""
    if not tags:
        return None
    return tags.get(key) or None


def sanitize_resource_name(name: str, default: str = 'resource') -> str:
    """
    Sanitize a name to be valid for Terraform resource names.

    Args:
        name: Original name
        default: Name used when nothing usable is left

    Returns:
        Sanitized name valid for Terraform
    """
    # Replace invalid characters with underscores
    sanitized = ''.join(c if c.isalnum() or c == '_' else '_' for c in name)
    # Ensure it starts with a letter or underscore
    if sanitized and sanitized[0].isdigit():
        sanitized = '_' + sanitized
    return sanitized.lower() if sanitized else default


def pretty_json(document: str) -> str:
    """
    Re-indent a JSON document.

    Raises:
        json.JSONDecodeError: If the document is not valid JSON
    """
    return json.dumps(json.loads(document), indent=2)


def policy_document(document: Any) -> Optional[str]:
    """
    Normalize an IAM policy document to pretty-printed JSON.

    IAM returns documents URL-encoded; boto3 usually decodes them into a dict
    already, so both forms are accepted.
    """
    if document is None:
        return None
    if isinstance(document, str):
        return pretty_json(unquote(document))
    return json.dumps(document, indent=2)
