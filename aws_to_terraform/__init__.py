"""Generate Terraform configuration from existing AWS resources."""

__version__ = '0.1.0'
