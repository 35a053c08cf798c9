"""
Command line interface.

Fetches one resource family from AWS and writes Terraform configuration (or
the matching `terraform import` commands) to stdout or a file. Progress goes
to stderr so the output can be piped.
"""

import argparse
import io
import sys
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from aws_to_terraform import __version__
from aws_to_terraform.config import Config, create_session
from aws_to_terraform.render import write_hcl, write_import_commands
from aws_to_terraform.resources import RESOURCE_TYPES, Resource

SERVICE_HELP = {
    'ec2': 'EC2 instances and networking',
    'iam': 'IAM policies, roles, users and groups',
    's3': 'S3 buckets',
    'route53': 'Route 53 hosted zones and records',
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='aws-to-terraform',
        description='Generate Terraform configuration for existing AWS resources',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print every EC2 instance in a region as aws_instance blocks
  %(prog)s --region us-east-1 ec2 instances

  # Save IAM roles to a file using a specific AWS profile
  %(prog)s --profile production --output roles.tf iam roles

  # Print the terraform import commands for the same VPCs
  %(prog)s --region eu-west-1 --format import ec2 vpcs
        """
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    parser.add_argument(
        '--region',
        help='AWS region (default: from the environment or profile)'
    )

    parser.add_argument(
        '--profile',
        help='AWS CLI profile name to use'
    )

    parser.add_argument(
        '--access-key',
        help='AWS access key id (takes precedence over environment and profile)'
    )

    parser.add_argument(
        '--secret-key',
        help='AWS secret access key'
    )

    parser.add_argument(
        '--token',
        help='AWS session token for temporary credentials'
    )

    parser.add_argument(
        '--credentials-file',
        metavar='FILE',
        help='Shared credentials file (default: ~/.aws/credentials)'
    )

    parser.add_argument(
        '--output', '-o',
        metavar='FILE',
        help='Output file path (default: print to stdout)'
    )

    parser.add_argument(
        '--format',
        choices=['hcl', 'import'],
        default='hcl',
        help='Emit resource blocks (hcl) or terraform import commands (import)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        default=False,
        help='Do not print progress to stderr'
    )

    services = parser.add_subparsers(dest='service', metavar='SERVICE')
    services.required = True
    for service, kinds in RESOURCE_TYPES.items():
        service_parser = services.add_parser(service, help=SERVICE_HELP.get(service))
        resources = service_parser.add_subparsers(dest='resource', metavar='RESOURCE')
        resources.required = True
        for kind in kinds:
            resources.add_parser(kind, help=f'{service} {kind}')

    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    return Config(
        region=args.region,
        profile=args.profile,
        access_key=args.access_key,
        secret_key=args.secret_key,
        token=args.token,
        credentials_file=args.credentials_file,
    )


def fetch(config: Config, service: str, kind: str, quiet: bool = False) -> List[Resource]:
    """
    Fetch and map one resource family.

    Raises:
        ClientError: If any AWS call outside the allow-list fails
        BotoCoreError: On credential, region or transport problems
    """
    session = create_session(config)
    client = session.client(service)

    if not quiet:
        print(f"Fetching {service} {kind} from {client.meta.region_name}...", file=sys.stderr)

    resources = RESOURCE_TYPES[service][kind](client)

    if not quiet:
        print(f"Found {len(resources)} {kind}", file=sys.stderr)

    return resources


def render(resources: List[Resource], output_format: str) -> str:
    buffer = io.StringIO()
    if output_format == 'import':
        write_import_commands(resources, buffer)
    else:
        write_hcl(resources, buffer)
    return buffer.getvalue()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    try:
        resources = fetch(config, args.service, args.resource, quiet=args.quiet)

    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', 'Unknown')
        error_msg = e.response.get('Error', {}).get('Message', str(e))
        print(f"Error: {error_code} - {error_msg}", file=sys.stderr)
        return 1

    except NoCredentialsError:
        print("Error: AWS credentials not found", file=sys.stderr)
        print("Configure credentials using 'aws configure' or set environment variables", file=sys.stderr)
        return 1

    except BotoCoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = render(resources, args.format)

    if args.output:
        try:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(output)
        except IOError as e:
            print(f"Error writing to file: {e}", file=sys.stderr)
            return 1
        if not args.quiet:
            print(f"Terraform configuration written to: {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)

    return 0
