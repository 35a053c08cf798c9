import sys

from aws_to_terraform.cli import main

if __name__ == '__main__':
    sys.exit(main())
