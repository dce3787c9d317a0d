#!/usr/bin/env python3
"""Command-line front end for the GS Storage Provider.

Usage:
    gs-storage [--credentials PATH] [--project ID] [--bucket NAME] [--json] COMMAND ...

Examples:
    # List buckets in the configured project
    gs-storage list-buckets

    # List objects under a prefix as JSON
    gs-storage --json list-objects --prefix reports/

    # Upload a local file (content type inferred from the destination)
    gs-storage upload ./summary.pdf reports/2024/summary.pdf

    # Download to a local file, then delete the remote copy
    gs-storage download reports/2024/summary.pdf ./summary.pdf
    gs-storage delete reports/2024/summary.pdf

Environment Variables:
    GCS_CREDENTIALS_PATH / GOOGLE_APPLICATION_CREDENTIALS: Credential file if --credentials not provided
    GCP_PROJECT_ID: Project if --project not provided
    GCS_BUCKET_NAME: Bucket if --bucket not provided
    GCS_TIMEOUT_SECONDS: Default per-call timeout if --timeout not provided

Exit codes:
    0 success, 1 configuration error, 2 storage error, 3 operation returned False
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from .config import StorageSettings
from .logging_config import setup_logging
from .storage.base_adapter import StorageError
from .utils.error_handler import BACKEND_ERRORS

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_STORAGE_ERROR = 2
EXIT_OPERATION_FAILED = 3

# Failures reported with EXIT_STORAGE_ERROR, including untranslated provider errors.
RUNTIME_ERRORS = (StorageError, OSError) + BACKEND_ERRORS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gs-storage",
        description="Bucket and object operations against Google Cloud Storage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument('--credentials', type=str, default=None,
                        help='Path to the JSON credential file (overrides GCS_CREDENTIALS_PATH)')
    parser.add_argument('--project', type=str, default=None,
                        help='GCP project ID (overrides GCP_PROJECT_ID)')
    parser.add_argument('--bucket', type=str, default=None,
                        help='Bucket name (overrides GCS_BUCKET_NAME)')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Per-call timeout in seconds (overrides GCS_TIMEOUT_SECONDS)')
    parser.add_argument('--json', action='store_true',
                        help='Output results in JSON format for programmatic processing')

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('list-buckets', help='List buckets in the project')

    list_objects = subparsers.add_parser('list-objects', help='List objects in the bucket')
    list_objects.add_argument('--prefix', type=str, default=None, help='Only list names with this prefix')

    upload = subparsers.add_parser('upload', help='Upload a local file')
    upload.add_argument('local_path', help='Local file to upload')
    upload.add_argument('destination', help='Object path in the bucket')
    upload.add_argument('--content-type', type=str, default=None,
                        help='MIME type (inferred from the destination extension if omitted)')

    download = subparsers.add_parser('download', help='Download an object to a local file')
    download.add_argument('source', help='Object path in the bucket')
    download.add_argument('local_path', help='Local destination file')

    delete = subparsers.add_parser('delete', help='Delete an object')
    delete.add_argument('path', help='Object path in the bucket')

    exists = subparsers.add_parser('exists', help='Check whether an object exists')
    exists.add_argument('path', help='Object path in the bucket')

    return parser


def run_command(adapter, args: argparse.Namespace) -> Any:
    """Dispatch a parsed command to the adapter and return its result."""
    if args.command == 'list-buckets':
        return [bucket.to_dict() for bucket in adapter.list_buckets()]
    if args.command == 'list-objects':
        return [obj.to_dict() for obj in adapter.list_objects(args.prefix)]
    if args.command == 'upload':
        return adapter.upload_file(args.local_path, args.destination, args.content_type)
    if args.command == 'download':
        return adapter.download_to_file(args.source, args.local_path)
    if args.command == 'delete':
        return adapter.delete(args.path)
    if args.command == 'exists':
        return adapter.exists(args.path)
    raise ValueError(f"Unknown command: {args.command}")


def _print_result(command: str, result: Any) -> None:
    if isinstance(result, list):
        if not result:
            print("(none)")
        for item in result:
            if command == 'list-objects':
                print(f"{item['size']:>12}  {item['updated'] or '-':<32}  {item['name']}")
            else:
                print(f"{item['name']:<40}  {item['location'] or '-':<12}  {item['storage_class'] or '-'}")
    elif command == 'exists':
        print(f"exists: {result}")
    else:
        print(f"{command}: {'OK' if result else 'FAILED'}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the gs-storage command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = StorageSettings.from_env().with_overrides(
            credentials_path=args.credentials,
            project_id=args.project,
            bucket_name=args.bucket,
            timeout=args.timeout,
        )
        setup_logging(settings.log_level)
        logger.info(f"Running {args.command}: project={settings.project_id}, bucket={settings.bucket_name}")

        with settings.create_adapter() as adapter:
            result = run_command(adapter, args)

    except ValueError as e:
        # Configuration error
        logger.error(f"Configuration error: {str(e)}")
        if args.json:
            print(json.dumps({
                "status": "error",
                "error_type": "configuration",
                "message": str(e)
            }, indent=2))
        else:
            print(f"\nERROR: {str(e)}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    except RUNTIME_ERRORS as e:
        logger.error(f"{args.command} failed: {str(e)}", exc_info=True)
        if args.json:
            print(json.dumps({
                "status": "error",
                "error_type": type(e).__name__,
                "message": str(e)
            }, indent=2))
        else:
            print(f"\nFATAL ERROR: {str(e)}", file=sys.stderr)
        return EXIT_STORAGE_ERROR

    failed = result is False and args.command != 'exists'
    if args.json:
        print(json.dumps({
            "status": "failed" if failed else "success",
            "result": result
        }, indent=2))
    else:
        _print_result(args.command, result)

    return EXIT_OPERATION_FAILED if failed else EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
