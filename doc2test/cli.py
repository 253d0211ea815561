"""
Command Line Interface for doc2test

Runs the document-to-test-case pipeline over a plain-text file (or a saved
upload payload) and writes the result as JSON:
- Prints a brief summary on success (counts + output path)
- Exits non-zero with a machine-readable error report on failure
"""

from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from .config import load_settings
from .upload import handle_upload
from .workflow import DocumentPipeline
from .exceptions import Doc2TestError, UploadError


def setup_logging(verbose: bool = False, level_name: str = "INFO") -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.INFO)

    # Configure root logger
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Reduce noise from some libraries
    logging.getLogger('nltk').setLevel(logging.WARNING)


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""

    parser = argparse.ArgumentParser(
        description="doc2test - Extract requirements from a plain-text document and generate test cases",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze a requirements document
  doc2test --file requirements.txt --output analysis.json

  # Replay a saved upload payload ({fileContent, fileName, fileType})
  doc2test --upload-json upload.json
        """
    )

    input_group = parser.add_argument_group('input specification')
    source = input_group.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--file',
        type=Path,
        help='Path to a UTF-8 plain-text document'
    )
    source.add_argument(
        '--upload-json',
        type=Path,
        help='Path to a JSON upload payload with fileContent, fileName and fileType'
    )
    input_group.add_argument(
        '--file-name',
        help='File name reported in the result metadata (default: name of --file)'
    )

    output_group = parser.add_argument_group('output options')
    output_group.add_argument(
        '--output',
        type=Path,
        help='Write the JSON result to this path instead of stdout'
    )
    output_group.add_argument(
        '--config',
        type=Path,
        help='Project config file (default: ./doc2test.toml)'
    )
    output_group.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


def validate_inputs(args: argparse.Namespace) -> None:
    """Validate command line inputs."""
    for path in (args.file, args.upload_json, args.config):
        if path and not path.exists():
            raise FileNotFoundError(f"File not found: {path}")


def run(args: argparse.Namespace, pipeline: DocumentPipeline) -> Dict[str, Any]:
    """Run the pipeline for the selected input and return the JSON result."""

    if args.upload_json:
        with args.upload_json.open('r', encoding='utf-8') as f:
            body = json.load(f)
        response = handle_upload(body, pipeline)
        if response.status_code != 200:
            raise UploadError(response.body.get("error", "Upload rejected"))
        return response.body

    text = args.file.read_text(encoding='utf-8')
    result = pipeline.process(text, args.file_name or args.file.name)
    return result.to_dict()


def write_output(result: Dict[str, Any], output: Optional[Path]) -> None:
    """Write the result JSON to a file or stdout."""
    payload = json.dumps(result, indent=2, ensure_ascii=False)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload, encoding='utf-8')
    else:
        print(payload)


def print_success_summary(result: Dict[str, Any], output: Optional[Path]) -> None:
    """Print brief success summary to stderr (stdout may carry the JSON)."""

    metadata = result["metadata"]
    out = sys.stderr

    print(f"✅ Document processed: {metadata['fileName']}", file=out)
    print(f"  Requirements: {metadata['requirementsCount']}", file=out)
    print(f"  Test Cases: {metadata['testCasesCount']}", file=out)

    statistics = result.get("statistics")
    if statistics:
        print(f"  Dependencies: {statistics['totalDependencies']}", file=out)
        print(f"  Complexity Score: {statistics['complexityScore']}", file=out)

    if output:
        print(f"📁 JSON: {output}", file=out)


def print_error_summary(error: Exception) -> None:
    """Print machine-readable error summary to stderr."""

    error_report = {
        "error_type": type(error).__name__,
        "message": str(error),
        "details": getattr(error, 'details', None)
    }
    print(json.dumps(error_report, indent=2), file=sys.stderr)


def main() -> int:
    """Main CLI entry point."""

    parser = create_parser()
    args = parser.parse_args()

    logger = logging.getLogger(__name__)

    try:
        validate_inputs(args)

        settings = load_settings(args.config)
        setup_logging(args.verbose, settings.log_level)

        result = run(args, DocumentPipeline(settings))

        write_output(result, args.output)
        print_success_summary(result, args.output)

        return 0

    except (Doc2TestError, ValueError, FileNotFoundError, UnicodeDecodeError) as e:
        logger.error(f"Processing failed: {e}")
        print_error_summary(e)
        return 2

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard Unix exit code for SIGINT

    except Exception as e:
        logger.exception("Unexpected error occurred")
        print_error_summary(e)
        return 3


if __name__ == '__main__':
    sys.exit(main())
