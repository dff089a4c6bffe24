"""
Entity Forms CLI

Command-line interface for compiling descriptor documents.

Commands:
  entityforms compile  - Compile a read model into a form schema (JSON)
  entityforms list     - List the models in a descriptor document
"""

import asyncio
import json
import logging
import sys

from entityforms.core.exceptions import DescriptorError, SchemaNotFoundError
from entityforms.core.logging import configure_logging
from entityforms.models.contracts.entity_forms import CompileOptions
from entityforms.services.entity_form.compiler import EntityFormCompiler
from entityforms.services.schema_registry import load_descriptor_document

logger = logging.getLogger(__name__)

# Command-line option -> CompileOptions field
COMPILE_OPTIONS: dict[str, str] = {
    "--write-model": "write_model_id",
    "--label": "label",
    "--plural-label": "plural_label",
    "--primary-key": "primary_key_field",
    "--route-path": "route_path",
    "--list-path": "list_path",
}


def main(args: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args is None:
        args = sys.argv[1:]

    # No args - show help
    if not args:
        print_help()
        return 0

    command = args[0].lower()

    if command in ("help", "-h", "--help"):
        print_help()
        return 0

    configure_logging()

    if command == "compile":
        return handle_compile(args[1:])

    if command == "list":
        return handle_list(args[1:])

    # Unknown command
    print(f"Unknown command: {command}", file=sys.stderr)
    print_help()
    return 1


def print_help() -> None:
    """Print CLI help message."""
    print("""
Entity Forms CLI - compile schema descriptors into form configurations

Usage:
  entityforms <command> [options]

Commands:
  compile     Compile a read model into a form schema (JSON on stdout)
  list        List the model ids in a descriptor document
  help        Show this help message

Examples:
  entityforms compile models.yaml QueryProductModel
  entityforms compile models.json QueryProductModel --write-model SaveProductModel
  entityforms list models.yaml
""".strip())


def print_compile_help() -> None:
    """Print help for the compile command."""
    print("""
Usage: entityforms compile <document> <read-model-id> [options]

Arguments:
  document              JSON or YAML descriptor document ({"models": {...}})
  read-model-id         Read model to compile

Options:
  --write-model ID      Write model id (default: x-save-model or derived)
  --label LABEL         Entity label
  --plural-label LABEL  Entity plural label
  --primary-key FIELD   Primary key field name
  --route-path PATH     Route path for entity pages
  --list-path PATH      List page path
  --indent N            JSON indentation (default: 2)
  --help, -h            Show this help message
""".strip())


def handle_compile(args: list[str]) -> int:
    """
    Handle 'entityforms compile <document> <read-model-id>' command.

    Args:
        args: Command arguments [document, read-model-id, options...]

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args and args[0] in ("--help", "-h"):
        print_compile_help()
        return 0

    if len(args) < 2:
        print("Error: compile requires a document and a read model id", file=sys.stderr)
        print("Usage: entityforms compile <document> <read-model-id> [options]", file=sys.stderr)
        return 1

    document, read_model_id = args[0], args[1]
    overrides: dict[str, str] = {}
    indent = 2

    # Parse arguments
    i = 2
    while i < len(args):
        arg = args[i]

        if arg in COMPILE_OPTIONS or arg == "--indent":
            if i + 1 >= len(args):
                print(f"Error: {arg} requires a value", file=sys.stderr)
                return 1
            value = args[i + 1]
            if arg == "--indent":
                try:
                    indent = int(value)
                except ValueError:
                    print(f"Error: --indent requires an integer, got {value}", file=sys.stderr)
                    return 1
            else:
                overrides[COMPILE_OPTIONS[arg]] = value
            i += 2
        elif arg in ("--help", "-h"):
            print_compile_help()
            return 0
        else:
            print(f"Unknown option: {arg}", file=sys.stderr)
            return 1

    try:
        registry = load_descriptor_document(document)
    except DescriptorError as e:
        logger.error(f"Invalid descriptor document: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    compiler = EntityFormCompiler(registry, cache={})
    try:
        schema = asyncio.run(compiler.compile(read_model_id, CompileOptions(**overrides)))
    except SchemaNotFoundError as e:
        logger.error(f"Compilation failed: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(json.dumps(schema.to_dict(), indent=indent))
    return 0


def handle_list(args: list[str]) -> int:
    """
    Handle 'entityforms list <document>' command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args and args[0] in ("--help", "-h"):
        print("Usage: entityforms list <document>")
        return 0

    if not args:
        print("Error: No descriptor document specified", file=sys.stderr)
        print("Usage: entityforms list <document>", file=sys.stderr)
        return 1

    try:
        registry = load_descriptor_document(args[0])
    except DescriptorError as e:
        logger.error(f"Invalid descriptor document: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    for model_id in registry.model_ids():
        print(model_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
