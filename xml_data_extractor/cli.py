"""
Command-line interface for the XML data extraction system.

Usage:
    xml_data_extractor schema.yml document.xml
    xml_data_extractor schema.yml a.xml b.xml --modifiers my_pkg.modifiers:MovieModifiers
    xml_data_extractor schema.yml document.xml --indent 0 --log-level DEBUG

A single document prints its extraction result as JSON. Several documents
print one JSON object keyed by file name; failures are logged and make the
exit code non-zero.
"""

import sys
import json
import logging
import argparse
import importlib
import inspect

from pathlib import Path
from typing import Any, List, Optional

from .config.config_manager import ConfigManager
from .config.processing_defaults import ExtractionDefaults
from .exceptions import ConfigurationError, XMLExtractionError
from .mapping.schema_interpreter import XmlDataExtractor
from .processing.sequential_extractor import SequentialExtractor


def load_modifiers(reference: str) -> Any:
    """
    Import a capability object from a ``package.module:attribute`` reference.

    Classes are instantiated with no arguments; any other attribute (an
    instance, a module or a dict of callables) is used as is.

    Raises:
        ConfigurationError: If the reference is malformed or cannot be imported
    """
    module_name, _, attribute = reference.partition(':')
    if not module_name:
        raise ConfigurationError(f"Invalid modifiers reference '{reference}', expected 'module:attribute'")

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import modifiers module '{module_name}': {e}")

    if attribute:
        try:
            target = getattr(target, attribute)
        except AttributeError:
            raise ConfigurationError(f"Module '{module_name}' has no attribute '{attribute}'")

    if inspect.isclass(target):
        target = target()
    return target


def _configure_logging(log_level: str) -> None:
    # Set up logging without reconfiguring root if already configured
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(ExtractionDefaults.LOG_FORMAT))
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))


def build_argument_parser(default_indent: int, default_log_level: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xml_data_extractor",
        description="Extract structured data from XML documents using a declarative schema"
    )
    parser.add_argument("schema", help="Schema file (.yml, .yaml or .json)")
    parser.add_argument("documents", nargs="+", help="XML document(s) to extract")
    parser.add_argument("--modifiers",
                        help="Custom modifiers as 'package.module:attribute' (classes are instantiated)")
    parser.add_argument("--indent", type=int, default=default_indent,
                        help=f"JSON indentation, 0 for compact output (default: {default_indent})")
    parser.add_argument("--log-level", default=default_log_level,
                        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
                        help=f"Logging level (default: {default_log_level})")
    return parser


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI application.

    Args:
        args: Optional command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if args is None:
        args = sys.argv[1:]

    try:
        config_manager = ConfigManager()
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    settings = config_manager.settings
    default_log_level = settings.log_level if settings.log_level in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG") \
        else ExtractionDefaults.LOG_LEVEL
    options = build_argument_parser(settings.json_indent, default_log_level).parse_args(args)

    _configure_logging(options.log_level)
    logger = logging.getLogger(__name__)
    if logger.isEnabledFor(logging.DEBUG):
        ExtractionDefaults.log_summary(logger)

    try:
        schema = config_manager.load_schema(options.schema)
        modifiers = load_modifiers(options.modifiers) if options.modifiers else None
        documents = [(path, Path(path).read_text(encoding='utf-8')) for path in options.documents]
    except XMLExtractionError as e:
        logger.error(f"Configuration failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Failed to read document: {e}")
        return 1

    extractor = XmlDataExtractor(schema, modifiers)
    result = SequentialExtractor(extractor).process_documents(documents)

    indent = options.indent if options.indent > 0 else None
    if len(documents) == 1:
        output = result.results.get(documents[0][0])
    else:
        output = result.results
        logger.info(f"Extracted {result.records_successful}/{result.records_processed} document(s) "
                    f"({result.success_rate:.1f}% success)")

    if output is not None:
        print(json.dumps(output, indent=indent, ensure_ascii=False))

    return 0 if result.records_failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
