import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sqla_auto_generator.codegen import generate_models_code
from sqla_auto_generator.codegen_utils import format_python_code_using_black
from sqla_auto_generator.colored_logging import (
    setup_colored_logging,
    log_highlight,
    log_progress,
    log_section,
    log_success,
)
from sqla_auto_generator.config import load_config
from sqla_auto_generator.diagram_loader import load_diagram
from sqla_auto_generator.exceptions import ConfigurationError, SQLAAutoGeneratorError


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqla-auto-generator",
        description="Generate SQLAlchemy declarative models from a database diagram.",
    )
    parser.add_argument(
        "input_file",
        nargs="?",
        metavar="DIAGRAM",
        help="Diagram file (JSON or YAML). Overrides config file setting.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        help="File to write the models to (default: stdout). Overrides config file setting.",
    )
    parser.add_argument(
        "--cascade",
        help='Cascade policy for one-to-many collections (default: "all, delete-orphan").',
    )
    parser.add_argument(
        "--format",
        dest="format_code",
        action="store_true",
        default=None,
        help="Format the generated code with black.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging for the generator tool.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        # 1. Load Configuration
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)
        if not config.input_file:
            raise ConfigurationError(
                "No diagram file given on the command line or in the configuration",
                config_file=args.config,
            )
        log_success(logger, "Configuration loaded and validated successfully.")
        logger.debug(f"Effective configuration loaded: {config}")

        # 2. Load Diagram
        log_section(logger, "Diagram")
        log_progress(logger, f"Loading diagram {config.input_file}...")
        diagram = load_diagram(config.input_file)
        log_highlight(
            logger,
            f"Found {len(diagram.tables)} tables and {len(diagram.relationships)} relationships "
            f"({diagram.database_type.value})",
        )

        # 3. Generate Models
        log_section(logger, "Model Generation")
        log_progress(logger, "Generating SQLAlchemy models...")
        code = generate_models_code(diagram, config.generator_options())
        if not code:
            logger.warning("The diagram has no tables. Nothing was written.")
            return

        if config.format_code:
            code = format_python_code_using_black(config.output_file or "<stdout>", code)

        # 4. Write Output
        if config.output_file:
            output_path = Path(config.output_file)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(code, encoding="utf-8")
            log_success(logger, f"Models written to {output_path}")
        else:
            sys.stdout.write(code)
            log_success(logger, "Models generated successfully.")

    # --- Error Handling ---
    except SQLAAutoGeneratorError as e:
        logger.error(f"{type(e).__name__}: {e}", exc_info=args.verbose)
        sys.exit(1)
    except OSError as e:
        logger.error(f"Could not write output: {e}", exc_info=args.verbose)
        sys.exit(1)


# --- Script Entry Point ---
if __name__ == "__main__":
    main()
