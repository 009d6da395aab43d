"""
Command-line interface for klotskigraph.

Enumerate puzzle state spaces from YAML configs, presets or puzzle files,
inspect single placements, and manage configuration files.
"""

import argparse
import sys
import json
from typing import Dict, List, Optional
from pathlib import Path

from klotskigraph.core.config import (
    Config, PuzzleConfig, RunnerConfig, SearchConfig,
    load_config, create_default_config, validate_config,
)
from klotskigraph.core.registry import GOAL_REGISTRY, PUZZLE_REGISTRY
from klotskigraph.puzzle.compound import compound_moves
from klotskigraph.puzzle.hashing import canonical_key, key_to_string
from klotskigraph.puzzle.loader import PuzzleSpec, load_puzzle
from klotskigraph.puzzle.model import validate_placement
from klotskigraph.puzzle.moves import single_moves
from klotskigraph.puzzle.occupancy import OccupancyIndex, classify_empty_space
from klotskigraph.puzzle.presets import resolve_puzzle
from klotskigraph.runner import EnumerationResult, EnumerationRunner
from klotskigraph.utils.display import StatusDisplay, LiveLogger


def get_available_components() -> Dict[str, List[str]]:
    """Get registered presets and goals."""
    return {
        "puzzles": sorted(PUZZLE_REGISTRY.keys()),
        "goals": sorted(GOAL_REGISTRY.keys()),
    }


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    components = get_available_components()

    parser = argparse.ArgumentParser(
        description="klotskigraph: sliding-block puzzle state-space enumeration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Enumerate from a configuration file
  klotskigraph run --config configs/klotski.yaml

  # Enumerate a preset directly
  klotskigraph enumerate --preset klotski --max-states 30000

  # Enumerate a puzzle file keeping piece identities
  klotskigraph enumerate --puzzle puzzles/combs.yaml --identity

  # Show moves, cavities and the key of one placement
  klotskigraph inspect --preset combs

  # Create and validate a configuration
  klotskigraph create-config --output config.yaml --preset klotski
  klotskigraph validate-config config.yaml

Available Components:
  Puzzles: {', '.join(components['puzzles']) if components['puzzles'] else 'None registered'}
  Goals: {', '.join(components['goals']) if components['goals'] else 'None registered'}
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run an enumeration from a configuration file")
    run_parser.add_argument("--config", "-c", required=True, help="Path to configuration file")
    run_parser.add_argument("--max-states", type=int, help="Override state cap")
    run_parser.add_argument("--output-dir", help="Override output directory")
    run_parser.add_argument("--verbose", "-v", action="store_true", help="Show tracebacks on failure")

    enum_parser = subparsers.add_parser("enumerate", help="Enumerate a preset or puzzle file")
    source = enum_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--preset", choices=components['puzzles'], help="Puzzle preset")
    source.add_argument("--puzzle", help="Puzzle file (.json/.yaml)")
    enum_parser.add_argument("--max-states", type=int, default=100000, help="State cap")
    enum_parser.add_argument("--identity", action="store_true", help="Keep piece identities when hashing")
    enum_parser.add_argument("--no-compound", action="store_true", help="Disable compound moves")
    enum_parser.add_argument("--goal", choices=components['goals'], help="Goal predicate to count")
    enum_parser.add_argument("--output-dir", default="logs", help="Output directory")
    enum_parser.add_argument("--no-export", action="store_true", help="Do not write the graph file")
    enum_parser.add_argument("--verbose", "-v", action="store_true", help="Show tracebacks on failure")

    inspect_parser = subparsers.add_parser("inspect", help="Show moves and cavities of a placement")
    inspect_source = inspect_parser.add_mutually_exclusive_group(required=True)
    inspect_source.add_argument("--preset", choices=components['puzzles'], help="Puzzle preset")
    inspect_source.add_argument("--puzzle", help="Puzzle file (.json/.yaml)")
    inspect_parser.add_argument("--identity", action="store_true", help="Show the identity-preserving key")

    config_parser = subparsers.add_parser("create-config", help="Create default configuration file")
    config_parser.add_argument("--output", "-o", default="config.yaml", help="Output configuration file")
    config_parser.add_argument("--preset", choices=components['puzzles'], default="klotski", help="Puzzle preset")
    config_parser.add_argument("--max-states", type=int, default=100000, help="State cap")
    config_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")

    validate_parser = subparsers.add_parser("validate-config", help="Validate configuration file")
    validate_parser.add_argument("config", help="Configuration file to validate")
    validate_parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")

    list_parser = subparsers.add_parser("list-components", help="List presets and goals")
    list_parser.add_argument("--type", choices=["puzzles", "goals", "all"], default="all", help="Component type to list")
    list_parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format")

    show_parser = subparsers.add_parser("show-component", help="Show details of a preset or goal")
    show_parser.add_argument("--type", choices=["puzzle", "goal"], required=True, help="Component type")
    show_parser.add_argument("--name", required=True, help="Component name")

    return parser


def _run_enumeration(config: Config) -> int:
    runner = EnumerationRunner(config)
    runner.setup()
    StatusDisplay.print_board(runner.puzzle.placement)
    result = runner.run()
    _display_result(result)
    return 0


def _display_result(result: EnumerationResult) -> None:
    summary = result.to_dict()
    summary["elapsed"] = f"{summary['elapsed']:.2f}s"
    if result.graph_path:
        summary["graph file"] = result.graph_path
    StatusDisplay.print_results(summary, "Enumeration Results")


def run_command(args) -> int:
    """Execute run command."""
    logger = LiveLogger(verbose=True)

    try:
        StatusDisplay.print_header("klotskigraph Enumeration")

        config = _load_and_validate_config(args, logger)
        if config is None:
            return 1

        if args.max_states:
            config.search.max_states = args.max_states
        if args.output_dir:
            config.runner.log_dir = args.output_dir

        _display_run_config(config)
        return _run_enumeration(config)

    except KeyboardInterrupt:
        logger.log_warning("Enumeration interrupted by user")
        return 1
    except Exception as e:
        logger.log_error(f"Failed to run enumeration: {e}")
        if getattr(args, 'verbose', False):
            import traceback
            logger.log_error(traceback.format_exc())
        return 1


def enumerate_command(args) -> int:
    """Execute enumerate command."""
    logger = LiveLogger(verbose=True)

    try:
        name = args.preset or Path(args.puzzle).stem
        StatusDisplay.print_header(f"klotskigraph Enumeration - {name}")

        config = Config(
            runner=RunnerConfig(
                experiment_name=name,
                log_dir=args.output_dir,
                export_graph=not args.no_export,
            ),
            puzzle=PuzzleConfig(preset=args.preset, file=args.puzzle, goal=args.goal),
            search=SearchConfig(
                max_states=args.max_states,
                identity_preserving=args.identity,
                compound_moves=not args.no_compound,
            ),
        )
        _display_run_config(config)
        return _run_enumeration(config)

    except KeyboardInterrupt:
        logger.log_warning("Enumeration interrupted by user")
        return 1
    except Exception as e:
        logger.log_error(f"Failed to enumerate: {e}")
        if getattr(args, 'verbose', False):
            import traceback
            logger.log_error(traceback.format_exc())
        return 1


def _load_and_validate_config(args, logger) -> Optional[Config]:
    """Load and validate configuration with error handling."""
    try:
        logger.log_action("Loading configuration")
        config = load_config(args.config)
        logger.log_result("Configuration loaded")

        issues = validate_config(config)
        errors = [issue for issue in issues if issue.startswith("ERROR")]
        warnings = [issue for issue in issues if not issue.startswith("ERROR")]

        if errors:
            StatusDisplay.print_section("Configuration Errors")
            for error in errors:
                logger.log_error(error.replace("ERROR: ", ""))
            return None
        for warning in warnings:
            logger.log_warning(warning.replace("WARNING: ", ""))
        return config

    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {args.config}")
        logger.log_info("Use 'klotskigraph create-config' to create a default configuration")
        return None
    except Exception as e:
        logger.log_error(f"Configuration error: {e}")
        return None


def _display_run_config(config: Config) -> None:
    config_info = {
        "Puzzle": config.puzzle.preset or config.puzzle.file,
        "Goal": config.puzzle.goal or "(puzzle default)",
        "Max States": config.search.max_states,
        "Hashing": "identity-preserving" if config.search.identity_preserving else "canonical",
        "Compound Moves": "Enabled" if config.search.compound_moves else "Disabled",
        "Output Directory": config.runner.log_dir,
    }
    StatusDisplay.print_results(config_info, "Enumeration Configuration")


def _resolve_source(args) -> PuzzleSpec:
    if args.preset:
        return resolve_puzzle(args.preset)
    return load_puzzle(args.puzzle)


def inspect_command(args) -> int:
    """Execute inspect command."""
    logger = LiveLogger(verbose=True)

    try:
        spec = _resolve_source(args)
        placement = spec.placement
        StatusDisplay.print_header(f"Placement: {spec.name}")
        StatusDisplay.print_board(placement)

        issues = validate_placement(placement)
        if issues:
            StatusDisplay.print_section("Placement Issues")
            for issue in issues:
                logger.log_error(issue)
            return 1

        index = OccupancyIndex(placement)
        singles = single_moves(placement, index)
        compounds = compound_moves(placement, args.identity, index=index, singles=singles)
        space = classify_empty_space(placement, index)

        StatusDisplay.print_section(f"Single Moves ({len(singles)})")
        for move in singles:
            print(f"  • {move.describe()}")
        StatusDisplay.print_section(f"Compound Moves ({len(compounds)})")
        for move in compounds:
            print(f"  • {move.describe()}")

        StatusDisplay.print_results({
            "Board": placement.describe(),
            "Open cells": len(space.open_cells),
            "Cavities": space.cavity_count,
            "Key": key_to_string(canonical_key(placement, args.identity)),
        }, "Placement Summary")
        return 0

    except Exception as e:
        logger.log_error(f"Failed to inspect placement: {e}")
        return 1


def create_config_command(args) -> int:
    """Execute create-config command."""
    logger = LiveLogger(verbose=True)

    try:
        StatusDisplay.print_header("Creating Configuration File")

        if Path(args.output).exists() and not args.force:
            logger.log_warning(f"Configuration file already exists: {args.output}")
            logger.log_info("Use --force to overwrite it")
            return 1

        logger.log_action("Creating configuration")
        create_default_config(args.output, preset=args.preset, max_states=args.max_states)
        logger.log_result(f"Configuration created: {args.output}")

        logger.log_info("Next steps:")
        logger.log_info("1. Validate the configuration: klotskigraph validate-config " + args.output)
        logger.log_info("2. Run it: klotskigraph run --config " + args.output)
        return 0

    except Exception as e:
        logger.log_error(f"Failed to create config: {e}")
        return 1


def validate_config_command(args) -> int:
    """Execute validate-config command."""
    logger = LiveLogger(verbose=True)

    try:
        StatusDisplay.print_header("Configuration Validation")

        logger.log_action(f"Loading configuration from: {args.config}")
        config = load_config(args.config)
        logger.log_result("Configuration loaded successfully")

        issues = validate_config(config)
        errors = [issue for issue in issues if issue.startswith("ERROR")]
        warnings = [issue for issue in issues if not issue.startswith("ERROR")]

        if args.strict and warnings:
            errors.extend(warnings)
            warnings = []

        for i, error in enumerate(errors, 1):
            logger.log_error(f"{i}. {error.replace('ERROR: ', '')}")
        for i, warning in enumerate(warnings, 1):
            logger.log_warning(f"{i}. {warning.replace('WARNING: ', '')}")

        StatusDisplay.print_results({
            "Status": "FAILED" if errors else "VALID",
            "Errors Found": len(errors),
            "Warnings Found": len(warnings),
        }, "Validation Summary")
        return 1 if errors else 0

    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {args.config}")
        return 1
    except Exception as e:
        logger.log_error(f"Failed to validate config: {e}")
        return 1


def list_components_command(args) -> int:
    """Execute list-components command."""
    components = get_available_components()
    if args.type != "all":
        components = {args.type: components[args.type]}

    if args.format == "json":
        print(json.dumps(components, indent=2))
        return 0

    StatusDisplay.print_header("Available Components")
    for comp_type, comp_list in components.items():
        StatusDisplay.print_section(comp_type.title())
        for comp in comp_list:
            print(f"  • {comp}")
    return 0


def show_component_command(args) -> int:
    """Execute show-component command."""
    logger = LiveLogger(verbose=True)

    registry = PUZZLE_REGISTRY if args.type == "puzzle" else GOAL_REGISTRY
    factory = registry.get(args.name)
    if factory is None:
        logger.log_error(f"{args.type.title()} '{args.name}' not found")
        logger.log_info(f"Available {args.type}s: {', '.join(sorted(registry))}")
        return 1

    StatusDisplay.print_header(f"{args.type.title()}: {args.name}")
    info = {
        "Name": args.name,
        "Type": args.type,
        "Factory": factory.__name__,
        "Module": factory.__module__,
    }
    if factory.__doc__:
        info["Description"] = factory.__doc__.strip().split('\n')[0]
    StatusDisplay.print_results(info, "Component Details")

    if args.type == "puzzle":
        spec = factory()
        StatusDisplay.print_section("Initial Placement")
        StatusDisplay.print_board(spec.placement)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    try:
        parser = create_parser()

        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            parser.print_help()
            return 1

        args = parser.parse_args(argv)

        command_handlers = {
            "run": run_command,
            "enumerate": enumerate_command,
            "inspect": inspect_command,
            "create-config": create_config_command,
            "validate-config": validate_config_command,
            "list-components": list_components_command,
            "show-component": show_component_command,
        }

        handler = command_handlers.get(args.command)
        if handler:
            return handler(args)
        parser.print_help()
        return 1

    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
