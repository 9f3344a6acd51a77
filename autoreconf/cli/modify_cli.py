"""
Main CLI for web.xml auto-reconfiguration.
"""

import argparse
import sys
import os
import logging
from typing import List, Optional

from .. import __version__
from ..config import ConfigParser, ModifierConfiguration
from ..core.errors import WebXmlError
from ..modifier import WebXmlModifier
from .examples_cli import examples_command
from .inspect_cli import inspect_command
from .validate_cli import validate_command

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def load_profile(config_path: Optional[str]) -> ModifierConfiguration:
    """Load a profile, or the default one when no path is given."""
    if not config_path:
        return ModifierConfiguration()
    return ConfigParser().parse_config(config_path)


def modify_command(args):
    """Execute web.xml modification."""
    print(f"🔄 Auto-reconfiguration - Modifying {args.web_xml}")
    
    # Load profile
    try:
        config = load_profile(args.config)
    except (OSError, ValueError) as e:
        print(f"❌ Error loading configuration: {e}")
        return 1
    
    # Override profile with CLI arguments
    if args.no_root:
        config.augment_root = False
    if args.no_servlets:
        config.augment_servlets = False
    
    if args.verbose:
        print("\n📋 Configuration Summary:")
        print(ConfigParser().get_config_summary(config))
        print()
    
    if not os.path.exists(args.web_xml):
        print(f"❌ Deployment descriptor not found: {args.web_xml}")
        return 1
    
    try:
        with open(args.web_xml, 'rb') as f:
            modifier = WebXmlModifier(f.read(), config).apply()
    except WebXmlError as e:
        print(f"❌ Error modifying {args.web_xml}: {e}")
        return 1
    
    if args.dry_run:
        print(modifier.to_string())
        return 0
    
    output_path = args.output_path or args.web_xml
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    with open(output_path, 'wb') as f:
        f.write(modifier.to_bytes())
    
    print(f"✅ Wrote modified descriptor to {output_path} ({modifier.output_encoding})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="autoreconf",
        description="Spring auto-reconfiguration for web.xml deployment descriptors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  autoreconf WEB-INF/web.xml
  autoreconf modify WEB-INF/web.xml build/web.xml --config profile.yml
  autoreconf modify WEB-INF/web.xml --dry-run
  autoreconf inspect WEB-INF/web.xml
  autoreconf validate profile.yml
  autoreconf examples ./autoreconf_examples
        """
    )
    
    # Global arguments
    parser.add_argument(
        "--version",
        action="version",
        version=f"autoreconf {__version__}"
    )
    
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)"
    )
    
    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    
    # Modify command (default)
    modify_parser = subparsers.add_parser("modify", help="Modify a web.xml")
    modify_parser.add_argument(
        "web_xml",
        help="Path to the web.xml to modify"
    )
    modify_parser.add_argument(
        "output_path",
        nargs="?",
        help="Where to write the modified web.xml (default: modify in place)"
    )
    modify_parser.add_argument(
        "--config",
        help="Path to YAML reconfiguration profile"
    )
    modify_parser.add_argument(
        "--no-root",
        action="store_true",
        help="Leave the root context unchanged (overrides config)"
    )
    modify_parser.add_argument(
        "--no-servlets",
        action="store_true",
        help="Leave servlet contexts unchanged (overrides config)"
    )
    modify_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the modified web.xml instead of writing it"
    )
    modify_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    modify_parser.set_defaults(func=modify_command)
    
    # Inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Show what would be modified")
    inspect_parser.add_argument(
        "web_xml",
        help="Path to the web.xml to inspect"
    )
    inspect_parser.add_argument(
        "--config",
        help="Path to YAML reconfiguration profile"
    )
    inspect_parser.set_defaults(func=inspect_command)
    
    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate profiles")
    validate_parser.add_argument(
        "config",
        nargs="+",
        help="Path(s) to YAML reconfiguration profiles"
    )
    validate_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    validate_parser.set_defaults(func=validate_command)
    
    # Examples command
    examples_parser = subparsers.add_parser("examples", help="Generate example profiles")
    examples_parser.add_argument(
        "output_dir",
        nargs="?",
        default="./examples",
        help="Output directory for examples (default: ./examples)"
    )
    examples_parser.set_defaults(func=examples_command)
    
    return parser


COMMANDS = {"modify", "inspect", "validate", "examples"}


def _first_positional(argv: List[str]) -> Optional[int]:
    skip_value = False
    for index, arg in enumerate(argv):
        if skip_value:
            skip_value = False
            continue
        if arg == "--log-level":
            skip_value = True
            continue
        if not arg.startswith('-'):
            return index
    return None


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    if argv is None:
        argv = sys.argv[1:]
    
    parser = build_parser()
    
    # A bare path is shorthand for the modify command
    index = _first_positional(argv)
    if index is not None and argv[index] not in COMMANDS:
        argv = argv[:index] + ["modify"] + argv[index:]
    
    args = parser.parse_args(argv)
    
    if not hasattr(args, 'func'):
        parser.print_help()
        return 1
    
    setup_logging(args.log_level)
    
    # Execute command
    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\n⏹️  Operation cancelled by user")
        return 1
    except Exception as e:
        print(f"❌ Unexpected error: {e}")
        if args.log_level == "DEBUG":
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
