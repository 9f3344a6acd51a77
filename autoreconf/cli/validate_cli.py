"""
CLI utilities for profile validation.
"""

from typing import List, Tuple

from ..config import ConfigParser, ConfigValidator


def validate_command(args):
    """Validate one or more profile files."""
    if len(args.config) > 1:
        return batch_validate(args.config, verbose=args.verbose)
    
    config_file = args.config[0]
    print(f"🔍 Validating configuration: {config_file}")
    
    parser = ConfigParser()
    validator = ConfigValidator()
    
    # Check syntax
    if not parser.validate_file_syntax(config_file):
        print("❌ Configuration file has syntax errors")
        return 1
    
    # Parse and validate
    try:
        config = parser.parse_config(config_file)
    except (OSError, ValueError) as e:
        print(f"❌ Configuration validation failed: {e}")
        return 1
    
    print("✅ Configuration is valid")
    
    # Show summary
    print("\n📋 Configuration Summary:")
    print(parser.get_config_summary(config))
    
    # Show warnings
    warnings = validator.get_validation_warnings(config)
    if warnings:
        print("\n⚠️  Warnings:")
        for warning in warnings:
            print(f"  - {warning}")
    
    if args.verbose:
        print(f"\n🔧 Additional Details:")
        for key, value in config.to_dict().items():
            print(f"  - {key}: {value}")
    
    return 0


def _check_profile(parser: ConfigParser, validator: ConfigValidator, config_file: str) -> Tuple[bool, str]:
    if not parser.validate_file_syntax(config_file):
        return False, "YAML syntax error"
    try:
        config = parser.parse_config(config_file)
    except (OSError, ValueError) as e:
        return False, str(e)
    
    warnings = validator.get_validation_warnings(config)
    overrides = sorted(config.overridden_literals())
    details = f"{config.parameter_name_matching} matching"
    if overrides:
        details += f", overrides {', '.join(overrides)}"
    if warnings:
        details += f", {len(warnings)} warning(s)"
    return True, details


def batch_validate(config_files: List[str], verbose: bool = False) -> int:
    """Validate multiple profile files, reporting each as it is checked."""
    print(f"🔍 Checking {len(config_files)} reconfiguration profiles")
    
    parser = ConfigParser()
    validator = ConfigValidator()
    
    failed = []
    for config_file in config_files:
        ok, details = _check_profile(parser, validator, config_file)
        if not ok:
            failed.append(config_file)
            print(f"  ❌ {config_file}: {details}")
        elif verbose:
            print(f"  ✅ {config_file} ({details})")
        else:
            print(f"  ✅ {config_file}")
    
    valid_count = len(config_files) - len(failed)
    print(f"\n📈 {valid_count}/{len(config_files)} files valid")
    if failed:
        print("Fix the failing profiles before using them with 'autoreconf modify --config'")
    
    return 1 if failed else 0
