"""
CLI utilities for inspecting a deployment descriptor.
"""

import os

from ..config import ConfigParser, ModifierConfiguration
from ..core.errors import WebXmlError
from ..modifier import WebXmlModifier


def inspect_command(args):
    """Show the scopes a modification would touch."""
    print(f"🔍 Inspecting deployment descriptor: {args.web_xml}")
    
    try:
        config = ConfigParser().parse_config(args.config) if args.config else ModifierConfiguration()
    except (OSError, ValueError) as e:
        print(f"❌ Error loading configuration: {e}")
        return 1
    
    if not os.path.exists(args.web_xml):
        print(f"❌ Deployment descriptor not found: {args.web_xml}")
        return 1
    
    try:
        with open(args.web_xml, 'rb') as f:
            modifier = WebXmlModifier(f.read(), config)
    except WebXmlError as e:
        print(f"❌ Error reading {args.web_xml}: {e}")
        return 1
    
    summary = modifier.summary()
    print("\n📋 Descriptor Summary:")
    print(summary)
    
    missing_names = [servlet for servlet in summary.servlets if servlet.name is None]
    if missing_names:
        print(f"\n⚠️  {len(missing_names)} dispatcher servlet(s) without <servlet-name> - modification will fail")
        return 1
    
    return 0
