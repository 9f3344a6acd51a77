"""
CLI utilities for generating example profiles.
"""

import os
from ..config import ConfigParser


def examples_command(args):
    """Generate example profiles and sample descriptors."""
    print(f"📝 Generating example configurations in {args.output_dir}")
    
    parser = ConfigParser()
    try:
        parser.create_example_configs(args.output_dir)
    except OSError as e:
        print(f"❌ Error creating examples: {e}")
        return 1
    
    print("✅ Example configurations created successfully")
    print(f"   Check the {args.output_dir} directory for examples")
    
    # List created files
    files = [f for f in os.listdir(args.output_dir) if f.endswith(('.yml', '.xml'))]
    if files:
        print(f"\n📄 Created example files:")
        for file in sorted(files):
            print(f"  - {file}")
        
        print(f"\n💡 Try running:")
        print(f"   autoreconf validate {args.output_dir}/default_profile.yml")
        print(f"   autoreconf inspect {args.output_dir}/xml_web.xml")
        print(f"   autoreconf modify {args.output_dir}/xml_web.xml --dry-run")
    
    return 0
