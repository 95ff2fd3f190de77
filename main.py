#!/usr/bin/env python
"""
SDF Generator CLI - Signed distance fields from thresholded bitmaps

Usage:
    python main.py --in <input.png> --out <output.png> [options]

Examples:
    python main.py --in glyph.png --out glyph_sdf.png
    python main.py --in glyph.png --out glyph_sdf.png --preset wide
    python main.py --in scan.png --out scan_sdf.png --threshold 32768
    python main.py --in glyph.png --out glyph_sdf.png --config sdf.yaml
"""

import argparse
import logging
import sys
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a signed distance field from a black-on-white bitmap",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Encoding:
  output = clamp((dist_to_ink - dist_to_background) * scale + bias, 0, 255)
  Ink pixels have a red channel below the threshold (16-bit scale).

Examples:
  %(prog)s --in glyph.png --out glyph_sdf.png
  %(prog)s --in glyph.png --out glyph_sdf.png --preset tight
  %(prog)s --list-presets
        """
    )

    parser.add_argument(
        '--in',
        dest='input',
        type=str,
        default=None,
        help='the png to calculate the sdf for'
    )

    parser.add_argument(
        '--out',
        dest='output',
        type=str,
        default=None,
        help='the png to output sdf to'
    )

    parser.add_argument(
        '-t', '--threshold',
        type=int,
        default=None,
        help='16-bit red intensity below which a pixel is ink (default: 128)'
    )

    parser.add_argument(
        '-s', '--scale',
        type=int,
        default=None,
        help='Gray levels per pixel of distance (default: 3)'
    )

    parser.add_argument(
        '-b', '--bias',
        type=int,
        default=None,
        help='Output value on the ink boundary (default: 128)'
    )

    parser.add_argument(
        '--preset',
        type=str,
        default=None,
        metavar='NAME',
        help='Start from a named preset (see --list-presets)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        metavar='PATH',
        help='YAML file with threshold/scale/bias settings'
    )

    parser.add_argument(
        '--list-presets',
        action='store_true',
        help='List all available presets and exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug output and tracebacks'
    )

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Import here to avoid slow startup for --help
    from sdfgen import SDFConfig, generate, get_preset, load_config
    from sdfgen.core import PRESETS

    if args.list_presets:
        print("Available SDF Presets:\n")
        for name, settings in sorted(PRESETS.items()):
            print(f"  {name:<10} threshold={settings['threshold']:<6} "
                  f"scale={settings['scale']:<3} bias={settings['bias']}")
        return 0

    if not args.input or not args.output:
        parser.print_usage()
        print("Error: --in and --out are required")
        return 1

    input_path = Path(args.input)
    output_path = Path(args.output)
    if input_path.suffix != '.png' or output_path.suffix != '.png':
        print("Error: in/out file should be png")
        return 1

    try:
        config = get_preset(args.preset) if args.preset else SDFConfig()
        if args.config:
            config = load_config(args.config, base=config)
        config = config.merged(threshold=args.threshold, scale=args.scale, bias=args.bias)
        config.validate()

        print(f"Generating SDF: {input_path}")
        if args.verbose:
            print(f"Settings: threshold={config.threshold} scale={config.scale} bias={config.bias}")

        output = generate(input_path, output_path, config)
        print(f"Output: {output}")

    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
