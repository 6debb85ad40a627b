#!/usr/bin/env python3
"""
Command-line interface for Xeniria - static site generator.
"""

import os
import sys
import argparse
from typing import List, Optional

from . import __version__
from .core import Xeniria, setup_logging
from .server import start_server
from .settings import SiteConfig, XeniriaSettings

SAMPLE_POST = """---
title: Hello
author: Xeniria
date: 2024-01-01
---
# Hello, world

This is your first post. Every `.md` file in `content/` becomes a page under
`public/posts/`, and `about.md` becomes `public/about.html`.

Run `xeniria build` to regenerate the site and `xeniria serve` to preview it.
"""

SAMPLE_ABOUT = """---
title: About
author: Xeniria
date: 2024-01-01
---
This blog is built with **Xeniria**, a minimal static site generator.
"""


def create_sample_content(content_dir: str = 'content') -> None:
    """Create starter content files, keeping any that already exist."""
    os.makedirs(content_dir, exist_ok=True)

    samples = [
        (os.path.join(content_dir, 'hello.md'), SAMPLE_POST),
        (os.path.join(content_dir, 'about.md'), SAMPLE_ABOUT),
    ]
    for path, text in samples:
        if os.path.exists(path):
            print(f"Content already exists: {path}")
        else:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(text)
            print(f"Created sample content: {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='xeniria',
                                     description='Xeniria - A minimal static site generator')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    build = subparsers.add_parser('build', help='Build the static site (parse Markdown & generate HTML)')
    build.add_argument('--content', type=str,
                       help='Content directory containing markdown files')
    build.add_argument('--output', type=str,
                       help='Output directory for generated site')
    build.add_argument('--site-title', type=str, help='Title shown on the index page')
    build.add_argument('--logs', type=str, help='Directory to write build logs to')

    serve = subparsers.add_parser('serve', help='Start a local server to preview the site')
    serve.add_argument('--output', type=str, help='Directory to serve')
    serve.add_argument('--port', type=int, help='Port to listen on')
    serve.add_argument('--host', type=str, help='Interface to bind')

    init = subparsers.add_parser('init', help='Create a sample configuration file and content')
    init.add_argument('--format', type=str, choices=['yml', 'yaml', 'json'], default='yml',
                      help='Configuration file format')

    return parser


def run_build(final_settings) -> int:
    config = SiteConfig.from_settings(final_settings)
    generator = Xeniria(config, log_dir=final_settings.get('logs'))
    result = generator.build()

    for diagnostic in result.diagnostics:
        print(f"Skipped {diagnostic}", file=sys.stderr)
    return 0


def run_serve(final_settings) -> int:
    config = SiteConfig.from_settings(final_settings)
    setup_logging(final_settings.get('logs'))
    start_server(config.output_dir, config.port, config.host)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        if args.command == 'init':
            settings_loader = XeniriaSettings()
            config_path = settings_loader.sample_config_path(args.format)
            if os.path.exists(config_path):
                print(f"Configuration already exists: {config_path}")
            else:
                settings_loader.create_sample_config(args.format)
                print(f"Created sample configuration file: {config_path}")
            create_sample_content()
            print("\nRun 'xeniria build' to build your site.")
            return

        # Load settings from configuration file
        settings_loader = XeniriaSettings()
        settings_loader.load_settings()

        # Command line arguments take precedence
        args_dict = {k: v for k, v in vars(args).items() if v is not None and k != 'command'}
        final_settings = settings_loader.merge_with_args(args_dict)

        if args.command == 'build':
            status = run_build(final_settings)
        else:
            status = run_serve(final_settings)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(status)


if __name__ == '__main__':
    main()
