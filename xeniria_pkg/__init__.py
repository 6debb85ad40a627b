"""
Xeniria - A minimal static site generator.

Xeniria takes blog posts written in Markdown with YAML front matter and
generates static HTML pages: one page per post, an about page, and an index
listing every post with its estimated reading time.
"""

__version__ = "1.0.0"

from .content import (
    ContentError,
    EncodingError,
    FileProcessor,
    FrontMatter,
    MalformedFrontMatter,
    Page,
    Post,
    RenderError,
    parse_page_markdown,
    parse_post_markdown,
)
from .core import BuildDiagnostic, BuildResult, Xeniria
from .settings import SiteConfig, XeniriaSettings

__all__ = [
    'Xeniria', 'FileProcessor', 'SiteConfig', 'XeniriaSettings',
    'BuildResult', 'BuildDiagnostic',
    'FrontMatter', 'Page', 'Post',
    'ContentError', 'EncodingError', 'MalformedFrontMatter', 'RenderError',
    'parse_page_markdown', 'parse_post_markdown',
]
