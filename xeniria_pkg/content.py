"""
Content parsing for Xeniria.

Turns a Markdown source file with YAML front matter into the ``Page`` and
``Post`` records consumed by the HTML projections in ``render.py``.
"""

import os
import re
import math
import logging
from dataclasses import dataclass
from typing import Tuple

import yaml
import mistune

FRONT_MATTER_DELIMITER = '---'
REQUIRED_KEYS = ('title', 'author', 'date')
WORDS_PER_MINUTE = 200

LINK_RE = re.compile(r'!?\[([^\]]*)\]\([^)\s]*\)')
WORD_RE = re.compile(r'\w')


class ContentError(Exception):
    """Base class for errors scoped to a single content file."""

    def __init__(self, message, file_path=None):
        super().__init__(message)
        self.file_path = file_path

    @property
    def kind(self):
        return type(self).__name__


class EncodingError(ContentError):
    """The source file could not be read as text."""


class MalformedFrontMatter(ContentError):
    """The front matter block is missing, unterminated or incomplete."""


class RenderError(ContentError):
    """The Markdown body could not be converted to HTML."""


@dataclass(frozen=True)
class FrontMatter:
    title: str
    author: str
    date: str


@dataclass(frozen=True)
class Page:
    front_matter: FrontMatter
    content: str


@dataclass(frozen=True)
class Post:
    front_matter: FrontMatter
    content: str
    reading_time: int
    file_name: str


def _split_front_matter(text: str) -> Tuple[str, str]:
    """Return the raw YAML block and the body that follows it."""
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FRONT_MATTER_DELIMITER:
        raise MalformedFrontMatter("missing opening '---' delimiter")

    for index in range(1, len(lines)):
        if lines[index].rstrip() == FRONT_MATTER_DELIMITER:
            return ''.join(lines[1:index]), ''.join(lines[index + 1:])

    raise MalformedFrontMatter("unterminated front matter block")


def extract_front_matter(text: str) -> Tuple[FrontMatter, str]:
    """
    Split raw file text into its front matter and Markdown body.

    The file must open with a ``---`` line and the block ends at the next
    ``---`` line. The body is returned exactly as it appears after the
    closing delimiter.

    Args:
        text: Full text of the source file

    Returns:
        Tuple of (FrontMatter, body text)

    Values are kept as the text written in the file, so ``On`` stays
    ``"On"`` and ``1.10`` stays ``"1.10"``.

    Raises:
        MalformedFrontMatter: If the block is absent, unterminated, not a
            YAML mapping, or lacks a required key
    """
    if text.startswith('\ufeff'):
        text = text[1:]

    raw_metadata, body = _split_front_matter(text)

    try:
        # BaseLoader keeps every scalar as the text written in the file
        metadata = yaml.load(raw_metadata, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise MalformedFrontMatter(f"invalid YAML in front matter: {e}")

    if not isinstance(metadata, dict):
        raise MalformedFrontMatter("front matter must be a mapping of keys to values")

    missing = [key for key in REQUIRED_KEYS if metadata.get(key) in (None, '')]
    if missing:
        raise MalformedFrontMatter(f"missing required key(s): {', '.join(missing)}")

    values = {}
    for key in REQUIRED_KEYS:
        if not isinstance(metadata[key], str):
            raise MalformedFrontMatter(f"{key} must be a single text value")
        values[key] = metadata[key].strip()

    if not values['title']:
        raise MalformedFrontMatter("title must not be empty")

    return FrontMatter(**values), body


def create_markdown_parser():
    """Create a Mistune markdown parser with a custom renderer."""
    class CustomRenderer(mistune.HTMLRenderer):
        def __init__(self):
            super().__init__(escape=False)

        def block_code(self, code, info=None):
            escaped_code = mistune.escape(code)
            language = info.strip().split(None, 1)[0] if info and info.strip() else None
            if language:
                return '<pre><code class="language-{}">{}</code></pre>\n'.format(
                    mistune.escape(language), escaped_code)
            return '<pre><code>{}</code></pre>\n'.format(escaped_code)

    return mistune.create_markdown(renderer=CustomRenderer())


_markdown_parser = create_markdown_parser()


def render_markdown(text: str, parser=None) -> str:
    """Convert Markdown text to HTML."""
    parser = parser or _markdown_parser
    try:
        return parser(text)
    except Exception as e:
        raise RenderError(f"failed to render markdown: {e}")


def count_words(text: str) -> int:
    """Count words in Markdown text, ignoring tokens that are only markup."""
    plain_text = LINK_RE.sub(r'\1', text)
    return sum(1 for token in plain_text.split() if WORD_RE.search(token))


def calculate_reading_time(text: str) -> int:
    """Estimated minutes to read ``text``, never less than one."""
    return max(1, math.ceil(count_words(text) / WORDS_PER_MINUTE))


class FileProcessor:
    """Assembles ``Page`` and ``Post`` records from Markdown source files."""

    def __init__(self, posts_output_dir='public/posts', markdown_parser=None):
        self.posts_output_dir = posts_output_dir
        self.markdown_parser = markdown_parser or create_markdown_parser()
        self.logger = logging.getLogger('Xeniria.FileProcessor')

    def markdown_filter(self, text):
        """Convert markdown text to HTML."""
        return render_markdown(text, self.markdown_parser)

    def read_source(self, file_path):
        """Read a source file as UTF-8 text."""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise EncodingError(f"file is not valid UTF-8 text: {e}", file_path)
        except (IOError, OSError) as e:
            raise EncodingError(f"failed to read file: {e}", file_path)

    def parse_markdown_with_metadata(self, file_path):
        """Read a file and split it into front matter and body."""
        text = self.read_source(file_path)
        try:
            return extract_front_matter(text)
        except ContentError as e:
            e.file_path = file_path
            raise

    def render_body(self, file_path, body):
        try:
            return self.markdown_filter(body)
        except ContentError as e:
            e.file_path = file_path
            raise

    def output_file_name(self, file_path):
        """Output path of the post built from ``file_path``."""
        slug = os.path.splitext(os.path.basename(file_path))[0]
        return os.path.join(self.posts_output_dir, f'{slug}.html')

    def parse_page_markdown(self, file_path) -> Page:
        """Parse a standalone page such as ``about.md``."""
        front_matter, body = self.parse_markdown_with_metadata(file_path)
        content = self.render_body(file_path, body)
        self.logger.debug(f"Parsed page: {file_path}")
        return Page(front_matter=front_matter, content=content)

    def parse_post_markdown(self, file_path) -> Post:
        """Parse a blog post, computing its reading time and output path."""
        front_matter, body = self.parse_markdown_with_metadata(file_path)
        content = self.render_body(file_path, body)
        post = Post(
            front_matter=front_matter,
            content=content,
            reading_time=calculate_reading_time(body),
            file_name=self.output_file_name(file_path),
        )
        self.logger.debug(f"Parsed post: {file_path} -> {post.file_name}")
        return post


def parse_page_markdown(file_path) -> Page:
    return FileProcessor().parse_page_markdown(file_path)


def parse_post_markdown(file_path, posts_output_dir='public/posts') -> Post:
    return FileProcessor(posts_output_dir).parse_post_markdown(file_path)
