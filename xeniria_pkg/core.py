import os
import time
import shutil
import logging
from datetime import datetime
from dataclasses import dataclass, field
from typing import List, Optional

from .content import ContentError, FileProcessor, Post
from .render import IndexEntry, render_index_html, render_page_html, render_post_html
from .settings import SiteConfig

ABOUT_SOURCE_SUFFIX = 'about.md'


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno > logging.INFO:
            return True
        allowed_messages = [
            "Building site",
            "Generated:",
            "Site build complete",
            "Total posts generated:",
            "Files skipped:",
            "Starting preview server",
            "Preview server stopped",
            "Loaded configuration from:",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def setup_logging(log_dir=None):
    """Set up logging configuration for the ``Xeniria`` logger tree."""
    logger = logging.getLogger('Xeniria')
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        # Console handler with filter
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.addFilter(InfoFilter())
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(console_handler)

    # File handler for all logs
    if log_dir and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        os.makedirs(log_dir, exist_ok=True)
        log_filename = datetime.now().strftime('xeniria_%Y-%m-%d_%H-%M-%S.log')
        file_handler = logging.FileHandler(os.path.join(log_dir, log_filename))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)

    return logger


@dataclass(frozen=True)
class BuildDiagnostic:
    file_path: str
    kind: str
    message: str

    def __str__(self):
        return f"{self.file_path}: {self.kind}: {self.message}"


@dataclass
class BuildResult:
    posts: List[Post] = field(default_factory=list)
    pages_generated: int = 0
    diagnostics: List[BuildDiagnostic] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def succeeded(self):
        return not self.diagnostics


class Xeniria:
    """Builds the site described by a ``SiteConfig``."""

    def __init__(self, config: Optional[SiteConfig] = None, log_dir=None):
        self.config = config or SiteConfig()
        self.content_dir = self.config.content_dir
        self.output_dir = self.config.output_dir
        self.posts_dir = self.config.posts_dir
        self.logger = setup_logging(log_dir)
        self.processor = FileProcessor(self.posts_dir)

    def create_output_dir(self):
        """Create the output tree, removing pages left over from an earlier build."""
        if os.path.isdir(self.posts_dir):
            shutil.rmtree(self.posts_dir)
        about_path = os.path.join(self.output_dir, 'about.html')
        if os.path.isfile(about_path):
            os.remove(about_path)
        os.makedirs(self.posts_dir, exist_ok=True)

    def get_markdown_files(self, directory):
        """Get markdown files from a directory, sorted by file name."""
        markdown_files = []
        if os.path.isdir(directory):
            for file in sorted(os.listdir(directory)):
                file_path = os.path.join(directory, file)
                if file.endswith('.md') and os.path.isfile(file_path):
                    markdown_files.append(file_path)
        else:
            self.logger.warning(f"Content directory not found: {directory}")
        return markdown_files

    def is_page_source(self, file_path):
        return file_path.endswith(ABOUT_SOURCE_SUFFIX)

    def write_html(self, output_path, html):
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html)
        self.logger.info(f"Generated: {output_path}")

    def record_error(self, result, file_path, kind, error):
        """Log a per-file failure and keep it in the build result."""
        self.logger.error(f"Error parsing {kind} {file_path}: {error}")
        result.diagnostics.append(BuildDiagnostic(
            file_path=file_path,
            kind=getattr(error, 'kind', type(error).__name__),
            message=str(error),
        ))

    def record_collision(self, result, file_path, kind, output_path, seen_file_names):
        """Report ``file_path`` if another source already produced ``output_path``."""
        if output_path not in seen_file_names:
            return False
        message = f"{output_path} already generated from {seen_file_names[output_path]}"
        self.logger.error(f"Error parsing {kind} {file_path}: output {message}")
        result.diagnostics.append(BuildDiagnostic(
            file_path=file_path,
            kind='FileNameCollision',
            message=message,
        ))
        return True

    def build_about_page(self, file_path, result, seen_file_names):
        """Generate ``about.html`` from ``about.md``."""
        output_path = os.path.join(self.output_dir, 'about.html')
        if self.record_collision(result, file_path, 'About page', output_path, seen_file_names):
            return

        try:
            page = self.processor.parse_page_markdown(file_path)
            self.write_html(output_path, render_page_html(page))
        except (ContentError, OSError) as e:
            self.record_error(result, file_path, 'About page', e)
            return

        seen_file_names[output_path] = file_path
        result.pages_generated += 1

    def build_post(self, file_path, result, seen_file_names):
        """Generate one post page and add the post to ``result.posts``."""
        try:
            post = self.processor.parse_post_markdown(file_path)
        except ContentError as e:
            self.record_error(result, file_path, 'post', e)
            return

        if self.record_collision(result, file_path, 'post', post.file_name, seen_file_names):
            return

        try:
            self.write_html(post.file_name, render_post_html(post))
        except OSError as e:
            self.record_error(result, file_path, 'post', e)
            return

        seen_file_names[post.file_name] = file_path
        result.posts.append(post)

    def build_index_page(self, posts):
        """Generate ``index.html`` listing ``posts`` in the given order."""
        entries = [IndexEntry.from_post(post, self.output_dir) for post in posts]
        self.write_html(
            os.path.join(self.output_dir, 'index.html'),
            render_index_html(entries, self.config.site_title),
        )

    def build(self) -> BuildResult:
        """Main build process."""
        start_time = time.time()
        self.logger.info("Building site...")
        result = BuildResult()

        self.create_output_dir()

        seen_file_names = {}
        for file_path in self.get_markdown_files(self.content_dir):
            if self.is_page_source(file_path):
                self.build_about_page(file_path, result, seen_file_names)
            else:
                self.build_post(file_path, result, seen_file_names)

        self.build_index_page(result.posts)

        result.elapsed = time.time() - start_time
        self.logger.info(f"Site build complete in {result.elapsed:.3f} seconds.")
        self.logger.info(f"Total posts generated: {len(result.posts)}")
        if result.diagnostics:
            self.logger.info(f"Files skipped: {len(result.diagnostics)}")
        return result
