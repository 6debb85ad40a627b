"""
HTML projections for Xeniria records.

Each page kind has one function that takes its record and returns the full
HTML document. Title, author and date text is escaped by Jinja2; the body is
already HTML and is inserted as-is.
"""

import os
from dataclasses import dataclass
from typing import Iterable

from jinja2 import Environment, PackageLoader, select_autoescape

from .content import Page, Post

DEFAULT_SITE_TITLE = 'Xeniria Blog'

env = Environment(
    loader=PackageLoader('xeniria_pkg', 'templates'),
    autoescape=select_autoescape(['html']),
)


@dataclass(frozen=True)
class IndexEntry:
    link: str
    title: str
    date: str
    reading_time: int

    @classmethod
    def from_post(cls, post: Post, output_dir: str) -> 'IndexEntry':
        """Build an entry linking to ``post`` relative to the output directory."""
        link = os.path.relpath(post.file_name, output_dir).replace(os.sep, '/')
        return cls(
            link=link,
            title=post.front_matter.title,
            date=post.front_matter.date,
            reading_time=post.reading_time,
        )


def render_page_html(page: Page) -> str:
    return env.get_template('page.html').render(
        title=page.front_matter.title,
        author=page.front_matter.author,
        content=page.content,
    )


def render_post_html(post: Post) -> str:
    return env.get_template('post.html').render(
        title=post.front_matter.title,
        author=post.front_matter.author,
        date=post.front_matter.date,
        reading_time=post.reading_time,
        content=post.content,
    )


def render_index_html(entries: Iterable[IndexEntry], site_title: str = DEFAULT_SITE_TITLE) -> str:
    """Render the index page listing ``entries`` in the order given."""
    return env.get_template('index.html').render(
        title=site_title,
        entries=list(entries),
    )
