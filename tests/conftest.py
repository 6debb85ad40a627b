"""Test configuration and fixtures for Xeniria tests."""

import pytest
import logging
import tempfile
import shutil
from pathlib import Path

HELLO_POST = """---
title: Hello
author: Ann
date: 2024-01-01
---
# Hi

This is a short post."""

ABOUT_PAGE = """---
title: About
author: Ann
date: 2024-01-01
---
I write about **static sites**.
"""

@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers added to the Xeniria logger during a test."""
    yield
    logger = logging.getLogger('Xeniria')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)

@pytest.fixture
def hello_post():
    return HELLO_POST

@pytest.fixture
def mock_content_dir(temp_dir):
    """Create a content directory with two posts and an about page."""
    content_dir = Path(temp_dir) / 'content'
    content_dir.mkdir()

    (content_dir / 'hello.md').write_text(HELLO_POST, encoding='utf-8')
    (content_dir / 'about.md').write_text(ABOUT_PAGE, encoding='utf-8')
    (content_dir / 'second.md').write_text("""---
title: Second Post
author: Bob
date: 2024-02-01
---
Another post with a [link](https://example.com).
""", encoding='utf-8')

    # Not markdown, must be ignored
    (content_dir / 'notes.txt').write_text("scratch", encoding='utf-8')

    return str(content_dir)

@pytest.fixture
def mock_output_dir(temp_dir):
    """Path of the output directory (not created)."""
    return str(Path(temp_dir) / 'public')
