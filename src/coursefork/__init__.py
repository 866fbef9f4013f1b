"""
coursefork: manage a personal fork of a course exercise repository.

## Modules:

- `coursefork.core`: Chapters, the repository that contains them and the
  workflows built on top of both.
- `coursefork.infrastructure`: Configuration, logging, git, filesystem and
  browser collaborators.
- `coursefork.cli`: The command line interface.
"""

from coursefork.__version__ import __version__

__all__ = ["__version__"]
