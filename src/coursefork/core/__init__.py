"""
The core classes of coursefork.

These classes represent the domain model of the application: the repository,
its chapters and the workflows built on them.

Modules in this package may only depend on `coursefork.core`.

## Modules

- `coursefork.core.chapter`: A single exercise.
- `coursefork.core.collaborators`: Interfaces of git, filesystem and test runner.
- `coursefork.core.errors`: Errors reported to the user.
- `coursefork.core.log_context`: Indented tracing of core operations.
- `coursefork.core.lookup`: Result of resolving a chapter from a path.
- `coursefork.core.modification_tracker`: Modified files as absolute paths.
- `coursefork.core.path_classifier`: Which directories are chapters.
- `coursefork.core.report`: Test scores.
- `coursefork.core.repository`: The student's working tree.
- `coursefork.core.workflows`: Operations used by the command line interface.
"""
