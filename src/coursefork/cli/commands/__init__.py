"""CLI command modules.

This package contains the CLI commands split into logical groups:
- chapters: Chapter listing and running tests
- git_ops: Initialize, upload, sync and git status
- config: Configuration management
- updates: Self-update check
"""
