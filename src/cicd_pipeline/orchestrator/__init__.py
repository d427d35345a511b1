"""Deployment secret setup.

- Settings loaded from .env
- Structured logging
- `gh`/`git` access behind a small command-runner seam
- Mode dispatch for list / interactive / pipeline test
"""
