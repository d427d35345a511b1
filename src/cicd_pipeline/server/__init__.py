"""FastAPI demo service built and deployed by the pipeline.

Routes are fixed: `/`, `/health` and `/api/users`; anything else answers with a JSON 404.
"""

from __future__ import annotations

__all__ = ["create_app"]

from cicd_pipeline.server.app import create_app
