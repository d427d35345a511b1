"""Console entrypoint for `cicd-setup`.

The implementation lives in `cicd_pipeline.orchestrator.main`.
"""

from __future__ import annotations

from cicd_pipeline.orchestrator.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
