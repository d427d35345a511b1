"""CI/CD pipeline kit.

Provides:
- `cicd-setup`: configure, list and verify the GitHub Actions secrets the pipeline needs,
  and push a marker commit to exercise it
- `cicd-demo-api`: the small welcome/health/users API the pipeline builds and deploys
"""

__version__ = "1.0.0"

from cicd_pipeline.orchestrator.config import SetupSettings

__all__ = ["__version__", "SetupSettings"]
