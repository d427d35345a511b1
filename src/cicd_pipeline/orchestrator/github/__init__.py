"""GitHub access via the `gh` CLI."""
