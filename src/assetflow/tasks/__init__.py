"""Task modules live here.

Each module decorates its task functions with
`@orchestrator.task(name=TaskName..., inputs=[...], outputs=[...])`; the CLI
imports every module in this package to find them.

Do not implement logic here; heavy lifting belongs in `assetflow.transforms`.
"""
