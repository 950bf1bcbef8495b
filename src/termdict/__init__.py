"""
termdict - a browsable, read-only dictionary over an arbitrary SQLite table.

Subpackages:
- termdict.core: schema inference, store access, repository, errors, logging
- termdict.render: definition text -> render plan (markdown + math placeholders)
- termdict.audio: pronunciation playback plans and the sequencing state machine
- termdict.ops: operation functions shared by the API and the CLI
- termdict.api: FastAPI application (HTTP collaborator)
- termdict.cli: Typer command line
"""

__version__ = "0.1.0"

from termdict.audio.sequencer import PlaybackPlan, build_plan
from termdict.core.errors import RepositoryError, SchemaError
from termdict.core.schema import SchemaBinding, infer, infer_binding
from termdict.render.content import MathSegment, RenderPlan, render

__all__ = [
    "__version__",
    "MathSegment",
    "PlaybackPlan",
    "RenderPlan",
    "RepositoryError",
    "SchemaBinding",
    "SchemaError",
    "build_plan",
    "infer",
    "infer_binding",
    "render",
]
