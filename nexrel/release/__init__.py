"""Release flow: option resolution, artifact naming and the step pipeline."""

from __future__ import annotations
