"""
Gasket Session (State Machine)
==============================
This module holds the inputs of one gasket being edited and guards export.

Why is this file needed?
------------------------
1. State Management: It keeps the raw inputs, the last validation result and
   the workflow stage in one place.
2. Gating: A DXF can only be produced from a spec validated against the
   current inputs. Any input edit drops the spec and steps back to READY.

Classes:
    Stage: READY -> VALIDATED -> EXPORTED.
    GasketSession: The container the shell drives.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
import logging
from typing import Any, Optional

from gasketgen import config
from gasketgen.controller import dxf_writer, engine
from gasketgen.model.errors import StaleGeometryError
from gasketgen.model.gaskets import GeometrySpec, ShapeKind, ValidationResult

logger = logging.getLogger(__name__)


class Stage(IntEnum):
    """The stages of the export workflow."""
    READY = 0
    VALIDATED = 1
    EXPORTED = 2


@dataclass
class GasketSession:
    kind: ShapeKind
    inputs: dict[str, Any] = field(default_factory=dict)
    filename: str = ""
    stage: Stage = Stage.READY
    result: Optional[ValidationResult] = None
    last_export: Optional[str] = None

    def __post_init__(self) -> None:
        self.kind = ShapeKind(self.kind)

    @property
    def spec(self) -> Optional[GeometrySpec]:
        return self.result.spec if self.result is not None else None

    @property
    def can_export(self) -> bool:
        return self.stage >= Stage.VALIDATED and self.spec is not None

    @property
    def default_filename(self) -> str:
        return config.DEFAULT_FILENAMES[self.kind]

    # ---- transitions ----
    def invalidate_from(self, stage: Stage) -> None:
        if stage <= Stage.VALIDATED:
            self.result = None
        if stage <= Stage.EXPORTED:
            self.last_export = None

        if self.stage >= stage:
            self.stage = Stage(max(stage - 1, Stage.READY))

    def set_input(self, name: str, value: Any) -> None:
        self.inputs[name] = value
        self.invalidate_from(Stage.VALIDATED)

    def update(self, **values: Any) -> None:
        self.inputs.update(values)
        self.invalidate_from(Stage.VALIDATED)

    def set_filename(self, name: str) -> None:
        """The output name does not affect geometry, so the stage is kept."""
        self.filename = name

    def validate(self) -> ValidationResult:
        self.result = engine.validate_geometry(self.kind, self.inputs)
        self.last_export = None
        self.stage = Stage.VALIDATED if self.result.ok else Stage.READY
        return self.result

    def export(self) -> str:
        """
        DXF text of the current spec.

        Raises:
            StaleGeometryError: If the inputs changed since the last successful validation.
        """
        if not self.can_export:
            raise StaleGeometryError("No validated geometry for the current inputs; validate before exporting.")

        self.last_export = engine.to_dxf(self.spec)
        self.stage = Stage.EXPORTED
        return self.last_export

    def save(self, directory: str) -> str:
        """Export and write `<filename>.dxf` into `directory`; returns the path."""
        text = self.export()
        return dxf_writer.save_dxf(text, directory, self.filename, default=self.default_filename)
