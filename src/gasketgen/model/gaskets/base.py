"""
Gasket Generator Base
=====================
Shared plumbing for the four generators: the shape kind enum, the drawing
bundle every generator produces, the validation result and the field reader
that turns raw text into numbers while collecting every problem it finds.

Why is this file needed?
------------------------
1. Uniformity: the engine, the session and the CLI only ever see a
   `GeometrySpec`, whatever the shape.
2. Accumulation: validation never stops at the first bad field. Issues are
   collected in two phases. Field parsing and sign checks come first; the
   relational checks and clearances only run once every field is usable.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import StrEnum
import logging
import math
from typing import Any, ClassVar, Iterable, Mapping, Optional, Type, TypeVar

from gasketgen.model.clearance import ClearanceReport, Severity
from gasketgen.model.errors import (
    ClearanceError, ConstraintError, GasketIssue, GeometryValidationError, GradedWarning, ParseError,
)
from gasketgen.model.geometry_primitives import DrawingEntity, Layer, Point
from gasketgen.model.units import parse_dimension

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=StrEnum)


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class ShapeKind(StrEnum):
    ELLIPSE = "ellipse"
    FLANGE = "flange"
    FIRETUBE = "firetube"
    JUMPER = "jumper"


class FieldType(StrEnum):
    DIMENSION = "dimension"
    INTEGER = "integer"
    CHOICE = "choice"


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class FieldInfo:
    """Describes one raw input of a generator (used by the reader and the CLI)."""
    name: str
    label: str
    type: FieldType = FieldType.DIMENSION
    required: bool = True
    choices: tuple[str, ...] = ()
    default: Optional[str] = None


@dataclass
class GasketDrawing:
    """Everything a generator draws, already split by layer."""
    perimeter: list[DrawingEntity] = field(default_factory=list)
    holes: list[DrawingEntity] = field(default_factory=list)

    @property
    def layers(self) -> list[Layer]:
        return [Layer.PERIMETER, Layer.HOLES]

    def entities(self) -> list[DrawingEntity]:
        return [*self.perimeter, *self.holes]


@dataclass
class ValidationResult:
    """
    Outcome of `validate_geometry`.

    `spec` is only set when there are no blocking errors. Warnings may
    accompany a successful spec.
    """
    kind: ShapeKind
    spec: Optional[GeometrySpec] = None
    errors: list[GasketIssue] = field(default_factory=list)
    warnings: list[GasketIssue] = field(default_factory=list)
    clearances: Optional[ClearanceReport] = None

    @property
    def ok(self) -> bool:
        return self.spec is not None and not self.errors

    def unwrap(self) -> GeometrySpec:
        """Return the spec or raise `GeometryValidationError` carrying every error."""
        if not self.ok:
            raise GeometryValidationError(self.errors)
        return self.spec

    def messages(self) -> list[str]:
        return [issue.message for issue in (*self.errors, *self.warnings)]


# ------------------------------------------------------------------------------
# Field Reader
# ------------------------------------------------------------------------------
class FieldReader:
    """
    Reads raw inputs by field name and records issues instead of raising.

    Every accessor returns None when the value is unusable, so generators can
    read all of their fields first and decide afterwards whether the geometric
    checks can run.
    """

    def __init__(self, raw: Mapping[str, Any], fields: Iterable[FieldInfo]) -> None:
        self.raw = dict(raw)
        self.fields = {f.name: f for f in fields}
        self.issues: list[GasketIssue] = []

    def label(self, name: str) -> str:
        info = self.fields.get(name)
        return info.label if info else name

    def add(self, issue: GasketIssue) -> None:
        self.issues.append(issue)

    def is_blank(self, name: str) -> bool:
        value = self.raw.get(name)
        return value is None or (isinstance(value, str) and not value.strip())

    def _parse(self, name: str) -> Optional[float]:
        if self.is_blank(name):
            self.add(ParseError(f"{self.label(name)} is required.", field=name))
            return None

        value = self.raw[name]
        try:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                number = float(value)
                if not math.isfinite(number):
                    raise ParseError(f'Invalid number "{value}".')
                return number
            return parse_dimension(str(value))
        except ParseError as e:
            self.add(ParseError(f"{self.label(name)}: {e.message}", field=name))
            return None

    def positive(self, name: str) -> Optional[float]:
        value = self._parse(name)
        if value is not None and value <= 0:
            self.add(ConstraintError(f"{self.label(name)} must be a positive number.", field=name))
            return None
        return value

    def non_negative(self, name: str) -> Optional[float]:
        value = self._parse(name)
        if value is not None and value < 0:
            self.add(ConstraintError(f"{self.label(name)} must be zero or a positive number.", field=name))
            return None
        return value

    def optional_non_negative(self, name: str) -> Optional[float]:
        """Blank means 0.0; otherwise the value must be >= 0."""
        if self.is_blank(name):
            return 0.0
        value = self._parse(name)
        if value is not None and value < 0:
            self.add(ConstraintError(f"{self.label(name)} must be blank or a non-negative number.", field=name))
            return None
        return value

    def optional_positive(self, name: str) -> Optional[float]:
        """Blank means "not given" (None) without recording an issue."""
        if self.is_blank(name):
            return None
        return self.positive(name)

    def positive_integer(self, name: str) -> Optional[int]:
        if self.is_blank(name):
            self.add(ParseError(f"{self.label(name)} is required.", field=name))
            return None

        text = str(self.raw[name]).strip()
        try:
            value = int(text)
        except ValueError:
            self.add(ParseError(f'{self.label(name)}: Invalid whole number "{text}".', field=name))
            return None

        if value <= 0:
            self.add(ConstraintError(f"{self.label(name)} must be greater than zero.", field=name))
            return None
        return value

    def choice(self, name: str, enum_cls: Type[E], default: Optional[E] = None) -> Optional[E]:
        if self.is_blank(name):
            if default is None:
                self.add(ParseError(f"{self.label(name)} is required.", field=name))
            return default

        text = str(self.raw[name]).strip().lower()
        try:
            return enum_cls(text)
        except ValueError:
            options = ", ".join(m.value for m in enum_cls)
            self.add(ParseError(f'{self.label(name)}: "{text}" is not one of {options}.', field=name))
            return None


# ------------------------------------------------------------------------------
# Generator Base
# ------------------------------------------------------------------------------
class GeometrySpec(ABC):
    """
    Base class for the validated, immutable description of one gasket.

    Subclasses are frozen dataclasses registered with `register_gasket`.
    """
    KIND: ClassVar[ShapeKind]
    TITLE: ClassVar[str] = "Gasket"
    FIELDS: ClassVar[tuple[FieldInfo, ...]] = ()

    # ---- abstract API for subclasses ----
    @classmethod
    @abstractmethod
    def from_fields(cls, reader: FieldReader) -> Optional[GeometrySpec]:
        """Read every field; return None if any of them is unusable."""

    @abstractmethod
    def build_outline(self) -> GasketDrawing:
        """Perimeter and hole entities, centered at the origin."""

    def check_constraints(self) -> Iterable[GasketIssue]:
        """Relational checks between fields (long >= short, ID < OD, ...)."""
        return ()

    def place_holes(self) -> list[Point]:
        """Bolt hole centers."""
        return []

    def compute_clearances(self) -> ClearanceReport:
        return ClearanceReport()

    def summary(self) -> str:
        return self.TITLE

    # ---- validation ----
    @classmethod
    def validate(cls, raw: Mapping[str, Any]) -> ValidationResult:
        """
        Turn raw user inputs into a spec, accumulating every issue.

        Never raises on bad input; the issues end up in the result.
        """
        reader = FieldReader(raw, cls.FIELDS)
        result = ValidationResult(kind=cls.KIND)

        candidate = cls.from_fields(reader)
        result.errors.extend(reader.issues)
        if candidate is None or result.errors:
            logger.info(f"{cls.KIND} inputs rejected with {len(result.errors)} field error(s).")
            return result

        result.errors.extend(candidate.check_constraints())

        report = candidate.compute_clearances()
        result.clearances = report
        for check in report.checks:
            if check.severity is Severity.ERROR:
                result.errors.append(ClearanceError(check.describe(), field=check.field))
            elif check.severity is Severity.WARNING:
                result.warnings.append(GradedWarning(check.describe(), field=check.field))

        if result.errors:
            logger.info(f"{cls.KIND} geometry rejected with {len(result.errors)} error(s).")
            return result

        result.spec = candidate
        logger.info(f"{cls.KIND} geometry validated ({len(result.warnings)} warning(s)): {candidate.summary()}")
        return result
