"""Task-specific work entry payloads.

Each variant carries only the fields its task records and knows how to map
itself to/from the JSON columns of `work_entries` and the JSON API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union

from ..core.enums import OutputCategory, PayloadKind, TaskType
from ..core.exceptions import ValidationError


def _opt_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(frozen=True)
class ScaleReading:
    scale_number: int
    in_value: float
    out_value: Optional[float] = None
    sticks: Optional[float] = None


@dataclass(frozen=True)
class ScalePayload:
    """Stripping: in/out mass per scale, optionally with a sticks reading."""

    kind: ClassVar[PayloadKind] = PayloadKind.SCALES

    readings: tuple[ScaleReading, ...]

    def to_columns(self) -> dict:
        return {
            "scaleentries": [
                {"scalenumber": r.scale_number, "invalue": r.in_value, "outvalue": r.out_value, "sticks": r.sticks}
                for r in self.readings
            ]
        }

    @classmethod
    def from_columns(cls, row: dict) -> "ScalePayload":
        return cls(
            readings=tuple(
                ScaleReading(
                    scale_number=int(r.get("scalenumber") or 0),
                    in_value=float(r.get("invalue") or 0),
                    out_value=_opt_float(r.get("outvalue")),
                    sticks=_opt_float(r.get("sticks")),
                )
                for r in row.get("scaleentries") or ()
            )
        )

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "scale_entries": [
                {"scale_number": r.scale_number, "in_value": r.in_value, "out_value": r.out_value, "sticks": r.sticks}
                for r in self.readings
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScalePayload":
        return cls(
            readings=tuple(
                ScaleReading(
                    scale_number=int(r.get("scale_number") or i + 1),
                    in_value=float(r.get("in_value") or 0),
                    out_value=_opt_float(r.get("out_value")),
                    sticks=_opt_float(r.get("sticks")),
                )
                for i, r in enumerate(data.get("scale_entries") or ())
            )
        )


@dataclass(frozen=True)
class Carton:
    number: int
    mass: float
    grade: str = ""


@dataclass(frozen=True)
class CartonPayload:
    """Bailing sticks / bailing lamina: mass per carton (lamina cartons carry a grade)."""

    kind: ClassVar[PayloadKind] = PayloadKind.CARTONS

    cartons: tuple[Carton, ...]

    def to_columns(self) -> dict:
        return {"cartons": [{"number": c.number, "mass": c.mass, "grade": c.grade} for c in self.cartons]}

    @classmethod
    def from_columns(cls, row: dict) -> "CartonPayload":
        return cls.from_dict({"cartons": row.get("cartons")})

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, **self.to_columns()}

    @classmethod
    def from_dict(cls, data: dict) -> "CartonPayload":
        return cls(
            cartons=tuple(
                Carton(number=int(c.get("number") or i + 1), mass=float(c.get("mass") or 0), grade=c.get("grade") or "")
                for i, c in enumerate(data.get("cartons") or ())
            )
        )


@dataclass(frozen=True)
class OutputEntry:
    category: str
    mass: float


def _outputs_to_json(outputs: tuple[OutputEntry, ...]) -> list[dict]:
    return [{"category": o.category, "mass": o.mass} for o in outputs]


def _outputs_from_json(values) -> tuple[OutputEntry, ...]:
    return tuple(OutputEntry(category=str(o.get("category") or ""), mass=float(o.get("mass") or 0)) for o in values or ())


@dataclass(frozen=True)
class MachinePayload:
    """Machine: input masses fed in, outputs split into output/sticks/f8/dust."""

    kind: ClassVar[PayloadKind] = PayloadKind.MACHINE

    mass_inputs: tuple[float, ...]
    outputs: tuple[OutputEntry, ...] = ()

    def __post_init__(self):
        allowed = {c.value for c in OutputCategory}
        for o in self.outputs:
            if o.category not in allowed:
                raise ValidationError(f"Unknown machine output category: {o.category!r}")

    def total_for(self, category: OutputCategory) -> Optional[float]:
        masses = [o.mass for o in self.outputs if o.category == category.value]
        return sum(masses) if masses else None

    def to_columns(self) -> dict:
        return {"massinputs": list(self.mass_inputs), "outputentries": _outputs_to_json(self.outputs)}

    @classmethod
    def from_columns(cls, row: dict) -> "MachinePayload":
        return cls(
            mass_inputs=tuple(float(m or 0) for m in row.get("massinputs") or ()),
            outputs=_outputs_from_json(row.get("outputentries")),
        )

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "mass_inputs": list(self.mass_inputs), "outputs": _outputs_to_json(self.outputs)}

    @classmethod
    def from_dict(cls, data: dict) -> "MachinePayload":
        return cls(
            mass_inputs=tuple(float(m or 0) for m in data.get("mass_inputs") or ()),
            outputs=_outputs_from_json(data.get("outputs")),
        )


@dataclass(frozen=True)
class TicketPayload:
    kind: ClassVar[PayloadKind] = PayloadKind.TICKET

    duty_name: str = ""

    def to_columns(self) -> dict:
        return {"dutyname": self.duty_name}

    @classmethod
    def from_columns(cls, row: dict) -> "TicketPayload":
        return cls(duty_name=row.get("dutyname") or "")

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "duty_name": self.duty_name}

    @classmethod
    def from_dict(cls, data: dict) -> "TicketPayload":
        return cls(duty_name=str(data.get("duty_name") or "").strip())


@dataclass(frozen=True)
class GradingPayload:
    """Grading: graded output mass per class grade."""

    kind: ClassVar[PayloadKind] = PayloadKind.GRADING

    outputs: tuple[OutputEntry, ...]

    def to_columns(self) -> dict:
        return {"outputentries": _outputs_to_json(self.outputs)}

    @classmethod
    def from_columns(cls, row: dict) -> "GradingPayload":
        return cls(outputs=_outputs_from_json(row.get("outputentries")))

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "outputs": _outputs_to_json(self.outputs)}

    @classmethod
    def from_dict(cls, data: dict) -> "GradingPayload":
        return cls(outputs=_outputs_from_json(data.get("outputs")))


TaskPayload = Union[ScalePayload, CartonPayload, MachinePayload, TicketPayload, GradingPayload]

PAYLOAD_TYPES: dict[PayloadKind, type] = {
    PayloadKind.SCALES: ScalePayload,
    PayloadKind.CARTONS: CartonPayload,
    PayloadKind.MACHINE: MachinePayload,
    PayloadKind.TICKET: TicketPayload,
    PayloadKind.GRADING: GradingPayload,
}

PAYLOAD_FOR_TASK: dict[TaskType, PayloadKind] = {
    TaskType.STRIPPING: PayloadKind.SCALES,
    TaskType.BAILING_STICKS: PayloadKind.CARTONS,
    TaskType.BAILING_LAMINA: PayloadKind.CARTONS,
    TaskType.MACHINE: PayloadKind.MACHINE,
    TaskType.TICKET_BASED_WORK: PayloadKind.TICKET,
    TaskType.GRADING: PayloadKind.GRADING,
}

PAYLOAD_COLUMNS = ("scaleentries", "cartons", "massinputs", "outputentries", "dutyname")


def _kind(value) -> PayloadKind:
    try:
        return PayloadKind(value)
    except ValueError:
        raise ValidationError(f"Unknown payload kind: {value!r}")


def payload_from_dict(data: Optional[dict]) -> Optional[TaskPayload]:
    if not data:
        return None
    if not isinstance(data, dict):
        raise ValidationError("Payload must be an object")
    payload_type = PAYLOAD_TYPES[_kind(data.get("kind"))]
    try:
        return payload_type.from_dict(data)
    except (TypeError, ValueError, AttributeError) as exc:
        raise ValidationError(f"Malformed {payload_type.kind.value} payload: {exc}") from exc


def payload_from_columns(kind: Optional[str], row: dict) -> Optional[TaskPayload]:
    if not kind:
        return None
    return PAYLOAD_TYPES[_kind(kind)].from_columns(row)


def payload_to_columns(payload: Optional[TaskPayload]) -> dict:
    columns: dict[str, Any] = {name: None for name in PAYLOAD_COLUMNS}
    if payload is not None:
        columns.update(payload.to_columns())
    return columns


@dataclass(frozen=True)
class DerivedTotals:
    total_sticks: Optional[float] = None
    output_mass: Optional[float] = None


def derive_totals(payload: Optional[TaskPayload]) -> DerivedTotals:
    """Aggregate fields computed from a payload; None where a variant has nothing to sum."""
    if payload is None:
        return DerivedTotals()
    if isinstance(payload, ScalePayload):
        sticks = [r.sticks for r in payload.readings if r.sticks is not None]
        outs = [r.out_value for r in payload.readings if r.out_value is not None]
        return DerivedTotals(
            total_sticks=sum(sticks) if sticks else None,
            output_mass=sum(outs) if outs else None,
        )
    if isinstance(payload, CartonPayload):
        return DerivedTotals(output_mass=sum(c.mass for c in payload.cartons))
    if isinstance(payload, MachinePayload):
        return DerivedTotals(
            total_sticks=payload.total_for(OutputCategory.STICKS),
            output_mass=payload.total_for(OutputCategory.OUTPUT),
        )
    if isinstance(payload, TicketPayload):
        return DerivedTotals()
    if isinstance(payload, GradingPayload):
        return DerivedTotals(output_mass=sum(o.mass for o in payload.outputs))
    raise TypeError(f"Unhandled payload type: {type(payload).__name__}")
