from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pinout.exceptions import UnknownPinTypeError

GENERATED_NET_PREFIX = "Net-("
LABEL_NET_PREFIX = "/"


@dataclass(frozen=True)
class Sheet:
    title: str = ""
    company: str = ""
    rev: str = ""


class NetKind(Enum):
    CUSTOM = "custom"
    GENERATED = "generated"
    LABEL = "label"


@dataclass(frozen=True)
class NetClass:
    kind: NetKind
    name: str

    @classmethod
    def classify(cls, raw: str) -> NetClass:
        """Classify a raw net name.

        Tool-assigned names (``Net-(...)``) are generated, names with a
        leading ``/`` are net labels and have the ``/`` stripped, everything
        else is a custom name.
        """
        if raw.startswith(GENERATED_NET_PREFIX):
            return cls(NetKind.GENERATED, raw)
        if raw.startswith(LABEL_NET_PREFIX):
            return cls(NetKind.LABEL, raw[len(LABEL_NET_PREFIX):])
        return cls(NetKind.CUSTOM, raw)

    @property
    def is_generated(self) -> bool:
        return self.kind is NetKind.GENERATED

    @property
    def identifier(self) -> str:
        return self.name


@dataclass(frozen=True, order=True)
class PinNode:
    ref: str
    pin: str


@dataclass(frozen=True, order=True)
class LibPartKey:
    lib: str
    part: str

    def __str__(self) -> str:
        return f"{self.lib}:{self.part}"


class PinType(Enum):
    INPUT = "input"
    OUTPUT = "output"
    BIDIRECTIONAL = "bidi"
    POWER_IN = "power_in"
    POWER_OUT = "power_out"
    PASSIVE = "passive"
    NOT_CONNECTED = "notconnected"
    TRI_STATE = "3state"

    @classmethod
    def parse(cls, text: str) -> PinType:
        try:
            return cls(text.lower())
        except ValueError:
            raise UnknownPinTypeError(text) from None

    def __str__(self) -> str:
        return _PIN_TYPE_NAMES[self]


_PIN_TYPE_NAMES = {
    PinType.INPUT: "Input",
    PinType.OUTPUT: "Output",
    PinType.BIDIRECTIONAL: "BiDirectional",
    PinType.POWER_IN: "PowerIn",
    PinType.POWER_OUT: "PowerOut",
    PinType.PASSIVE: "Passive",
    PinType.NOT_CONNECTED: "NotConnected",
    PinType.TRI_STATE: "TriState",
}


@dataclass(frozen=True)
class PinDefinition:
    num: str
    name: str
    type: PinType


@dataclass(frozen=True)
class Component:
    reference: str
    libpart: LibPartKey
    value: str = ""
    description: str = ""
    footprint: str = ""
    datasheet: str = ""


@dataclass(frozen=True)
class AssociatedComponent:
    component: Component
    pins: tuple[tuple[PinDefinition, NetClass], ...] = ()

    @property
    def reference(self) -> str:
        return self.component.reference

    @property
    def libpart(self) -> LibPartKey:
        return self.component.libpart

    @property
    def value(self) -> str:
        return self.component.value

    @property
    def description(self) -> str:
        return self.component.description

    @property
    def footprint(self) -> str:
        return self.component.footprint

    @property
    def datasheet(self) -> str:
        return self.component.datasheet


@dataclass
class Netlist:
    sheet: Sheet
    components: dict[str, AssociatedComponent] = field(default_factory=dict)

    def find_component(self, reference: str) -> AssociatedComponent | None:
        return self.components.get(reference.upper())
