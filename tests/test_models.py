import pytest

from pinout.exceptions import UnknownPinTypeError
from pinout.models import (
    AssociatedComponent,
    Component,
    LibPartKey,
    NetClass,
    NetKind,
    Netlist,
    PinDefinition,
    PinNode,
    PinType,
    Sheet,
)


@pytest.mark.parametrize("raw", ["Net-(D1-Pad2)", "Net-(U1-PadA1)", "Net-("])
def test_classify_generated(raw):
    net = NetClass.classify(raw)
    assert net.kind is NetKind.GENERATED
    assert net.name == raw
    assert net.is_generated


@pytest.mark.parametrize("raw, name", [("/RESET", "RESET"), ("/", ""), ("/sub/SDA", "sub/SDA")])
def test_classify_label_strips_slash(raw, name):
    net = NetClass.classify(raw)
    assert net.kind is NetKind.LABEL
    assert net.name == name
    assert net.identifier == name


@pytest.mark.parametrize("raw", ["GND", "+3V3", "", "Net-", "net-(U1-Pad1)", "RESET/"])
def test_classify_custom(raw):
    net = NetClass.classify(raw)
    assert net.kind is NetKind.CUSTOM
    assert net.name == raw
    assert not net.is_generated


@pytest.mark.parametrize(
    "text, expected",
    [
        ("input", PinType.INPUT),
        ("Output", PinType.OUTPUT),
        ("BiDi", PinType.BIDIRECTIONAL),
        ("power_in", PinType.POWER_IN),
        ("POWER_OUT", PinType.POWER_OUT),
        ("passive", PinType.PASSIVE),
        ("NotConnected", PinType.NOT_CONNECTED),
        ("3state", PinType.TRI_STATE),
    ],
)
def test_pin_type_parse(text, expected):
    assert PinType.parse(text) is expected


def test_pin_type_unknown_is_fatal():
    with pytest.raises(UnknownPinTypeError) as excinfo:
        PinType.parse("weird")
    assert excinfo.value.value == "weird"


def test_pin_type_display():
    assert str(PinType.POWER_IN) == "PowerIn"
    assert str(PinType.TRI_STATE) == "TriState"
    assert str(PinType.INPUT) == "Input"
    assert str(PinType.BIDIRECTIONAL) == "BiDirectional"
    assert str(PinType.NOT_CONNECTED) == "NotConnected"
    assert str(PinType.POWER_OUT) == "PowerOut"


def test_keys_compare_structurally():
    assert LibPartKey("MCU", "CHIP") == LibPartKey("MCU", "CHIP")
    assert LibPartKey("A", "Z") < LibPartKey("B", "A")
    assert PinNode("U1", "1") == PinNode("U1", "1")
    assert len({PinNode("U1", "1"), PinNode("U1", "1"), PinNode("U1", "2")}) == 2


def test_associated_component_passes_through_fields():
    comp = Component(
        reference="U1",
        libpart=LibPartKey("MCU", "CHIP"),
        value="RP2040",
        description="Microcontroller",
        footprint="QFN-56",
        datasheet="~",
    )
    pin = PinDefinition("1", "GPIO0", PinType.INPUT)
    assoc = AssociatedComponent(comp, ((pin, NetClass.classify("/RESET")),))
    assert assoc.reference == "U1"
    assert assoc.libpart == LibPartKey("MCU", "CHIP")
    assert assoc.value == "RP2040"
    assert assoc.footprint == "QFN-56"
    assert assoc.pins[0][1].name == "RESET"


def test_netlist_find_component_case_insensitive():
    comp = AssociatedComponent(Component("U1", LibPartKey("MCU", "CHIP")))
    netlist = Netlist(sheet=Sheet(), components={"U1": comp})
    assert netlist.find_component("u1") is comp
    assert netlist.find_component("U1") is comp
    assert netlist.find_component("U2") is None


def test_sheet_defaults_to_empty():
    sheet = Sheet()
    assert (sheet.title, sheet.company, sheet.rev) == ("", "", "")
