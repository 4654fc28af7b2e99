from __future__ import annotations

import logging
from pathlib import Path

from pinout import sexpr
from pinout.exceptions import MissingNetError, NetlistBuildError, NetlistError, StructureError
from pinout.models import (
    AssociatedComponent,
    Component,
    LibPartKey,
    NetClass,
    Netlist,
    PinDefinition,
    PinNode,
    PinType,
    Sheet,
)
from pinout.sexpr import SExpr

logger = logging.getLogger(__name__)

# Leading fields of every (net ...) record; pin references follow them.
NET_METADATA_FIELDS = ("code", "name")


def parse_netlist(path: str | Path) -> Netlist:
    return build_netlist(sexpr.load(path))


def build_netlist(document: SExpr) -> Netlist:
    """Join the nets, libparts and components sections of a netlist.

    Any failure aborts the whole build with a ``NetlistBuildError`` naming
    the phase; the underlying error is kept as its cause.
    """
    try:
        sheet = _extract_sheet(document)
    except NetlistError as exc:
        raise NetlistBuildError("sheet", "Failed to read the sheet title block") from exc

    try:
        net_table = build_net_table(document["nets"])
    except NetlistError as exc:
        raise NetlistBuildError("nets", "Failed to build the net table") from exc

    try:
        libpart_table = build_libpart_table(document["libparts"])
    except NetlistError as exc:
        raise NetlistBuildError("libparts", "Failed to build the library part table") from exc

    try:
        components = correlate_components(document["components"], net_table, libpart_table)
    except NetlistError as exc:
        raise NetlistBuildError("components", "Failed to correlate components") from exc

    logger.debug(
        "Built netlist with %d nodes, %d library parts, %d components",
        len(net_table),
        len(libpart_table),
        len(components),
    )
    return Netlist(sheet=sheet, components=components)


def _extract_sheet(document: SExpr) -> Sheet:
    title_block = document["design"]["sheet"]["title_block"]
    return Sheet(
        title=title_block["title"].text(),
        company=title_block["company"].text(),
        rev=title_block["rev"].text(),
    )


def build_net_table(nets: SExpr) -> dict[PinNode, NetClass]:
    table: dict[PinNode, NetClass] = {}
    for record in nets.list_iter():
        if record.tag != "net":
            continue
        fields = record.tail().list_iter()
        _check_net_metadata(record, fields)
        net = NetClass.classify(record["name"].text())
        for entry in fields[len(NET_METADATA_FIELDS):]:
            if entry.tag != "node":
                continue
            node = PinNode(ref=entry.require("ref").text(), pin=entry.require("pin").text())
            table[node] = net
    return table


def _check_net_metadata(record: SExpr, fields: list[SExpr]) -> None:
    tags = tuple(f.tag for f in fields[: len(NET_METADATA_FIELDS)])
    if tags != NET_METADATA_FIELDS:
        raise StructureError(
            f"Net record `{record.path}` must start with {NET_METADATA_FIELDS}, found {tags}"
        )


def build_libpart_table(libparts: SExpr) -> dict[LibPartKey, tuple[PinDefinition, ...]]:
    table: dict[LibPartKey, tuple[PinDefinition, ...]] = {}
    for record in libparts.list_iter():
        if record.tag != "libpart":
            continue
        pins = _parse_pins(record["pins"])
        if not pins:
            continue
        lib = record.require("lib").text()
        key = LibPartKey(lib=lib, part=record.require("part").text())
        table[key] = pins
        for alias in record["aliases"].all("alias"):
            table[LibPartKey(lib=lib, part=alias.text())] = pins
    return table


def _parse_pins(pins: SExpr) -> tuple[PinDefinition, ...]:
    return tuple(
        PinDefinition(
            num=pin.require("num").text(),
            name=pin["name"].text(),
            type=PinType.parse(pin.require("type").text()),
        )
        for pin in pins.all("pin")
    )


def correlate_components(
    components: SExpr,
    net_table: dict[PinNode, NetClass],
    libpart_table: dict[LibPartKey, tuple[PinDefinition, ...]],
) -> dict[str, AssociatedComponent]:
    result: dict[str, AssociatedComponent] = {}
    for record in components.list_iter():
        if record.tag != "comp":
            continue
        component = _parse_component(record)
        pin_defs = libpart_table.get(component.libpart)
        if pin_defs is None:
            logger.debug(
                "Component %s uses unknown library part %s, no pins associated",
                component.reference,
                component.libpart,
            )
            pin_defs = ()

        pins = []
        for pin in pin_defs:
            node = PinNode(ref=component.reference, pin=pin.num)
            try:
                pins.append((pin, net_table[node]))
            except KeyError:
                raise MissingNetError(node) from None

        result[component.reference.upper()] = AssociatedComponent(component, tuple(pins))
    return result


def _parse_component(record: SExpr) -> Component:
    libsource = record.require("libsource")
    return Component(
        reference=record.require("ref").text(),
        libpart=LibPartKey(
            lib=libsource.require("lib").text(),
            part=libsource.require("part").text(),
        ),
        value=record["value"].text_join(),
        description=libsource["description"].text_join(),
        footprint=record["footprint"].text(),
        datasheet=record["datasheet"].text(),
    )
