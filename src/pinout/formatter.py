from __future__ import annotations

import logging
import re
from datetime import date as Date
from enum import Enum
from typing import Callable

from pinout.exceptions import GenerationError
from pinout.models import AssociatedComponent, NetClass, PinDefinition, Sheet

logger = logging.getLogger(__name__)

GPIO_RE = re.compile(r"GPIO([0-9]+)(?:_ADC([0-9]+))?")
_IDENT_INVALID_RE = re.compile(r"[^A-Za-z0-9_]")


class Language(Enum):
    C = "c"
    CPP = "cpp"
    RUST = "rust"

    @classmethod
    def parse(cls, text: str) -> Language:
        text = text.lower()
        if text == "c++":
            return cls.CPP
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"unknown language '{text}'") from None

    def __str__(self) -> str:
        return {"c": "C", "cpp": "C++", "rust": "Rust"}[self.value]


HeaderGenerator = Callable[..., str]


def get_generator(language: Language) -> HeaderGenerator:
    if language in (Language.C, Language.CPP):
        return format_c_header
    raise GenerationError(f"No {language} code generator is implemented")


def format_c_header(sheet: Sheet, component: AssociatedComponent, date: Date | None = None) -> str:
    date = date or Date.today()
    lines = [
        "#pragma once",
        "",
        f"// Generated {date.isoformat()} by pinout",
        f"// - Source: `{sheet.title}` {sheet.rev}",
        f"// - Author: {sheet.company}",
        "",
        "",
        f"// ----------Begin component `{component.reference}`---------",
        f"// - Library: {component.libpart.lib}",
        f"// - Part: {component.libpart.part}",
        f"// - Value: {component.value}",
        f"// - Description: {component.description}",
        f"// - Footprint: {component.footprint}",
        f"// - Datasheet: {component.datasheet}",
        f"#pragma region {component.reference}_PINOUT",
    ]
    for pin, net in component.pins:
        lines.extend(_format_pin(pin, net, component.reference))
    lines.append(f"#pragma endregion {component.reference}_PINOUT")
    return "\n".join(lines) + "\n"


def _format_pin(pin: PinDefinition, net: NetClass, reference: str) -> list[str]:
    if net.is_generated:
        logger.info("%s: skipping generated net %s on pin #%s", reference, net.name, pin.num)
        return ["", f"// Skipping generated net {net.name} on pin #{pin.num}"]

    match = GPIO_RE.search(pin.name)
    if match is None:
        logger.info("%s: skipping non gpio pin #%s %s", reference, pin.num, pin.name)
        return ["", f"// Skipping non gpio pin #{pin.num} {pin.name}"]

    gpio_num = int(match.group(1))
    adc_num = int(match.group(2)) if match.group(2) is not None else None
    name = c_identifier(net.identifier)
    if not name:
        raise GenerationError(f"Net on pin #{pin.num} of {reference} has an empty name")

    lines = [
        "",
        "/// Raspberry Pi Pico GPIO Pin",
        f"/// Name: {pin.name}",
        f"/// Number: {pin.num}",
        f"/// Type: {pin.type}",
        f"/// ADC Input: {'NO' if adc_num is None else adc_num}",
        _constant(name, gpio_num),
    ]
    if adc_num is not None:
        lines.append(_constant(f"{name}_ADC", adc_num))
    return lines


def _constant(name: str, value: int) -> str:
    return f"static const unsigned int {name} = {value};"


def c_identifier(name: str) -> str:
    ident = _IDENT_INVALID_RE.sub("_", name)
    if ident[:1].isdigit():
        ident = "_" + ident
    return ident
