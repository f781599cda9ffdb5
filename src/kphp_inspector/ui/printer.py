"""
Formatted output of artifacts: info and source of a function, info of a class.
A simple module with colors, alignment and console.print().
"""

import re
from typing import List, Optional

from rich.console import Console
from rich.text import Text

from ..models.artifacts import ClassArtifact, FunctionArtifact, VarDecl
from .console import console as default_console


NAME_WIDTH = 24
SECTION_RULE = "======================== "

CLASS_INSTANCE_RE = re.compile(r'class_instance<C(\$.+?)>')
DIM_COMMENT_RE = re.compile(r'^//(crc|source|\d+:).*$')


def pretty_cpp_type(cpp_type: str) -> str:
    """
    Shorten a C++ type for reading.

    Not "array< class_instance<C$VK$API$Builders$Station> >" but
    "array< \\VK\\API\\Builders\\Station >".
    """
    s = CLASS_INSTANCE_RE.sub(lambda m: m.group(1).replace('$', '\\'), cpp_type)
    return s.replace('int64_t', 'int').replace('std::tuple', 'tuple')


def _type_text(cpp_type: str) -> Text:
    s = pretty_cpp_type(cpp_type)
    # "var" is the mixed type; highlight it, it is usually worth fixing
    return Text(s, style="type.var" if s == 'var' else "type")


def _section(title: str) -> Text:
    text = Text(SECTION_RULE)
    text.append(title, style="header")
    return text


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" + ("" if count == 1 else "s")


def _var_lines(variables: List[VarDecl]) -> List[Text]:
    lines = []
    for var in variables:
        line = Text(var.name.rjust(NAME_WIDTH) + " ", style="label")
        line.append_text(_type_text(var.cpp_type))
        lines.append(line)
    return lines


def print_function_info(f: FunctionArtifact, console: Optional[Console] = None) -> None:
    console = console or default_console

    console.print()
    console.print(_section(f"{f.name}()"))
    console.print(Text(f"Source file: {f.path}"))
    complexity = Text("Complexity:  ")
    complexity.append(f"{f.line_count} lines", style="note")
    console.print(complexity)
    return_line = Text("@return      ", style="label")
    return_line.append_text(_type_text(f.return_type))
    console.print(return_line)
    if f.was_inlined:
        console.print(Text("Was inlined", style="note"))
    if f.is_resumable:
        console.print(Text("Is resumable", style="note"))

    console.print()
    console.print(_section(_plural(len(f.parameters), "argument")))
    for line in _var_lines(f.parameters):
        console.print(line)

    console.print()
    console.print(_section(_plural(len(f.local_vars), "local var")))
    for line in _var_lines(f.local_vars):
        console.print(line)
    console.print()


def print_function_source(f: FunctionArtifact, console: Optional[Console] = None) -> None:
    """Print the generated source, dimming crc, source and PHP line comments."""
    console = console or default_console

    console.print()
    console.print(_section(f"{f.name}()"))
    console.print()
    for line in f.source.strip().split("\n"):
        console.print(Text(line, style="dim" if DIM_COMMENT_RE.match(line) else ""))
    console.print()


def print_class_info(c: ClassArtifact, console: Optional[Console] = None) -> None:
    console = console or default_console

    console.print()
    console.print(_section(c.name))
    console.print(Text(f"Source file: {c.path}"))

    console.print()
    console.print(_section(_plural(len(c.instance_vars), "instance var")))
    for line in _var_lines(c.instance_vars):
        console.print(line)
    console.print()
