from rich.table import Column, Table
from rich.text import Text

from autogenerate.emitter import GeneratedUnit
from autogenerate.patterns import Pattern, PatternMatch
from autogenerate.rules import RuleSet
from autogenerate.tui.enums import MATCH_STATUS_STYLE, MatchStatus, UIStyle


def _styled(value: str, style: str) -> str:
    return f"[{style}]{value}[/{style}]"


class MatchTable:
    @staticmethod
    def summary_block(pattern: Pattern):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Pattern", Text(pattern.source))
        table.add_row("Delimiter", Text(pattern.delimiter))
        table.add_row("Regex", Text(pattern.regex.pattern))
        return table

    @staticmethod
    def results_table(results: list[tuple[str, PatternMatch | None]]) -> Table:
        table = Table(
            Column(header="Name", overflow="fold"),
            Column(header="Status", width=8),
            Column(header="Captures", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for name, match in results:
            status = MatchStatus.MATCH if match is not None else MatchStatus.MISS
            captures = ""
            if match is not None:
                captures = ", ".join(
                    f"{index}={value!r}"
                    for index, value in enumerate(match.captures, start=1)
                )
            table.add_row(
                Text(name), _styled(status.value, MATCH_STATUS_STYLE[status]), Text(captures)
            )
        return table


class RulesTable:
    @staticmethod
    def rules_table(rules: RuleSet) -> Table:
        table = Table(
            Column(header="#", width=3),
            Column(header="Pattern", overflow="fold"),
            Column(header="Kind", width=6),
            Column(header="Generator", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for index, rule in enumerate(rules, start=1):
            kind = "glob" if rule.pattern.is_glob else "regex"
            table.add_row(
                str(index), Text(rule.pattern.source), kind, Text(rule.display_name)
            )
        return table

    @staticmethod
    def allow_list_block(match_only: tuple[Pattern, ...] | None):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        if match_only is None:
            table.add_row("match_only", _styled("any name", UIStyle.DIM.value))
        else:
            sources = [pattern.source for pattern in match_only] or ["(nothing)"]
            table.add_row("match_only", Text("\n".join(sources)))
        return table


class UnitTable:
    @staticmethod
    def summary_block(unit: GeneratedUnit, generator: str):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Module", Text(unit.name))
        table.add_row("Generator", Text(generator))
        table.add_row("Origin", Text(unit.origin))
        definitions = ", ".join(sorted(unit.definitions)) or "none"
        table.add_row("Definitions", Text(definitions))
        return table
