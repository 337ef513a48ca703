from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from autogenerate.emitter import GeneratedUnit
from autogenerate.patterns import Pattern, PatternMatch
from autogenerate.rules import RuleSet
from autogenerate.tui.enums import UIStyle
from autogenerate.tui.tables import MatchTable, RulesTable, UnitTable


def _section(title: str, body, style: str = UIStyle.BLUE.value) -> Panel:
    return Panel(body, title=title, border_style=style, padding=(0, 1))


class GeneratorConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_matches(
        self, pattern: Pattern, results: list[tuple[str, PatternMatch | None]]
    ) -> None:
        self.console.print(_section("pattern", MatchTable.summary_block(pattern)))
        self.console.print(
            _section("names", MatchTable.results_table(results), style=UIStyle.CYAN.value)
        )

    def render_rules(
        self, title: str, rules: RuleSet, match_only: tuple[Pattern, ...] | None
    ) -> None:
        self.console.print(_section(title, RulesTable.allow_list_block(match_only)))
        if not len(rules):
            self.console.print(
                _section("rules", "No rules declared.", style=UIStyle.DIM.value)
            )
            return
        self.console.print(
            _section("rules", RulesTable.rules_table(rules), style=UIStyle.CYAN.value)
        )

    def render_unit(self, unit: GeneratedUnit, generator: str) -> None:
        self.console.print(_section("generated", UnitTable.summary_block(unit, generator)))
        self.console.print(
            _section(
                "source",
                Syntax(unit.source, "python", line_numbers=True),
                style=UIStyle.GREEN.value,
            )
        )

    def render_not_found(self, name: str) -> None:
        self.console.print(
            _section(
                "not found",
                Text(f"No rule generates {name}."),
                style=UIStyle.YELLOW.value,
            )
        )
