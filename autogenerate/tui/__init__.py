from autogenerate.tui.renderers import GeneratorConsoleUI

__all__ = ["GeneratorConsoleUI"]
