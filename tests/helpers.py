import importlib.util
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType


def load_script_module(script: Path, module_name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(module_name, script)
    if spec is None or spec.loader is None:
        raise RuntimeError(f"Failed to load script module from {script}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class ScriptedSource:
    """Random source replaying fixed draws, reduced modulo the bound."""

    def __init__(self, draws: Iterable[int]) -> None:
        self._draws = list(draws)
        self.bounds: list[int] = []

    def next_bounded(self, bound: int) -> int:
        self.bounds.append(bound)
        return self._draws.pop(0) % bound
