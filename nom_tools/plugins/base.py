"""
Indicator plugin protocol.

A plugin is what a charting host drives bar by bar:

    init()                          once, after props are resolved
    map(bar, index, history)        per bar, returns the bar's output
    filter(output, index) -> bool   per bar, False hides the output

plus optional plotters, functions (plugin, history) -> shapes that turn
the mapped history into geometry for the host to draw.

Each plugin class carries a PluginMetadata describing its name,
parameters and plots.
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..indicators.types import Bar

ParamKind = str  # "period" | "number" | "bool" | "enum" | "color"

PARAM_KINDS = ("period", "number", "bool", "enum", "color")


@dataclass(frozen=True)
class ParamSpec:
    """
    Declaration of one plugin parameter.

    Attributes:
        name: Parameter key as it appears in props (e.g., "band1StdDev")
        kind: One of PARAM_KINDS
        default: Value used when the caller does not set one
        step: UI step for numeric params
        choices: Allowed values with display labels (enum params)
    """
    name: str
    kind: ParamKind
    default: Any
    step: float | None = None
    choices: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.kind not in PARAM_KINDS:
            raise ValueError(
                f"ParamSpec '{self.name}': kind must be one of {list(PARAM_KINDS)}, got '{self.kind}'"
            )

    def validate(self, value: Any) -> Any:
        """Return value coerced to this param's type, or raise ValueError."""
        if self.kind == "period":
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
                raise ValueError(f"Param '{self.name}' must be a positive integer, got {value!r}")
            return int(value)
        if self.kind == "number":
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"Param '{self.name}' must be a number, got {value!r}")
            return float(value)
        if self.kind == "bool":
            if not isinstance(value, bool):
                raise ValueError(f"Param '{self.name}' must be true or false, got {value!r}")
            return value
        if self.kind == "enum":
            if value not in self.choices:
                raise ValueError(
                    f"Param '{self.name}' must be one of {list(self.choices)}, got {value!r}"
                )
            return value
        if not isinstance(value, str):
            raise ValueError(f"Param '{self.name}' must be a color string, got {value!r}")
        return value

    # Builders mirroring the host's parameter helpers

    @classmethod
    def period(cls, name: str, default: int) -> ParamSpec:
        return cls(name, "period", default)

    @classmethod
    def number(cls, name: str, default: float, step: float | None = None) -> ParamSpec:
        return cls(name, "number", default, step=step)

    @classmethod
    def boolean(cls, name: str, default: bool) -> ParamSpec:
        return cls(name, "bool", default)

    @classmethod
    def enum(cls, name: str, choices: dict[str, str], default: str) -> ParamSpec:
        return cls(name, "enum", default, choices=dict(choices))

    @classmethod
    def color(cls, name: str, default: str) -> ParamSpec:
        return cls(name, "color", default)


@dataclass(frozen=True)
class PluginMetadata:
    """Fixed registration metadata of a plugin."""
    name: str
    description: str
    params: tuple[ParamSpec, ...] = ()
    plots: dict[str, str] = field(default_factory=dict)  # output key -> title
    tags: tuple[str, ...] = ("NOM Tools",)
    input_type: str = "bars"

    def defaults(self) -> dict[str, Any]:
        return {p.name: p.default for p in self.params}

    def resolve_props(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Merge overrides into the defaults and validate every value.

        Raises ValueError on unknown keys or invalid values.
        """
        overrides = dict(overrides or {})
        specs = {p.name: p for p in self.params}
        unknown = set(overrides) - set(specs)
        if unknown:
            raise ValueError(
                f"Unknown params for '{self.name}': {sorted(unknown)}. "
                f"Valid: {sorted(specs)}"
            )
        props = self.defaults()
        props.update(overrides)
        return {key: specs[key].validate(value) for key, value in props.items()}


class History:
    """
    Bars fed to a plugin and the outputs mapped from them.

    The bar list may be known in full up front (a loaded chart); outputs
    are appended one per processed bar, None where filtered out.
    """

    def __init__(self, bars: list[Bar] | None = None):
        self.bars: list[Bar] = list(bars or [])
        self.data: list[Any] = []

    def append(self, output: Any) -> None:
        self.data.append(output)

    def get(self, index: int) -> Any:
        return self.data[index]

    def bar(self, index: int) -> Bar:
        return self.bars[index]

    def last(self) -> Any:
        return self.data[-1] if self.data else None

    def __len__(self) -> int:
        return len(self.bars)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)


Plotter = Callable[["IndicatorPlugin", History], list[Any]]


class IndicatorPlugin(ABC):
    """
    Base class for host-driven indicator plugins.

    Subclasses set `metadata` and implement map(); init(), filter() and
    `plotters` are optional.
    """

    metadata: ClassVar[PluginMetadata]
    plotters: ClassVar[tuple[Plotter, ...]] = ()

    def __init__(self, props: dict[str, Any] | None = None):
        self.props = self.metadata.resolve_props(props)

    def init(self) -> None:
        """Set up per-instance state. Called once before the first bar."""

    @abstractmethod
    def map(self, bar: Bar, index: int, history: History) -> Any:
        """Compute this bar's output."""
        ...

    def filter(self, output: Any, index: int) -> bool:
        """Return False to hide the output of bar `index`."""
        return True

    def plot(self, history: History) -> list[Any]:
        """Run every plotter over the history and concatenate the shapes."""
        shapes: list[Any] = []
        for plotter in self.plotters:
            shapes.extend(plotter(self, history))
        return shapes
