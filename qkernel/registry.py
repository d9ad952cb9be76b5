"""
Gate registry: label -> factory lookup.

A registry is built once, explicitly, and is read-only afterwards. The
``Applier`` owns one and resolves every operation label through it.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, List, Sequence, Type

from .errors import UnknownGateError
from .variants import ALL_GATES, Gate

GateFactory = Callable[[Sequence[float]], Gate]


class GateRegistry(Mapping):
    """
    Immutable mapping from gate label to gate factory.

    Example:
        >>> registry = GateRegistry.default()
        >>> registry.create("RX", [0.5]).num_wires
        1
    """

    def __init__(self, gate_classes: Iterable[Type[Gate]]):
        table = {}
        for cls in gate_classes:
            if cls.label in table:
                raise ValueError(f"duplicate gate label {cls.label!r}")
            table[cls.label] = cls.create
        self._table = MappingProxyType(table)

    @classmethod
    def default(cls) -> "GateRegistry":
        """Registry covering every built-in gate kind."""
        return cls(ALL_GATES)

    def __getitem__(self, label: str) -> GateFactory:
        return self._table[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, label) -> bool:
        try:
            return label in self._table
        except TypeError:
            return False

    @property
    def labels(self) -> List[str]:
        return sorted(self._table)

    def create(self, label: str, params: Sequence[float] = ()) -> Gate:
        """
        Construct the gate named ``label`` from ``params``.

        Raises:
            UnknownGateError: if the label is not registered
            InvalidArityError: if the parameter count is wrong for the kind
        """
        try:
            factory = self._table[label]
        except (KeyError, TypeError):
            raise UnknownGateError(label) from None
        return factory(params)
