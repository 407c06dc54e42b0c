"""Name -> value transformer registry."""

import logging
from typing import Any, Callable, Dict, Iterator, MutableMapping

logger = logging.getLogger(__name__)

ValueTransformer = Callable[[Any], Any]


class TransformerRegistry(MutableMapping[str, ValueTransformer]):
    """
    Transformers applied when values are read through the public accessors.

    Values are always stored raw; transformation happens lazily on read, so a
    transformer registered for a name applies uniformly to every later read
    until the name is removed.
    """

    def __init__(self):
        self._transformers: Dict[str, ValueTransformer] = {}

    def __getitem__(self, name: str) -> ValueTransformer:
        return self._transformers[name]

    def __setitem__(self, name: str, transformer: ValueTransformer) -> None:
        if not callable(transformer):
            raise TypeError(f"Transformer for '{name}' must be callable, got {type(transformer).__name__}")
        self._transformers[name] = transformer
        logger.debug(f"[TRANSFORMERS] Registered transformer for '{name}'")

    def __delitem__(self, name: str) -> None:
        del self._transformers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._transformers)

    def __len__(self) -> int:
        return len(self._transformers)

    def transform(self, name: str, value: Any) -> Any:
        """Apply the transformer for name, or return value unchanged."""
        transformer = self._transformers.get(name)
        return transformer(value) if transformer is not None else value

    def transform_all(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """
        Transform a whole value map for the public snapshots.

        A transformer returning None leaves the raw value in the snapshot;
        transform() itself has no such fallback.
        """
        transformed = {}
        for name, value in values.items():
            result = self.transform(name, value)
            transformed[name] = value if result is None else result
        return transformed
