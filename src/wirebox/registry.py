"""The singleton registry shared by the resolution engines.

Names are only ever added: once present, an entry is never replaced or
removed. After :meth:`SingletonRegistry.freeze` the registry rejects any
further writes and is safe to read from several threads.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from .descriptors import BeanEntry
from .exceptions import ContainerStateError

_logger = logging.getLogger(__name__)


class SingletonRegistry:
    def __init__(self) -> None:
        self._entries: Dict[str, BeanEntry] = {}
        self._frozen = False

    def add(self, entry: BeanEntry) -> bool:
        """Insert *entry* unless its name is already taken.

        Returns:
            ``True`` if the entry was stored, ``False`` if the name was
            already present (the existing entry is kept).

        Raises:
            ContainerStateError: If the registry is frozen.
        """
        if self._frozen:
            raise ContainerStateError(f"Registry is frozen; cannot add bean '{entry.name}'")
        if entry.name in self._entries:
            return False
        self._entries[entry.name] = entry
        _logger.debug("Registered bean '%s' (%s)", entry.name, entry.origin)
        return True

    def get(self, name: str) -> Optional[BeanEntry]:
        return self._entries.get(name)

    def entries(self) -> List[BeanEntry]:
        return list(self._entries.values())

    def names(self) -> List[str]:
        return list(self._entries)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def view(self) -> Mapping[str, BeanEntry]:
        return MappingProxyType(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[BeanEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)
