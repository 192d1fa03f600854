from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from ..settings import ControlsSettings
from .actions import MazeAction

logger = logging.getLogger(__name__)


class KeyMap:
    """Resolves keys to maze actions using the ``controls`` settings.

    Bindings are key names ("W", "UP", "SPACE"), matched case-insensitively.
    The arcade window receives integer key codes instead; ``learn_codes``
    looks every bound name up on ``arcade.key`` so codes resolve too.
    """

    def __init__(self, controls: Optional[ControlsSettings] = None) -> None:
        controls = controls or ControlsSettings()
        self._by_name: Dict[str, MazeAction] = {}
        self._by_code: Dict[int, MazeAction] = {}
        for action in MazeAction:
            for key in getattr(controls, action.value):
                self._by_name[key.strip().upper()] = action

    def learn_codes(self, key_module: Any) -> int:
        """Register the integer code of every bound key name found on ``key_module``.

        Returns the number of codes learned; names the module lacks are logged and skipped.
        """
        for name, action in self._by_name.items():
            code = getattr(key_module, name, None)
            if code is None:
                logger.warning("Key %r has no code in %s; binding ignored", name, getattr(key_module, "__name__", key_module))
                continue
            self._by_code[code] = action
        return len(self._by_code)

    def action_for(self, key: Union[int, str]) -> Optional[MazeAction]:
        if isinstance(key, int):
            return self._by_code.get(key)
        return self._by_name.get(key.strip().upper())


__all__ = ["KeyMap"]
