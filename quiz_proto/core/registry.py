"""
core/registry.py

Kinds declared by name.

Declarations refer to their parent by name, so they can arrive in any
order (or from a YAML file) and be linked afterwards. This is also where
a loop can sneak in: "a extends b, b extends a". The registry refuses it.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union
import logging

import yaml

from .behavior import BehaviorSet, Operation
from .errors import CyclicExtension, MissingOperation, UnknownBehaviorSet

logger = logging.getLogger(__name__)


class BehaviorRegistry:
    """
    Name -> BehaviorSet, built once and shared.

    Registered sets are immutable; re-registering a name replaces the
    registry entry but never touches entities already linked to the old set.
    """

    def __init__(self):
        self._sets: Dict[str, BehaviorSet] = {}

    def register(self, behaviors: BehaviorSet) -> BehaviorSet:
        """Register a built set under its own name."""
        if behaviors.name in self._sets:
            logger.warning(f"Behavior set '{behaviors.name}' already registered, replacing")
        self._sets[behaviors.name] = behaviors
        logger.debug(f"Registered behavior set: {behaviors.name}")
        return behaviors

    def get(self, name: str) -> BehaviorSet:
        try:
            return self._sets[name]
        except KeyError:
            raise UnknownBehaviorSet(name) from None

    def names(self) -> List[str]:
        return sorted(self._sets)

    def __contains__(self, name: object) -> bool:
        return name in self._sets

    def __len__(self) -> int:
        return len(self._sets)

    # ==================== Declaration ====================

    def declare(
        self,
        name: str,
        operations: Optional[Mapping[str, Operation]] = None,
        extends: Optional[str] = None
    ) -> BehaviorSet:
        """Build and register a set whose parent is already registered."""
        parent = self.get(extends) if extends is not None else None
        return self.register(BehaviorSet(name, operations, extends=parent))

    def declare_all(self, declarations: Mapping[str, Mapping[str, Any]]) -> List[BehaviorSet]:
        """
        Declare several sets at once, parents first.

        Each declaration is {"operations": {...}, "extends": "parent" | None}.
        A parent may be another declaration in the batch or an already
        registered set.

        Raises:
            CyclicExtension: the batch's extension graph loops
            UnknownBehaviorSet: a parent is neither declared nor registered
        """
        order: List[str] = []
        state: Dict[str, str] = {}  # name -> "visiting" | "done"

        def visit(name: str, path: List[str]) -> None:
            if state.get(name) == "done":
                return
            if state.get(name) == "visiting":
                raise CyclicExtension(path[path.index(name):] + [name])
            state[name] = "visiting"
            parent = declarations[name].get("extends")
            if parent is not None:
                if parent in declarations:
                    visit(parent, path + [name])
                elif parent not in self._sets:
                    raise UnknownBehaviorSet(parent)
            state[name] = "done"
            order.append(name)

        for name in declarations:
            visit(name, [])

        built = []
        for name in order:
            decl = declarations[name]
            built.append(self.declare(name, decl.get("operations"), decl.get("extends")))
        return built

    def load_yaml(
        self,
        path: Union[str, Path],
        catalog: Mapping[str, Operation]
    ) -> List[BehaviorSet]:
        """
        Declare sets from a YAML document.

        Format:
            user:
              operations: [increment, login]
            paid_user:
              extends: user
              operations: [increase_balance]

        Operation names are looked up in `catalog`.
        """
        with open(path) as f:
            document = yaml.safe_load(f) or {}

        declarations: Dict[str, Dict[str, Any]] = {}
        for kind_name, spec in document.items():
            spec = spec or {}
            operations = {}
            for op_name in spec.get("operations", []):
                if op_name not in catalog:
                    raise MissingOperation(op_name, kind_name)
                operations[op_name] = catalog[op_name]
            declarations[kind_name] = {
                "operations": operations,
                "extends": spec.get("extends"),
            }

        logger.info(f"Loaded {len(declarations)} behavior sets from {path}")
        return self.declare_all(declarations)
