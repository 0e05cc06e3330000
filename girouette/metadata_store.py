"""
Metadata Store
Per-controller key/value storage for route declarations
"""
import weakref
from typing import Any, Dict, Tuple


class MetadataStore:
    """
    Identity-keyed metadata bags, one per controller type

    Lookups use the exact identity of the target. There is no walk along
    the MRO: a subclass starts with an empty bag of its own, so declarations
    never leak between related classes.

    Targets are held weakly. A controller class that goes away (e.g. one
    defined inside a test function) takes its bag with it.

    Usage:
        store = MetadataStore()
        store.set(PostsController, 'resource', 'posts')
        store.append(PostsController, 'resourceMiddleware', rule)
        store.get(PostsController, 'resource')  # 'posts'
    """

    def __init__(self):
        # id(target) -> (weakref to target, bag)
        self._bags: Dict[int, Tuple[weakref.ref, Dict[str, Any]]] = {}

    def _bag(self, target: Any, create: bool = False) -> Dict[str, Any]:
        entry = self._bags.get(id(target))
        if entry is not None and entry[0]() is target:
            return entry[1]

        if not create:
            return {}

        key = id(target)
        bags = self._bags

        def forget(ref):
            # The id may already belong to a newer target
            current = bags.get(key)
            if current is not None and current[0] is ref:
                del bags[key]

        bag: Dict[str, Any] = {}
        bags[key] = (weakref.ref(target, forget), bag)
        return bag

    def set(self, target: Any, key: str, value: Any):
        """Overwrite the value stored under key"""
        self._bag(target, create=True)[key] = value

    def append(self, target: Any, key: str, value: Any):
        """
        Append a value to the list stored under key

        A new list is stored every time; callers holding the previous list
        never see it change.
        """
        bag = self._bag(target, create=True)
        bag[key] = [*bag.get(key, []), value]

    def get(self, target: Any, key: str, default: Any = None) -> Any:
        """Get the value stored under key, or default when unset"""
        return self._bag(target).get(key, default)

    def has(self, target: Any, key: str) -> bool:
        return key in self._bag(target)

    def all(self, target: Any) -> Dict[str, Any]:
        """Shallow copy of the whole bag"""
        return dict(self._bag(target))

    def clear(self):
        """Forget every bag (test isolation)"""
        self._bags.clear()

    def __contains__(self, target: Any) -> bool:
        entry = self._bags.get(id(target))
        return entry is not None and entry[0]() is target

    def __len__(self) -> int:
        return len(self._bags)

    def __repr__(self) -> str:
        return f"<MetadataStore ({len(self._bags)} controllers)>"


# Process-wide store used by the decorators and the registration engine
metadata = MetadataStore()
