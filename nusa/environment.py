from typing import Dict, Iterator, Optional

from nusa.errors import UndefinedVariableError
from nusa.types import Value


class Environment:
    """Maps names to values for one call activation (or the program).

    Variables and functions share this single namespace, so binding a
    name replaces whatever was there before regardless of its kind.
    There is no parent chain: a call starts from a full copy of the
    caller's environment instead.
    """
    def __init__(self, values: Optional[Dict[str, Value]] = None):
        self.values: Dict[str, Value] = dict(values) if values else {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, name: str) -> Value:
        if name in self.values:
            return self.values[name]
        raise UndefinedVariableError(name)

    def lookup(self, name: str) -> Optional[Value]:
        return self.values.get(name)

    def set(self, name: str, value: Value):
        self.values[name] = value

    def copy(self) -> 'Environment':
        # values are immutable, so a shallow copy is fully independent
        return Environment(self.values)
